"""Reusable decorators for controllers."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from rhythm.core.auth.csrf import request_passes_csrf
from rhythm.core.utils.validation import error

F = TypeVar("F", bound=Callable)


def csrf_protected(fn: F) -> F:
    """Reject writes whose X-CSRF-Token header does not match the session."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        if not request_passes_csrf():
            return error("csrf_failed", 403)
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
