"""Double-submit CSRF check for the JSON API.

The token lives in the signed session cookie; clients read it from the auth
responses and echo it back in the ``X-CSRF-Token`` header on every write.
"""

from __future__ import annotations

import hmac
import secrets

from flask import current_app, request, session

SESSION_KEY = "_csrf_token"
HEADER = "X-CSRF-Token"


def generate_csrf_token() -> str:
    token = session.get(SESSION_KEY)
    if token is None:
        token = session[SESSION_KEY] = secrets.token_urlsafe(32)
    return token


def request_passes_csrf() -> bool:
    """True when checks are disabled or the header matches the session token."""
    if not current_app.config.get("WTF_CSRF_ENABLED", True):
        return True
    sent = request.headers.get(HEADER, "")
    expected = session.get(SESSION_KEY)
    return bool(sent and expected) and hmac.compare_digest(sent, expected)
