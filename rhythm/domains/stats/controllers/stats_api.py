"""Stats dashboard controller."""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from rhythm.core.utils.clock import today
from rhythm.core.utils.validation import error
from rhythm.domains.stats import services as stats_services
from rhythm.domains.stats.composer import PERIODS
from rhythm.extensions import db

logger = logging.getLogger(__name__)

stats_api_bp = Blueprint("stats_api", __name__)


@stats_api_bp.get("")
@login_required
def stats_report():
    period = request.args.get("period", "week")
    if period not in PERIODS:
        return error("validation_error", 400)
    try:
        report = stats_services.compose_report(current_user.id, period, today())
    except Exception:
        logger.exception("Stats report failed for user %s (%s)", current_user.id, period)
        db.session.rollback()
        return error("stats_failed", 500)
    return jsonify({"ok": True, **report})
