"""
Trigger API

GET or POST /api/scrape runs one full scrape and returns the run report.
When a shared secret is configured the caller must send it either as
"Authorization: Bearer <secret>" or as ?secret=<secret>.
"""

import hmac
import logging
from typing import Optional

from flask import Blueprint, current_app, jsonify, request

__all__ = ["api", "authorized"]

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")


def _matches(candidate: Optional[str], secret: str) -> bool:
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


def authorized(secret: Optional[str]) -> bool:
    """Check the current request against the shared secret (empty = open)."""
    if not secret:
        return True

    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer ") and _matches(header[len("Bearer "):], secret):
        return True

    return _matches(request.args.get("secret"), secret)


@api.route("/scrape", methods=["GET", "POST"])
def scrape():
    """Run a scrape: 401 without the secret, 200 report, 500 on run failure."""
    if not authorized(current_app.config.get("SCRAPE_SECRET")):
        return jsonify({"error": "Unauthorized"}), 401

    runner = current_app.config["SCRAPE_RUNNER"]
    try:
        report = runner()
    except Exception as e:
        logger.exception("Scrape run failed")
        return jsonify({"ok": False, "error": str(e) or "Unknown error"}), 500

    return jsonify(report.to_dict())
