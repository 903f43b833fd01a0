"""
api.routes_health - /api/health liveness probe.
"""

from datetime import datetime, timezone

from flask import jsonify

from api import api_bp


@api_bp.route("/health")
def health():
    return jsonify({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })
