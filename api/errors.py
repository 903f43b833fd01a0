"""
api.errors - JSON error handlers, shared by the API blueprint and the app.
"""

from flask import jsonify

import config
from api import api_bp


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(413)
def api_too_large(_e):
    limit_kb = config.MAX_UPLOAD_BYTES // 1024
    return jsonify({
        "error": "File too large",
        "message": f"File size exceeds {limit_kb}KB limit",
    }), 413


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500
