"""
api.routes_upload - /api/upload endpoints.

POST accepts a multipart CSV upload (field name 'file') and runs the
import pipeline.  GET lists previous upload runs.
"""

import logging
import os

from flask import request, jsonify

import config
from api import api_bp, get_store, page_args
from import_engine import UploadOrchestrator

logger = logging.getLogger(__name__)


@api_bp.route("/upload", methods=["POST"])
def upload_csv():
    """
    POST /api/upload

    Multipart: field name 'file', .csv only, at most MAX_UPLOAD_BYTES.
    """
    f = request.files.get("file")
    if not f or not f.filename:
        return jsonify({
            "error": "No file uploaded",
            "message": 'Please provide a CSV file in the "file" field',
        }), 400

    ext = os.path.splitext(f.filename)[1].lower()
    if ext not in config.ALLOWED_EXTENSIONS:
        return jsonify({
            "error": "Invalid file type",
            "message": "Only CSV files are allowed",
        }), 400

    content = f.read()
    if len(content) > config.MAX_UPLOAD_BYTES:
        return jsonify({
            "error": "File too large",
            "message": (f"File size exceeds {config.MAX_UPLOAD_BYTES // (1024 * 1024)}MB "
                        f"limit ({round(len(content) / 1024)}KB)"),
        }), 400

    try:
        report = UploadOrchestrator(get_store()).process(f.filename, content, len(content))
    except Exception as exc:
        logger.exception("Upload processing failed for %s", f.filename)
        return jsonify({
            "error": "Upload processing failed",
            "message": str(exc),
        }), 500

    return jsonify(report.to_response())


@api_bp.route("/upload")
def upload_history():
    """GET /api/upload?page=1&limit=20 - newest runs first."""
    page, limit = page_args()
    result = get_store().list_runs(page, limit)
    return jsonify(result.to_dict("uploads"))
