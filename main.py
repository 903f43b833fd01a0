#!/usr/bin/env python3
"""
QuizDB - Quiz question CSV importer
===================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

import logging

from flask import Flask

import config
from api import api_bp, STORE_KEY
from api import errors as api_errors
from db import init_db
from services import QuestionStore

# Multipart framing on top of the file itself
_MULTIPART_SLACK = 64 * 1024


def create_app(db_url: str | None = None, store: QuestionStore | None = None) -> Flask:
    """Flask application factory."""

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES + _MULTIPART_SLACK

    # ── Initialise database ─────────────────────────────────────────
    db_url = db_url or config.DB_URL
    init_db(db_url)
    app.extensions[STORE_KEY] = store or QuestionStore()

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── Error handlers ──────────────────────────────────────────────
    # Same JSON bodies inside and outside /api
    app.register_error_handler(404, api_errors.api_not_found)
    app.register_error_handler(413, api_errors.api_too_large)
    app.register_error_handler(500, api_errors.api_server_error)

    return app


def main():
    print("=" * 56)
    print("  QuizDB - Quiz question importer")
    print("=" * 56)

    app = create_app()
    count = app.extensions[STORE_KEY].count_questions()

    print(f"  Database: {config.DB_URL}")
    print(f"  Questions stored: {count}")
    print(f"\n  http://{config.HOST}:{config.PORT}/api/health")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
