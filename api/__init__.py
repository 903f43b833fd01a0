"""
api - REST API layer.

All route modules register on a single Flask Blueprint
with url_prefix /api.
"""

from flask import Blueprint, current_app, request

import config

api_bp = Blueprint("api", __name__, url_prefix="/api")

STORE_KEY = "quizdb.store"


def get_store():
    """The QuestionStore registered by create_app()."""
    return current_app.extensions[STORE_KEY]


def page_args() -> tuple[int, int]:
    """(page, limit) from the query string; junk falls back to defaults."""
    try:
        page = int(request.args.get("page", 1))
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(request.args.get("limit", config.DEFAULT_PAGE_SIZE))
    except (TypeError, ValueError):
        limit = config.DEFAULT_PAGE_SIZE
    if page < 1:
        page = 1
    if limit < 1:
        limit = config.DEFAULT_PAGE_SIZE
    return page, min(limit, config.MAX_PAGE_SIZE)


# Import route modules so their @api_bp decorators execute
from api import routes_health      # noqa: F401, E402
from api import routes_upload      # noqa: F401, E402
from api import routes_questions   # noqa: F401, E402
from api import errors             # noqa: F401, E402
