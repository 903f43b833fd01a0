"""
db - Database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    Question, AnswerOption, UploadRun → ORM models
"""

from db.engine import init_db, get_session                  # noqa: F401
from db.models import (                                     # noqa: F401
    Base,
    Question,
    AnswerOption,
    UploadRun,
    RUN_PROCESSING,
    RUN_COMPLETED,
    RUN_FAILED,
    TERMINAL_STATUSES,
)
