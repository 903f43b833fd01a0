"""
services - Storage layer sitting between the import pipeline / API and DB.
"""

from services.errors import (                                   # noqa: F401
    StorageError,
    DuplicateQuestionError,
    PersistenceError,
    StorageUnavailableError,
    RunStateError,
)
from services.question_store import QuestionStore, Page          # noqa: F401
