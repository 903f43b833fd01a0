"""
import_engine.importer - Persist validated rows one at a time.

Rows are handled strictly in order.  Each row gets its own transaction,
so a failure on one row never rolls back or blocks another.  Only a
StorageUnavailableError escapes; everything else is counted and
reported against the row.
"""

from __future__ import annotations

import logging

from import_engine.duplicates import DuplicateChecker
from import_engine.field_map import DUPLICATE_PREVIEW_LEN, FIRST_DATA_ROW, OPTION_LABELS
from import_engine.report import AnswerInput, BatchResult, ParsedRow, QuestionInput
from services.errors import DuplicateQuestionError, StorageUnavailableError

logger = logging.getLogger(__name__)


def build_question_input(row: ParsedRow) -> QuestionInput:
    """Fan a row out into exactly four answers, one marked correct."""
    answers = tuple(
        AnswerInput(
            option_label=label,
            answer_text=row.answer(label),
            is_correct=(row.correct == label),
        )
        for label in OPTION_LABELS
    )
    return QuestionInput(question_text=row.question, answers=answers)


class QuestionImporter:

    def __init__(self, store, checker: DuplicateChecker | None = None):
        self._store = store
        self._checker = checker or DuplicateChecker(store)

    def import_batch(self, rows: list[ParsedRow]) -> BatchResult:
        """
        Import *rows* in order.

        Row numbers follow the parser's convention (index + 2), counted
        over the list passed in.
        """
        result = BatchResult(total_processed=len(rows))

        for idx, row in enumerate(rows):
            row_number = idx + FIRST_DATA_ROW
            data = build_question_input(row)

            try:
                if self._checker.is_duplicate(data.question_text):
                    logger.debug("Row %d: duplicate, skipped", row_number)
                    result.add_duplicate(row_number, data.question_text,
                                         DUPLICATE_PREVIEW_LEN)
                    continue

                self._store.create_question(data)
                result.successful_imports += 1

            except StorageUnavailableError:
                raise
            except DuplicateQuestionError:
                # Lost a race with another writer; the constraint caught it
                logger.debug("Row %d: duplicate rejected by storage", row_number)
                result.add_duplicate(row_number, data.question_text,
                                     DUPLICATE_PREVIEW_LEN)
            except Exception as exc:
                logger.warning("Row %d: import failed: %s", row_number, exc)
                result.add_failure(row_number, str(exc))

        return result
