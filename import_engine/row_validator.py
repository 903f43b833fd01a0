"""
import_engine.row_validator - Validate and normalise one CSV record.

Pure functions: no database access.  Every violation in a record is
reported, so the uploader can fix a row in one pass.
"""

from __future__ import annotations

from import_engine.field_map import (
    ANSWER_COLUMNS,
    ANSWER_MAX_LEN,
    OPTION_LABELS,
    QUESTION_MAX_LEN,
)
from import_engine.report import ParsedRow


def _clean(value) -> str:
    return (value or "").strip()


def validate_row(record: dict) -> list[str]:
    """Return the list of violations for *record* (empty when valid)."""
    errors: list[str] = []

    question = _clean(record.get("question"))
    if not question:
        errors.append("Question text cannot be empty")
    elif len(question) > QUESTION_MAX_LEN:
        errors.append(f"Question text exceeds {QUESTION_MAX_LEN} characters")

    for column in ANSWER_COLUMNS.values():
        answer = _clean(record.get(column))
        if not answer:
            errors.append(f"{column} cannot be empty")
        elif len(answer) > ANSWER_MAX_LEN:
            errors.append(f"{column} exceeds {ANSWER_MAX_LEN} characters")

    raw_correct = record.get("correct") or ""
    if not raw_correct.strip():
        errors.append("Correct answer designation cannot be empty")
    elif raw_correct.strip().lower() not in OPTION_LABELS:
        errors.append(
            "Correct answer must be 'a', 'b', 'c', or 'd' "
            f"(got '{raw_correct}')"
        )

    return errors


def normalize_row(record: dict) -> ParsedRow:
    """Trim every field and lower-case the correct label.

    Only call this on a record that passed validate_row().
    """
    return ParsedRow(
        question=_clean(record.get("question")),
        answer_a=_clean(record.get("answer_a")),
        answer_b=_clean(record.get("answer_b")),
        answer_c=_clean(record.get("answer_c")),
        answer_d=_clean(record.get("answer_d")),
        correct=_clean(record.get("correct")).lower(),
    )
