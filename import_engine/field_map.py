"""
import_engine.field_map - CSV column layout and field limits.

The header must contain every column in REQUIRED_COLUMNS (exact,
case-sensitive names).  Any additional columns are ignored.
"""

REQUIRED_COLUMNS: tuple[str, ...] = (
    "question",
    "answer_a",
    "answer_b",
    "answer_c",
    "answer_d",
    "correct",
)

OPTION_LABELS: tuple[str, ...] = ("a", "b", "c", "d")

# option label  →  CSV column
ANSWER_COLUMNS: dict[str, str] = {label: f"answer_{label}" for label in OPTION_LABELS}

QUESTION_MAX_LEN = 2000
ANSWER_MAX_LEN   = 500

# Row 1 is the header, so record index 0 is line 2
FIRST_DATA_ROW = 2

# Characters of question text echoed in a duplicate message
DUPLICATE_PREVIEW_LEN = 50
