"""
import_engine - CSV question upload pipeline.

Public API:
    process_upload(filename, content, file_size) → UploadReport
    UploadOrchestrator(store).process(...)       → UploadReport
    parse_csv(content)                           → ParseResult
    QuestionImporter(store).import_batch(rows)   → BatchResult
"""

from import_engine.csv_parser import parse_csv, CSVStructureError        # noqa: F401
from import_engine.duplicates import DuplicateChecker                    # noqa: F401
from import_engine.importer import QuestionImporter, build_question_input  # noqa: F401
from import_engine.orchestrator import UploadOrchestrator, process_upload  # noqa: F401
from import_engine.report import (                                       # noqa: F401
    BatchResult,
    ParsedRow,
    ParseResult,
    RowError,
    UploadReport,
)
from import_engine.row_validator import validate_row, normalize_row      # noqa: F401
