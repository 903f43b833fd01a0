"""
import_engine.report - Value objects passed between pipeline stages,
plus the structured result of an upload run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RowError:
    row: int            # 1-based input line (header = 1), 0 for file-level
    error: str

    def to_dict(self) -> dict:
        return {"row": self.row, "error": self.error}


@dataclass(frozen=True)
class ParsedRow:
    """One validated, trimmed CSV record."""
    question: str
    answer_a: str
    answer_b: str
    answer_c: str
    answer_d: str
    correct: str        # a | b | c | d

    def answer(self, label: str) -> str:
        return getattr(self, f"answer_{label}")


@dataclass(frozen=True)
class AnswerInput:
    option_label: str
    answer_text: str
    is_correct: bool


@dataclass(frozen=True)
class QuestionInput:
    question_text: str
    answers: tuple[AnswerInput, AnswerInput, AnswerInput, AnswerInput]


@dataclass
class ParseResult:
    rows: list[ParsedRow] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def add_error(self, row: int, error: str):
        self.errors.append(RowError(row, error))


@dataclass
class BatchResult:
    total_processed: int = 0
    successful_imports: int = 0
    duplicates: int = 0
    failures: int = 0
    errors: list[RowError] = field(default_factory=list)

    def add_duplicate(self, row: int, question_text: str, preview_len: int):
        self.duplicates += 1
        self.errors.append(
            RowError(row, f'Duplicate question: "{question_text[:preview_len]}..."')
        )

    def add_failure(self, row: int, cause: str):
        self.failures += 1
        self.errors.append(RowError(row, f"Failed to import: {cause}"))


@dataclass
class UploadReport:
    upload_id: int
    filename: str
    total_rows: int = 0
    successful_imports: int = 0
    failed_imports: int = 0
    duplicate_count: int = 0
    errors: list[RowError] = field(default_factory=list)
    status: str = "failed"

    def to_dict(self) -> dict:
        return {
            "uploadId": self.upload_id,
            "filename": self.filename,
            "totalRows": self.total_rows,
            "successfulImports": self.successful_imports,
            "failedImports": self.failed_imports,
            "duplicateCount": self.duplicate_count,
            "errors": [e.to_dict() for e in self.errors],
            "status": self.status,
        }

    def to_response(self) -> dict:
        """Shape returned by POST /api/upload."""
        return {
            "uploadId": self.upload_id,
            "filename": self.filename,
            "summary": {
                "totalRows": self.total_rows,
                "successfulImports": self.successful_imports,
                "duplicates": self.duplicate_count,
                "failures": self.failed_imports,
            },
            "errors": [e.to_dict() for e in self.errors],
            "status": self.status,
        }
