"""
db.models - SQLAlchemy ORM declarations.

Tables
------
questions       - one row per unique (trimmed) question text.  The
                  UNIQUE constraint is the authoritative duplicate guard;
                  the importer's pre-check only exists for reporting.
answer_options  - exactly four rows per question, one per label a-d.
upload_runs     - audit trail, one row per CSV upload.  Never deleted.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, DateTime, Text, Boolean, ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship


RUN_PROCESSING = "processing"
RUN_COMPLETED  = "completed"
RUN_FAILED     = "failed"
TERMINAL_STATUSES = frozenset({RUN_COMPLETED, RUN_FAILED})


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class Base(DeclarativeBase):
    pass


class Question(Base):
    __tablename__ = "questions"

    id            = Column(Integer, primary_key=True, autoincrement=True)
    question_text = Column(Text, nullable=False, unique=True)

    created_at = Column(DateTime, default=_now, index=True)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    answers = relationship(
        "AnswerOption", back_populates="question",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="AnswerOption.option_label",
        passive_deletes=True,
    )

    @property
    def correct_label(self) -> str | None:
        for answer in self.answers:
            if answer.is_correct:
                return answer.option_label
        return None

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "questionText": self.question_text,
            "answers": [a.to_dict() for a in self.answers],
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class AnswerOption(Base):
    __tablename__ = "answer_options"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    question_id  = Column(Integer,
                          ForeignKey("questions.id", ondelete="CASCADE"),
                          nullable=False, index=True)
    option_label = Column(String(1), nullable=False)            # a | b | c | d
    answer_text  = Column(String(500), nullable=False)
    is_correct   = Column(Boolean, nullable=False, default=False)
    created_at   = Column(DateTime, default=_now)

    question = relationship("Question", back_populates="answers")

    __table_args__ = (
        UniqueConstraint("question_id", "option_label", name="uq_answer_label"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "questionId": self.question_id,
            "optionLabel": self.option_label,
            "answerText": self.answer_text,
            "isCorrect": bool(self.is_correct),
            "createdAt": _iso(self.created_at),
        }


class UploadRun(Base):
    __tablename__ = "upload_runs"

    id                 = Column(Integer, primary_key=True, autoincrement=True)
    filename           = Column(String(255), nullable=False)
    file_size          = Column(Integer, nullable=False, default=0)
    total_rows         = Column(Integer, nullable=False, default=0)
    successful_imports = Column(Integer, nullable=False, default=0)
    failed_imports     = Column(Integer, nullable=False, default=0)
    duplicate_count    = Column(Integer, nullable=False, default=0)
    status             = Column(String(20), nullable=False, default=RUN_PROCESSING)

    # JSON list of {"row": int, "error": str}; NULL when there were none
    error_summary = Column(Text, nullable=True)

    uploaded_at  = Column(DateTime, default=_now, index=True)
    completed_at = Column(DateTime, nullable=True)

    @property
    def errors(self) -> list[dict]:
        if not self.error_summary:
            return []
        try:
            return json.loads(self.error_summary)
        except ValueError:
            return []

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filename": self.filename,
            "fileSize": self.file_size,
            "totalRows": self.total_rows,
            "successfulImports": self.successful_imports,
            "failedImports": self.failed_imports,
            "duplicateCount": self.duplicate_count,
            "status": self.status,
            "errorSummary": self.errors,
            "uploadedAt": _iso(self.uploaded_at),
            "completedAt": _iso(self.completed_at),
        }
