"""
services.question_store - Storage collaborator for questions and
upload runs.

Every public method opens its own session and closes it before
returning, so one failed write can never leave a half-finished
transaction behind for the next caller.  SQLAlchemy exceptions are
translated into the StorageError family and never leak out of here.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from sqlalchemy import func, select
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, InterfaceError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.orm import Session

from db.engine import get_session
from db.models import (
    AnswerOption, Question, UploadRun, RUN_PROCESSING,
)
from services.errors import (
    DuplicateQuestionError,
    PersistenceError,
    RunStateError,
    StorageError,
    StorageUnavailableError,
)

if TYPE_CHECKING:
    from import_engine.report import QuestionInput

logger = logging.getLogger(__name__)


def _is_unavailable(exc: SQLAlchemyError) -> bool:
    if isinstance(exc, (OperationalError, InterfaceError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


def _is_question_text_violation(exc: IntegrityError) -> bool:
    msg = str(exc.orig).lower()
    return "question_text" in msg or "questions_question_text_key" in msg


@dataclass
class Page:
    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self, key: str) -> dict:
        return {
            key: [item.to_dict() for item in self.items],
            "total": self.total,
            "page": self.page,
            "totalPages": self.total_pages,
        }


class QuestionStore:

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session_factory = session_factory

    def _session(self) -> Session:
        try:
            return self._session_factory()
        except RuntimeError as exc:
            raise StorageUnavailableError(str(exc)) from exc

    # ── Questions ──────────────────────────────────────────────────────

    def find_by_text(self, question_text: str) -> Question | None:
        """Exact match on trimmed question text."""
        session = self._session()
        try:
            stmt = select(Question).where(Question.question_text == question_text.strip())
            return session.scalars(stmt).first()
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc
        finally:
            session.close()

    def create_question(self, data: QuestionInput) -> Question:
        """
        Insert one question and its four answers in a single transaction.
        Either all five rows are committed or none are.
        """
        session = self._session()
        try:
            question = Question(question_text=data.question_text.strip())
            for answer in data.answers:
                question.answers.append(AnswerOption(
                    option_label=answer.option_label,
                    answer_text=answer.answer_text.strip(),
                    is_correct=answer.is_correct,
                ))
            session.add(question)
            session.commit()
            return question
        except SQLAlchemyError as exc:
            session.rollback()
            raise self._translate(exc) from exc
        finally:
            session.close()

    def get_question(self, question_id: int) -> Question | None:
        session = self._session()
        try:
            return session.get(Question, question_id)
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc
        finally:
            session.close()

    def list_questions(self, page: int = 1, limit: int = 20) -> Page:
        """Newest first; answers come back ordered a → d."""
        session = self._session()
        try:
            total = session.scalar(select(func.count(Question.id))) or 0
            stmt = (
                select(Question)
                .order_by(Question.created_at.desc(), Question.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            items = list(session.scalars(stmt))
            return Page(items=items, total=total, page=page, limit=limit)
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc
        finally:
            session.close()

    def count_questions(self) -> int:
        session = self._session()
        try:
            return session.scalar(select(func.count(Question.id))) or 0
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc
        finally:
            session.close()

    def delete_all_questions(self) -> int:
        """Delete every question (and its answers).  Returns how many."""
        session = self._session()
        try:
            count = session.query(Question).count()
            session.query(AnswerOption).delete(synchronize_session=False)
            session.query(Question).delete(synchronize_session=False)
            session.commit()
            logger.info("Deleted %d questions", count)
            return count
        except SQLAlchemyError as exc:
            session.rollback()
            raise self._translate(exc) from exc
        finally:
            session.close()

    # ── Upload runs ────────────────────────────────────────────────────

    def create_run(self, filename: str, file_size: int, total_rows: int = 0) -> UploadRun:
        session = self._session()
        try:
            run = UploadRun(
                filename=filename,
                file_size=file_size,
                total_rows=total_rows,
                status=RUN_PROCESSING,
            )
            session.add(run)
            session.commit()
            return run
        except SQLAlchemyError as exc:
            session.rollback()
            raise self._translate(exc) from exc
        finally:
            session.close()

    def update_run(self, run_id: int, **updates) -> UploadRun:
        """
        Apply *updates* to an upload run.  ``errors`` (a list of RowError)
        is serialised into error_summary; an empty list stores NULL.
        Finished runs are immutable.
        """
        errors = updates.pop("errors", None)
        session = self._session()
        try:
            run = session.get(UploadRun, run_id)
            if run is None:
                raise LookupError(f"Upload run {run_id} not found")
            if run.is_terminal:
                raise RunStateError(
                    f"Upload run {run_id} is already {run.status}"
                )
            for attr, value in updates.items():
                setattr(run, attr, value)
            if errors is not None:
                run.error_summary = (
                    json.dumps([e.to_dict() for e in errors], ensure_ascii=False)
                    if errors else None
                )
            if run.is_terminal and run.completed_at is None:
                run.completed_at = datetime.now(timezone.utc)
            session.commit()
            return run
        except SQLAlchemyError as exc:
            session.rollback()
            raise self._translate(exc) from exc
        finally:
            session.close()

    def get_run(self, run_id: int) -> UploadRun | None:
        session = self._session()
        try:
            return session.get(UploadRun, run_id)
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc
        finally:
            session.close()

    def list_runs(self, page: int = 1, limit: int = 20) -> Page:
        session = self._session()
        try:
            total = session.scalar(select(func.count(UploadRun.id))) or 0
            stmt = (
                select(UploadRun)
                .order_by(UploadRun.uploaded_at.desc(), UploadRun.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            items = list(session.scalars(stmt))
            return Page(items=items, total=total, page=page, limit=limit)
        except SQLAlchemyError as exc:
            raise self._translate(exc) from exc
        finally:
            session.close()

    # ── Private helpers ────────────────────────────────────────────────

    @staticmethod
    def _translate(exc: SQLAlchemyError) -> StorageError:
        if isinstance(exc, IntegrityError):
            if _is_question_text_violation(exc):
                return DuplicateQuestionError("Question text already exists")
            return PersistenceError(str(exc.orig))
        if _is_unavailable(exc):
            return StorageUnavailableError(str(getattr(exc, "orig", exc)))
        return PersistenceError(str(exc))
