from datetime import datetime, timedelta, timezone

import pytest

from db import RUN_COMPLETED, RUN_FAILED, RUN_PROCESSING
from import_engine.report import RowError
from services import QuestionStore, RunStateError, StorageUnavailableError
from tests.factories import QuestionFactory, UploadRunFactory


def test_find_by_text_matches_trimmed_text(store):
    QuestionFactory(question_text="Exact?")

    assert store.find_by_text("  Exact?  ") is not None
    assert store.find_by_text("exact?") is None


def test_get_question_returns_answers_in_label_order(store):
    question = QuestionFactory(correct="c")

    fetched = store.get_question(question.id)
    assert [a.option_label for a in fetched.answers] == ["a", "b", "c", "d"]
    assert fetched.correct_label == "c"
    assert store.get_question(question.id + 100) is None


def test_question_to_dict_shape(store):
    question = QuestionFactory(question_text="Shape?")
    data = store.get_question(question.id).to_dict()

    assert data["questionText"] == "Shape?"
    assert len(data["answers"]) == 4
    assert set(data["answers"][0]) == {
        "id", "questionId", "optionLabel", "answerText", "isCorrect", "createdAt",
    }
    assert data["answers"][0]["questionId"] == question.id


def test_list_questions_newest_first_with_pagination(store):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for n in range(5):
        QuestionFactory(question_text=f"Q{n}?", created_at=base + timedelta(minutes=n))

    page = store.list_questions(page=1, limit=2)
    assert page.total == 5
    assert page.total_pages == 3
    assert [q.question_text for q in page.items] == ["Q4?", "Q3?"]

    last = store.list_questions(page=3, limit=2)
    assert [q.question_text for q in last.items] == ["Q0?"]


def test_delete_all_questions_removes_answers(store):
    QuestionFactory.create_batch(3)

    assert store.delete_all_questions() == 3
    assert store.count_questions() == 0
    assert store.list_questions().items == []


def test_create_run_starts_processing(store):
    run = store.create_run("a.csv", 123, total_rows=4)
    assert not run.is_terminal

    assert run.id is not None
    assert run.status == RUN_PROCESSING
    assert run.total_rows == 4
    assert run.completed_at is None


def test_update_run_serialises_errors(store):
    run = UploadRunFactory()

    store.update_run(run.id, status=RUN_COMPLETED,
                     errors=[RowError(2, "oops"), RowError(5, "again")])

    updated = store.get_run(run.id)
    assert updated.status == RUN_COMPLETED
    assert updated.errors == [{"row": 2, "error": "oops"}, {"row": 5, "error": "again"}]
    assert updated.completed_at is not None
    assert updated.to_dict()["errorSummary"] == updated.errors


def test_finished_run_cannot_change(store):
    run = UploadRunFactory()
    store.update_run(run.id, status=RUN_FAILED, errors=[])
    assert store.get_run(run.id).is_terminal

    with pytest.raises(RunStateError):
        store.update_run(run.id, status=RUN_COMPLETED)
    assert store.get_run(run.id).status == RUN_FAILED


def test_update_missing_run(store):
    with pytest.raises(LookupError):
        store.update_run(999, status=RUN_FAILED)


def test_list_runs_newest_first(store):
    first = UploadRunFactory()
    second = UploadRunFactory()

    page = store.list_runs()
    assert [r.id for r in page.items] == [second.id, first.id]
    assert page.to_dict("uploads")["total"] == 2


def test_uninitialised_session_factory_is_unavailable():
    def _broken():
        raise RuntimeError("Database not initialised - call init_db() first")

    with pytest.raises(StorageUnavailableError):
        QuestionStore(session_factory=_broken).count_questions()
