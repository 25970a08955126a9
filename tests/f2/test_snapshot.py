"""Tests for loading debt inputs from storage (F2)."""

from datetime import timedelta

from studydebt.db.assignments_repository import insert_assignment
from studydebt.db.chapters_repository import insert_chapter
from studydebt.db.lectures_repository import insert_lecture, update_lecture
from studydebt.db.questions_repository import insert_question
from studydebt.db.snapshot import build_debt_report, load_debt_inputs


def test_empty_user(db, now):
    report = build_debt_report("nobody", now=now)
    assert report.total_debt_score == 0
    assert report.severity == "safe"


def test_load_inputs(db, now):
    lec = insert_lecture("alice", subject="OS", lec_num=1, duration=120)
    insert_chapter("alice", title="CLRS", chapter_num=1, page_start=1, page_end=20)
    insert_assignment("alice", title="Late", deadline_at=now - timedelta(days=1))
    insert_question("alice", "LECTURE", "q", lecture_id=lec.id)

    inputs = load_debt_inputs("alice")
    assert len(inputs.lectures) == 1
    assert len(inputs.chapters) == 1
    assert len(inputs.assignments) == 1
    assert inputs.unresolved_question_count == 1


def test_custom_question_counter(db, now):
    inputs = load_debt_inputs("alice", question_counter=lambda user_id: 5)
    assert inputs.unresolved_question_count == 5
    assert inputs.compute(now).total_debt_score == 10


def test_reference_report_from_storage(db, now):
    """1 overdue, 120 min unwatched, 20 pages, 4 questions -> 88."""
    lec = insert_lecture("alice", subject="OS", lec_num=1, duration=120)
    insert_chapter("alice", title="CLRS", chapter_num=1, page_start=1, page_end=20)
    insert_assignment("alice", title="Late", deadline_at=now - timedelta(days=1))
    for i in range(4):
        insert_question("alice", "LECTURE", f"q{i}", lecture_id=lec.id)

    report = build_debt_report("alice", now=now)
    assert report.total_debt_score == 88
    assert report.severity == "warning"


def test_other_users_do_not_leak(db, now):
    insert_lecture("bob", subject="OS", lec_num=1, duration=600)
    insert_assignment("bob", title="Late", deadline_at=now - timedelta(days=1))
    assert build_debt_report("alice", now=now).total_debt_score == 0


def test_watching_reduces_debt(db, now):
    lec = insert_lecture("alice", subject="OS", lec_num=1, duration=60)
    before = build_debt_report("alice", now=now)
    update_lecture("alice", lec.id, is_watched=True)
    after = build_debt_report("alice", now=now)
    assert before.total_debt_score == 10
    assert after.total_debt_score == 0
    assert after.unreviewed_lecture_minutes == 60
