# tests/test_student.py

import pytest

from core.config import NOT_ASSIGNED
from models.student import Student


def test_student_identity(sample_student):
    assert sample_student.id == "s001"
    assert sample_student.full_name == "Alice Smith"
    assert sample_student.email == "alice@example.com"
    assert sample_student.overall_grade is None


def test_student_generates_id_when_missing(clock):
    first = Student("Alice Smith", "alice@example.com", scheduler=clock)
    second = Student("Alice Smith", "alice@example.com", scheduler=clock)

    assert first.id
    assert first.id != second.id


def test_update_student_attributes(sample_student):
    sample_student.full_name = "Alice Jones"
    sample_student.email = "  Alice.Jones@Example.COM "

    assert sample_student.full_name == "Alice Jones"
    assert sample_student.email == "alice.jones@example.com"


@pytest.mark.parametrize("email", ["alice", "alice@", "a@b", "a b@example.com"])
def test_invalid_email_rejected(sample_student, email):
    with pytest.raises(ValueError):
        sample_student.email = email

    assert sample_student.email == "alice@example.com"


def test_notifications_use_current_name(sample_student, recorder):
    sample_student.update_status("A1")
    sample_student.full_name = "Alice Jones"
    sample_student.start_working("A1")

    assert recorder.events == [
        ("Alice Smith", "A1", "released"),
        ("Alice Jones", "A1", "working"),
    ]


def test_student_to_dict(sample_student, clock):
    sample_student.update_status("A1")
    sample_student.submit("A2")
    clock.run_until_idle()

    assert sample_student.to_dict() == {
        "id": "s001",
        "full_name": "Alice Smith",
        "email": "alice@example.com",
        "overall_grade": 80.0,
        "assignments": [
            {"name": "A1", "status": "released", "grade": None},
            {"name": "A2", "status": "pass", "grade": 80},
        ],
    }


def test_student_to_str(sample_student):
    assert sample_student.__str__() == "STUDENT: Alice Smith - (GRADE: [NO GRADE])"

    sample_student.update_status("A1")
    sample_student.update_status("A1", 72.5)

    assert sample_student.__str__() == "STUDENT: Alice Smith - (GRADE: 72.5)"


def test_query_unseen_assignment(sample_student, recorder):
    assert sample_student.query_status("A9") == NOT_ASSIGNED
    assert recorder.events == []
    assert "A9" not in sample_student.ledger
