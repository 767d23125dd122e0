# tests/test_assignment.py

import math

import pytest

from models.assignment import (
    GRADED_STATUSES,
    OUTSTANDING_STATUSES,
    AssignmentRecord,
    AssignmentStatus,
)


def test_new_record_is_released():
    record = AssignmentRecord("A1")

    assert record.name == "A1"
    assert record.status is AssignmentStatus.RELEASED
    assert record.grade is None
    assert not record.is_graded


def test_grade_boundary():
    record = AssignmentRecord("A1")

    assert record.set_grade(50) is AssignmentStatus.FAIL
    assert record.label == "Fail"

    assert record.set_grade(51) is AssignmentStatus.PASS
    assert record.label == "Pass"


@pytest.mark.parametrize("grade", [0, 12.5, 50])
def test_grades_at_or_below_threshold_fail(grade):
    record = AssignmentRecord("A1")
    record.set_grade(grade)

    assert record.status is AssignmentStatus.FAIL
    assert record.grade == grade


@pytest.mark.parametrize("grade", [50.5, 75, 100])
def test_grades_above_threshold_pass(grade):
    record = AssignmentRecord("A1")
    record.set_grade(grade)

    assert record.status is AssignmentStatus.PASS


@pytest.mark.parametrize("grade", ["80", None, True, [80]])
def test_non_numeric_grade_rejected(grade):
    record = AssignmentRecord("A1")

    with pytest.raises(TypeError):
        record.set_grade(grade)

    assert record.status is AssignmentStatus.RELEASED
    assert record.grade is None


@pytest.mark.parametrize("grade", [-1, 101, math.inf, math.nan])
def test_out_of_range_grade_rejected(grade):
    record = AssignmentRecord("A1")

    with pytest.raises(ValueError):
        record.set_grade(grade)

    assert record.grade is None


def test_moving_off_graded_status_drops_grade():
    record = AssignmentRecord("A1")
    record.set_grade(90)

    record.status = AssignmentStatus.SUBMITTED

    assert record.status is AssignmentStatus.SUBMITTED
    assert record.grade is None


def test_graded_status_cannot_be_set_directly():
    record = AssignmentRecord("A1")

    with pytest.raises(ValueError):
        record.status = AssignmentStatus.PASS


def test_intermediate_labels_are_verbatim():
    record = AssignmentRecord("A1")
    assert record.label == "released"

    record.status = AssignmentStatus.FINAL_REMINDER
    assert record.label == "final_reminder"


def test_assignment_to_dict():
    record = AssignmentRecord("A1")
    record.set_grade(64)

    assert record.to_dict() == {"name": "A1", "status": "pass", "grade": 64}


def test_assignment_to_str():
    record = AssignmentRecord("A1")

    assert record.__str__() == "ASSIGNMENT: A1 - (released)"


def test_outstanding_and_graded_statuses_partition_the_lifecycle():
    assert OUTSTANDING_STATUSES == {
        AssignmentStatus.RELEASED,
        AssignmentStatus.WORKING,
        AssignmentStatus.FINAL_REMINDER,
    }
    assert OUTSTANDING_STATUSES.isdisjoint(GRADED_STATUSES)
    assert AssignmentStatus.SUBMITTED not in OUTSTANDING_STATUSES | GRADED_STATUSES
