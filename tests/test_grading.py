# tests/test_grading.py

import pytest

from core.grading import RandomGradeSource, SequenceGradeSource


def test_random_grades_in_range():
    source = RandomGradeSource(seed=7)
    grades = [source.next_grade() for _ in range(500)]

    assert all(0 <= g <= 100 for g in grades)
    assert all(isinstance(g, int) for g in grades)


def test_random_grades_repeat_with_seed():
    first = RandomGradeSource(seed=42)
    second = RandomGradeSource(seed=42)

    assert [first.next_grade() for _ in range(10)] == [
        second.next_grade() for _ in range(10)
    ]


def test_sequence_cycles():
    source = SequenceGradeSource([10, 90])

    assert [source.next_grade() for _ in range(5)] == [10, 90, 10, 90, 10]
    assert source.issued == 5


@pytest.mark.parametrize("grades", [[], [101], [-1, 50]])
def test_sequence_rejects_bad_grades(grades):
    with pytest.raises(ValueError):
        SequenceGradeSource(grades)
