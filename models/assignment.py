# models/assignment.py

"""
The AssignmentRecord model tracks one student's progress on one assignment.

A record is created in the `released` status the first time a ledger hears about the
assignment name, and moves through the statuses in `AssignmentStatus` as the student
works, submits, is reminded, and is graded.

Notes:
- `grade` is set if and only if the status is `pass` or `fail`.
- Grades strictly above `PASS_THRESHOLD` pass; everything else fails.
- Records are never destroyed; a ledger only ever adds them.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from core.config import MAX_GRADE, MIN_GRADE, PASS_THRESHOLD


class AssignmentStatus(str, Enum):
    RELEASED = "released"
    WORKING = "working"
    SUBMITTED = "submitted"
    FINAL_REMINDER = "final_reminder"
    PASS = "pass"
    FAIL = "fail"


GRADED_STATUSES = frozenset({AssignmentStatus.PASS, AssignmentStatus.FAIL})

# statuses that still count as outstanding work
OUTSTANDING_STATUSES = frozenset(
    {
        AssignmentStatus.RELEASED,
        AssignmentStatus.WORKING,
        AssignmentStatus.FINAL_REMINDER,
    }
)


class AssignmentRecord:

    def __init__(self, name: str):
        self._name = name
        self._status: AssignmentStatus = AssignmentStatus.RELEASED
        self._grade: float | None = None

    # === properties ===

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> AssignmentStatus:
        return self._status

    @status.setter
    def status(self, status: AssignmentStatus) -> None:
        """
        Moves the record to a non-graded status, dropping any previous grade.

        Raises:
            ValueError: If `status` is `pass` or `fail`; those are only reachable through `set_grade()`.
        """
        status = AssignmentStatus(status)

        if status in GRADED_STATUSES:
            raise ValueError("Graded statuses can only be reached through set_grade().")

        self._status = status
        self._grade = None

    @property
    def grade(self) -> float | None:
        return self._grade

    @property
    def is_graded(self) -> bool:
        return self._grade is not None

    @property
    def label(self) -> str:
        if self._status is AssignmentStatus.PASS:
            return "Pass"

        if self._status is AssignmentStatus.FAIL:
            return "Fail"

        return self._status.value

    # === data manipulators ===

    def set_grade(self, grade: Any) -> AssignmentStatus:
        """
        Records a grade and derives the pass/fail status from it.

        Args:
            grade (Any): The grade to record; validated by `validate_grade_input()`.

        Returns:
            AssignmentStatus: The derived status, `PASS` or `FAIL`.

        Raises:
            TypeError: If the grade is not a number.
            ValueError: If the grade is non-finite or outside the allowed range.
        """
        grade = AssignmentRecord.validate_grade_input(grade)

        self._grade = grade
        self._status = (
            AssignmentStatus.PASS if grade > PASS_THRESHOLD else AssignmentStatus.FAIL
        )

        return self._status

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "status": self._status.value,
            "grade": self._grade,
        }

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"AssignmentRecord({self._name}, {self._status.value}, {self._grade})"

    def __str__(self) -> str:
        return f"ASSIGNMENT: {self._name} - ({self.label})"

    # === data validators ===

    @staticmethod
    def validate_grade_input(grade: Any) -> float:
        """
        Validates a grade value.

        Accepts ints and floats (but not bools), and then:
            - Ensures the number is finite.
            - Ensures it lies within `MIN_GRADE` and `MAX_GRADE`, inclusive.

        Args:
            grade (Any): The input value to validate.

        Returns:
            The grade, unchanged.

        Raises:
            TypeError: If the input is not an int or float.
            ValueError: If the input is non-finite or out of range.
        """
        if isinstance(grade, bool) or not isinstance(grade, (int, float)):
            raise TypeError("Invalid input. Grade must be a number.")

        if not math.isfinite(grade):
            raise ValueError("Invalid input. Grade must be a finite number.")

        if not MIN_GRADE <= grade <= MAX_GRADE:
            raise ValueError(
                f"Invalid input. Grade must be between {MIN_GRADE} and {MAX_GRADE}."
            )

        return grade
