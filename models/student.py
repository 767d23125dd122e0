# models/student.py

"""
Represents a student in a class and the surface the roster talks to.

Stores identifying information (full name, email, and a unique ID) and owns a `Ledger`
with the student's assignment records.

Includes functionality for:
- Validating and normalizing email input
- Releasing, starting, submitting, reminding, and grading assignments (delegated to the ledger)
- Querying an assignment's status label and the student's overall grade

Notes:
- Without an explicit scheduler, deferred transitions run on the asyncio event loop that
  is running when they are scheduled. Called outside a running loop, `start_working`,
  `submit` and `receive_reminder` log a warning and leave the assignment untouched.
- Without a dispatcher, transitions still happen but nobody is notified.
"""

from __future__ import annotations

import re
from typing import Any

from core.config import DEFERRED_TRANSITION_DELAY
from core.dispatcher import Dispatcher
from core.formatters import format_grade
from core.grading import GradeSource
from core.scheduler import AsyncioScheduler, TransitionScheduler
from core.utils import generate_uuid
from models.ledger import Ledger


class Student:

    def __init__(
        self,
        full_name: str,
        email: str,
        dispatcher: Dispatcher | None = None,
        scheduler: TransitionScheduler | None = None,
        grade_source: GradeSource | None = None,
        delay: float = DEFERRED_TRANSITION_DELAY,
        id: str | None = None,
    ):
        self._id: str = id or generate_uuid()
        self._full_name: str = full_name
        self._email: str = email
        self._ledger = Ledger(
            owner=self,
            scheduler=scheduler or AsyncioScheduler(),
            dispatcher=dispatcher,
            grade_source=grade_source,
            delay=delay,
        )

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def full_name(self) -> str:
        return self._full_name

    @full_name.setter
    def full_name(self, full_name: str) -> None:
        self._full_name = full_name

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, email: str) -> None:
        self._email = Student.validate_email_input(email)

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def overall_grade(self) -> float | None:
        return self._ledger.overall_grade

    def get_grade(self) -> float | None:
        return self._ledger.overall_grade

    # === roster-facing surface ===

    def update_status(self, assignment_name: str, grade: Any = None) -> None:
        self._ledger.update_status(assignment_name, grade)

    def start_working(self, assignment_name: str) -> None:
        self._ledger.start_working(assignment_name)

    def submit(self, assignment_name: str) -> None:
        self._ledger.submit(assignment_name)

    def receive_reminder(self, assignment_name: str) -> None:
        self._ledger.receive_reminder(assignment_name)

    def query_status(self, assignment_name: str) -> str:
        return self._ledger.query_status(assignment_name)

    # === snapshots ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "full_name": self._full_name,
            "email": self._email,
            "overall_grade": self.overall_grade,
            "assignments": [r.to_dict() for r in self._ledger.records.values()],
        }

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._full_name}, {self._email})"

    def __str__(self) -> str:
        return f"STUDENT: {self._full_name} - (GRADE: {format_grade(self.overall_grade)})"

    # === data validators ===

    @staticmethod
    def validate_email_input(email: str) -> str:
        """
        Validates and normalizes a Student email address.

        Normalizes the input by stripping whitespace and converting to lowercase.
        Ensures the email:
            - Contains exactly one '@' symbol
            - Has non-whitespace characters on both sides of the '@'
            - Contains at least one '.' after the '@' to separate the domain and TLD

        Args:
            email: The input email string to validate.

        Returns:
            A normalized, lowercase version of the email if valid.

        Raises:
            ValueError: If the email does not conform to the expected format.
        """
        email = email.strip().lower()
        if not re.fullmatch(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email):
            raise ValueError(
                "Invalid input. Email must be a valid address with one @ and a domain."
            )
        return email
