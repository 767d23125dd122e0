# models/roster.py

"""
The ClassRoster holds the students of one class and drives bulk operations across them.

Students are kept in insertion order and looked up by full name (case-insensitive). The
roster never reaches into a student's ledger internals; it only uses the student's
roster-facing methods (`update_status`, `receive_reminder`, and so on).

Manipulator and lookup methods return a `Response`, so callers branch on `success`
instead of catching exceptions.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from core.response import ErrorCode, Response
from models.assignment import OUTSTANDING_STATUSES
from models.student import Student

logger = logging.getLogger(__name__)


class ClassRoster:

    def __init__(self, students: Iterable[Student] | None = None):
        self._students: list[Student] = []

        for student in students or []:
            self.add_student(student)

    # === properties ===

    @property
    def students(self) -> list[Student]:
        return list(self._students)

    # === data accessors ===

    def find_student_by_name(self, full_name: str) -> Response:
        """
        Looks up a student by full name.

        Args:
            full_name (str): The name to match, compared case-insensitively.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if a matching student exists.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no student matches.
                - status_code (int | None):
                    - 200 on success
                    - 404 if no student matches
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The matching student.
        """
        student = self._find(full_name)

        if student is None:
            return Response.fail(
                detail=f"No student named '{full_name}' is on the roster.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(data={"record": student})

    def find_outstanding_assignments(self, assignment_name: str | None = None) -> Response:
        """
        Lists the students who still owe work.

        Args:
            assignment_name (str | None):
                - If given, only this assignment is considered, and students who have
                  never seen it count as outstanding.
                - If None, a student is outstanding if any of their assignments is.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True for this read-only lookup.
                - data (dict | None): Payload with the following keys:
                    - "records" (list[str]): Full names of outstanding students, in roster order.

        Notes:
            - Outstanding statuses are `released`, `working`, and `final_reminder`.
        """
        if assignment_name is not None:
            names = [
                s.full_name
                for s in self._students
                if self._is_outstanding(s, assignment_name)
            ]

        else:
            names = [
                s.full_name
                for s in self._students
                if s.ledger.outstanding_assignments()
            ]

        return Response.succeed(data={"records": names})

    # === data manipulators ===

    def add_student(self, student: Student) -> Response:
        """
        Adds a `Student` to the end of the roster.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the student was added.
                    - False if the object is not a `Student` or the name is already taken.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if the object is not a `Student`.
                    - `ErrorCode.VALIDATION_FAILED` if the name is not unique.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The added student.
        """
        if not isinstance(student, Student):
            return Response.fail(
                detail=f"Expected a Student, got {type(student).__name__}.",
                error=ErrorCode.INVALID_INPUT,
            )

        try:
            self.require_unique_student_name(student.full_name)

        except ValueError as e:
            return Response.fail(
                detail=f"Unique record validation failed: {e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        self._students.append(student)

        logger.info("%s has been added to the classlist.", student.full_name)

        return Response.succeed(
            detail="Student successfully added to the roster.",
            data={"record": student},
        )

    def remove_student(self, student_or_name: Student | str) -> Response:
        """
        Removes a student, given either the `Student` object or their full name.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if a student was removed.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no matching student is on the roster.
                - status_code (int | None):
                    - 200 on success
                    - 404 if no student matches

        Notes:
            - The removed student's pending deferred transitions are left alone; the
              student keeps working independently of the roster.
        """
        name = (
            student_or_name
            if isinstance(student_or_name, str)
            else student_or_name.full_name
        )

        student = self._find(name)

        if student is None:
            return Response.fail(
                detail=f"No student named '{name}' is on the roster.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        self._students.remove(student)

        logger.info("%s has been removed from the classlist.", student.full_name)

        return Response.succeed(detail="Student successfully removed from the roster.")

    # --- bulk operations ---

    def release_assignments(self, assignment_names: Iterable[str]) -> Response:
        """
        Releases every named assignment to every student on the roster.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True; releasing is idempotent per student.
                - data (dict | None): Payload with the following keys:
                    - "released" (list[str]): The assignment names, in release order.
        """
        assignment_names = list(assignment_names)

        for assignment_name in assignment_names:
            self._release(assignment_name)

        return Response.succeed(data={"released": assignment_names})

    async def release_assignments_concurrently(
        self, assignment_names: Iterable[str]
    ) -> Response:
        """
        Releases every named assignment as its own task and waits for all of them.

        Each task yields once before releasing, so all releases are started before any of
        them runs. Students' ledgers are independent, so no locking is required.

        Returns:
            Response: Same contract as `release_assignments()`.
        """
        assignment_names = list(assignment_names)

        async def release_one(assignment_name: str) -> None:
            await asyncio.sleep(0)
            self._release(assignment_name)

        await asyncio.gather(*(release_one(name) for name in assignment_names))

        return Response.succeed(data={"released": assignment_names})

    def send_reminder(self, assignment_name: str) -> Response:
        """
        Sends a final reminder for one assignment to every student who still owes it.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True.
                - data (dict | None): Payload with the following keys:
                    - "records" (list[str]): Full names of the students reminded.

        Notes:
            - Receiving a reminder submits the assignment immediately, so each reminded
              student ends up `submitted` with grading scheduled.
        """
        outstanding = self.find_outstanding_assignments(assignment_name).data["records"]

        for name in outstanding:
            student = self._find(name)

            if student is not None:
                student.receive_reminder(assignment_name)

        return Response.succeed(data={"records": outstanding})

    # === data validators ===

    def require_unique_student_name(self, full_name: str) -> None:
        """
        Validates that no student on the roster shares the given name.

        Raises:
            ValueError: If a student with the same normalized name already exists.
        """
        if self._find(full_name) is not None:
            raise ValueError(f"A student named '{full_name}' is already on the roster.")

    # === helper methods ===

    def _find(self, full_name: str) -> Student | None:
        normalized = self._normalize(full_name)

        return next(
            (s for s in self._students if self._normalize(s.full_name) == normalized),
            None,
        )

    def _release(self, assignment_name: str) -> None:
        for student in self._students:
            student.update_status(assignment_name)

    def _is_outstanding(self, student: Student, assignment_name: str) -> bool:
        record = student.ledger.find(assignment_name)

        if record is None:
            return True

        return record.status in OUTSTANDING_STATUSES

    def _normalize(self, input: str) -> str:
        return input.strip().lower()

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._students)

    def __iter__(self):
        return iter(self.students)
