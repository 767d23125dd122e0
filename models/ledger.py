# models/ledger.py

"""
The Ledger owns a student's assignment records and runs the assignment state machine.

Every public operation mutates at most one `AssignmentRecord`, notifies the dispatcher
synchronously for each status it passes through, and may arm a deferred self-transition
with the scheduler:

    released --start_working--> working --(delay)--> submitted --(delay)--> pass | fail
                                   |                     ^
                          receive_reminder --> final_reminder

Deferred transitions are keyed by `(student id, assignment name)`, so each record has at
most one pending transition. Every deferred callback re-checks the record's status before
acting; a callback that finds the record has moved on does nothing.

Anomalies never raise out of the ledger: unknown assignments answer with the
`NOT_ASSIGNED` sentinel, invalid grades are logged and ignored, and a missing dispatcher
simply means nobody is notified.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from core.config import DEFERRED_TRANSITION_DELAY, NOT_ASSIGNED
from core.dispatcher import Dispatcher
from core.grading import GradeSource, RandomGradeSource
from core.scheduler import TransitionScheduler
from core.utils import mean
from models.assignment import OUTSTANDING_STATUSES, AssignmentRecord, AssignmentStatus

if TYPE_CHECKING:
    from models.student import Student

logger = logging.getLogger(__name__)


class Ledger:

    def __init__(
        self,
        owner: Student,
        scheduler: TransitionScheduler,
        dispatcher: Dispatcher | None = None,
        grade_source: GradeSource | None = None,
        delay: float = DEFERRED_TRANSITION_DELAY,
    ):
        self._owner = owner
        self._scheduler = scheduler
        self._dispatcher = dispatcher
        self._grade_source = grade_source or RandomGradeSource()
        self._delay = delay
        self._records: dict[str, AssignmentRecord] = {}
        self._overall_grade: float | None = None

    # === properties ===

    @property
    def records(self) -> dict[str, AssignmentRecord]:
        return self._records.copy()

    @property
    def overall_grade(self) -> float | None:
        return self._overall_grade

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def grade_source(self) -> GradeSource:
        return self._grade_source

    @property
    def dispatcher(self) -> Dispatcher | None:
        return self._dispatcher

    @dispatcher.setter
    def dispatcher(self, dispatcher: Dispatcher | None) -> None:
        self._dispatcher = dispatcher

    # === data accessors ===

    def find(self, assignment_name: str) -> AssignmentRecord | None:
        return self._records.get(assignment_name)

    def query_status(self, assignment_name: str) -> str:
        """
        Returns the human-facing label for an assignment.

        `Pass` and `Fail` for graded work, `NOT_ASSIGNED` for a name this ledger has never
        seen, and the raw status value (e.g. `working`) for everything else.
        """
        record = self.find(assignment_name)

        if record is None:
            return NOT_ASSIGNED

        return record.label

    def outstanding_assignments(self) -> list[str]:
        return [
            record.name
            for record in self._records.values()
            if record.status in OUTSTANDING_STATUSES
        ]

    def has_pending_transition(self, assignment_name: str) -> bool:
        return self._scheduler.is_pending(self._key(assignment_name))

    # === state machine ===

    def get_or_create(self, assignment_name: str) -> AssignmentRecord:
        """
        Returns the record for `assignment_name`, creating it if this is the first mention.

        Notes:
            - Creating a record notifies the dispatcher with `released`.
            - An existing record is returned untouched, whatever its status.
        """
        record = self._records.get(assignment_name)

        if record is None:
            record = AssignmentRecord(assignment_name)
            self._records[assignment_name] = record

            logger.debug("%s: released %s", self._owner.full_name, assignment_name)

            self._notify(record)

        return record

    def update_status(self, assignment_name: str, grade: Any = None) -> None:
        """
        Releases an unseen assignment, or applies an explicit grade to a known one.

        Args:
            assignment_name (str): The assignment to update.
            grade (Any): Optional grade. Ignored on the first mention of the assignment.

        Notes:
            - A grade that fails validation leaves the record untouched and logs a warning.
            - Explicit grading never touches the scheduler. A pending auto-grade finds the
              record already graded and does nothing.
        """
        if assignment_name not in self._records:
            self.get_or_create(assignment_name)
            return

        if grade is None:
            return

        record = self._records[assignment_name]

        try:
            record.set_grade(grade)

        except (TypeError, ValueError) as e:
            logger.warning(
                "%s: ignoring grade %r for %s: %s",
                self._owner.full_name,
                grade,
                assignment_name,
                e,
            )
            return

        self._recalculate_overall_grade()
        self._notify(record)

    def start_working(self, assignment_name: str) -> None:
        if not self._can_schedule(assignment_name, "start"):
            return

        record = self.get_or_create(assignment_name)

        self._scheduler.cancel(self._key(assignment_name))
        self._move(record, AssignmentStatus.WORKING)
        self._notify(record)

        self._scheduler.schedule(
            self._key(assignment_name),
            self._delay,
            lambda: self._auto_submit(assignment_name),
        )

    def submit(self, assignment_name: str) -> None:
        """
        Submits an assignment and schedules its grading.

        Notes:
            - Any pending transition for the assignment is cancelled first.
            - Submitting an assignment that is already graded sends it back to `submitted`,
              drops its grade from the overall grade, and grades it again.
            - If the scheduler cannot arm the auto-grade (e.g. no running event loop), the
              call is logged and ignored, leaving the record exactly as it was.
        """
        if not self._can_schedule(assignment_name, "submit"):
            return

        record = self.get_or_create(assignment_name)

        self._scheduler.cancel(self._key(assignment_name))
        self._move(record, AssignmentStatus.SUBMITTED)
        self._notify(record)

        self._scheduler.schedule(
            self._key(assignment_name),
            self._delay,
            lambda: self._auto_grade(assignment_name),
        )

    def receive_reminder(self, assignment_name: str) -> None:
        """
        Marks the final reminder, then submits immediately.

        Always produces two notifications in order: `final_reminder`, then `submitted`.
        """
        if not self._can_schedule(assignment_name, "remind"):
            return

        record = self.get_or_create(assignment_name)

        self._scheduler.cancel(self._key(assignment_name))
        self._move(record, AssignmentStatus.FINAL_REMINDER)
        self._notify(record)

        self.submit(assignment_name)

    def cancel_pending(self, assignment_name: str) -> bool:
        return self._scheduler.cancel(self._key(assignment_name))

    # --- deferred transitions ---

    def _auto_submit(self, assignment_name: str) -> None:
        record = self._records[assignment_name]

        if record.status not in (
            AssignmentStatus.WORKING,
            AssignmentStatus.FINAL_REMINDER,
        ):
            logger.debug(
                "%s: stale auto-submit for %s (status %s)",
                self._owner.full_name,
                assignment_name,
                record.status.value,
            )
            return

        self.submit(assignment_name)

    def _auto_grade(self, assignment_name: str) -> None:
        record = self._records[assignment_name]

        if record.status is not AssignmentStatus.SUBMITTED:
            logger.debug(
                "%s: stale auto-grade for %s (status %s)",
                self._owner.full_name,
                assignment_name,
                record.status.value,
            )
            return

        grade = self._grade_source.next_grade()

        try:
            record.set_grade(grade)

        except (TypeError, ValueError) as e:
            logger.warning(
                "%s: grade source produced %r for %s: %s",
                self._owner.full_name,
                grade,
                assignment_name,
                e,
            )
            return

        self._recalculate_overall_grade()
        self._notify(record)

    # === helper methods ===

    def _key(self, assignment_name: str) -> tuple[str, str]:
        return (self._owner.id, assignment_name)

    def _can_schedule(self, assignment_name: str, action: str) -> bool:
        if self._scheduler.can_schedule():
            return True

        logger.warning(
            "%s: cannot %s %s: scheduler has no usable event loop",
            self._owner.full_name,
            action,
            assignment_name,
        )
        return False

    def _move(self, record: AssignmentRecord, status: AssignmentStatus) -> None:
        was_graded = record.is_graded
        record.status = status

        if was_graded:
            self._recalculate_overall_grade()

    def _notify(self, record: AssignmentRecord) -> None:
        if self._dispatcher is None:
            return

        self._dispatcher.notify(self._owner, record.name, record.status)

    def _recalculate_overall_grade(self) -> None:
        self._overall_grade = mean(
            [r.grade for r in self._records.values() if r.grade is not None]
        )

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, assignment_name: object) -> bool:
        return assignment_name in self._records
