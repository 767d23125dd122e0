# tests/conftest.py

import pytest

from core.dispatcher import Dispatcher, NotificationSink
from core.grading import SequenceGradeSource
from core.scheduler import VirtualClockScheduler
from models.roster import ClassRoster
from models.student import Student


class RecordingSink(NotificationSink):
    def __init__(self):
        self.events: list[tuple[str, str, str]] = []

    def render(self, student_name: str, assignment_name: str, status: str) -> None:
        self.events.append((student_name, assignment_name, status))

    def statuses(self, assignment_name: str | None = None) -> list[str]:
        return [
            status
            for _, name, status in self.events
            if assignment_name is None or name == assignment_name
        ]


@pytest.fixture
def clock():
    return VirtualClockScheduler()


@pytest.fixture
def recorder():
    return RecordingSink()


@pytest.fixture
def dispatcher(recorder):
    return Dispatcher([recorder])


@pytest.fixture
def passing_grades():
    return SequenceGradeSource([80])


@pytest.fixture
def sample_student(dispatcher, clock, passing_grades):
    return Student(
        "Alice Smith",
        "alice@example.com",
        dispatcher=dispatcher,
        scheduler=clock,
        grade_source=passing_grades,
        id="s001",
    )


@pytest.fixture
def make_student(dispatcher, clock):
    def factory(full_name, grades=(80,), email=None, **kwargs):
        email = email or f"{full_name.split()[0].lower()}@example.com"
        return Student(
            full_name,
            email,
            dispatcher=kwargs.pop("dispatcher", dispatcher),
            scheduler=kwargs.pop("scheduler", clock),
            grade_source=SequenceGradeSource(grades),
            **kwargs,
        )

    return factory


@pytest.fixture
def sample_roster(make_student):
    return ClassRoster(
        [
            make_student("Alice Smith", grades=[80]),
            make_student("Bob Jones", grades=[30]),
        ]
    )
