# core/dispatcher.py

"""
Notification dispatch for assignment transitions.

The `Dispatcher` is called synchronously by a ledger at every transition and fans the event
out to one or more `NotificationSink` objects. Sinks only render; they never influence the
state machine, and a failing sink is logged and skipped rather than propagated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from core.formatters import format_transition_message

logger = logging.getLogger(__name__)


class NotificationSink:
    """Interface for a render target. Return values are ignored."""

    def render(self, student_name: str, assignment_name: str, status: str) -> None:
        raise NotImplementedError("Need to subclass NotificationSink")


class LoggingSink(NotificationSink):
    """Writes each notification as one INFO line on the given logger."""

    def __init__(self, target: logging.Logger | None = None, level: int = logging.INFO):
        self._logger = target or logging.getLogger("notifications")
        self._level = level

    def render(self, student_name: str, assignment_name: str, status: str) -> None:
        self._logger.log(
            self._level,
            format_transition_message(student_name, assignment_name, status),
        )


class ConsoleSink(NotificationSink):

    def render(self, student_name: str, assignment_name: str, status: str) -> None:
        print(format_transition_message(student_name, assignment_name, status))


class Dispatcher:
    """
    Fans transition events out to every registered sink, in registration order.

    Notes:
        - `notify()` never raises. Sink exceptions are logged with their traceback.
        - Status values may be enum members or plain strings; sinks always receive the
          plain string value.
    """

    def __init__(self, sinks: Iterable[NotificationSink] | None = None):
        self._sinks: list[NotificationSink] = list(sinks or [])

    @property
    def sinks(self) -> list[NotificationSink]:
        return list(self._sinks)

    def add_sink(self, sink: NotificationSink) -> None:
        self._sinks.append(sink)

    def remove_sink(self, sink: NotificationSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def notify(self, student: Any, assignment_name: str, status: Any) -> None:
        student_name = getattr(student, "full_name", str(student))
        status_value = str(getattr(status, "value", status))

        logger.debug("%s / %s -> %s", student_name, assignment_name, status_value)

        for sink in self._sinks:
            try:
                sink.render(student_name, assignment_name, status_value)

            except Exception:
                logger.exception(
                    "Notification sink %r failed for %s / %s",
                    sink,
                    student_name,
                    assignment_name,
                )
