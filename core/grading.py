# core/grading.py

"""
Grade sources consumed by the deferred auto-grade transition.

Grading itself is not modeled; a source only hands out the next integer grade in the
configured range. `RandomGradeSource` is the default, `SequenceGradeSource` replays a
fixed list so tests can predict pass/fail outcomes.
"""

from __future__ import annotations

import itertools
import random
from collections.abc import Iterable

from core.config import MAX_GRADE, MIN_GRADE


class GradeSource:
    """Interface for anything that can produce the next grade."""

    def next_grade(self) -> int:
        raise NotImplementedError("Need to subclass GradeSource")


class RandomGradeSource(GradeSource):

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def next_grade(self) -> int:
        return self._random.randint(MIN_GRADE, MAX_GRADE)


class SequenceGradeSource(GradeSource):
    """
    Replays the given grades in order, cycling back to the start when exhausted.

    Raises:
        ValueError: If no grades are given, or any grade is outside the configured range.
    """

    def __init__(self, grades: Iterable[int]):
        grades = list(grades)

        if not grades:
            raise ValueError("SequenceGradeSource requires at least one grade.")

        for grade in grades:
            if not MIN_GRADE <= grade <= MAX_GRADE:
                raise ValueError(
                    f"Grade {grade} is outside the range {MIN_GRADE}-{MAX_GRADE}."
                )

        self._grades = grades
        self._cycle = itertools.cycle(grades)
        self._issued = 0

    @property
    def issued(self) -> int:
        return self._issued

    def next_grade(self) -> int:
        self._issued += 1
        return next(self._cycle)
