# core/utils.py

"""
Repository for program-wide utilities.
"""

import math
import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def mean(values: list[float]) -> float | None:
    """Arithmetic mean of `values`, or None for an empty list."""
    if not values:
        return None

    return math.fsum(values) / len(values)
