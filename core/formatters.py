# core/formatters.py

# pure text utilities for notifications
# must never import from models!

from typing import Any

NOTIFICATION_PREFIX = "Observer →"

# === transition templates ===

# keyed by status value; placeholders are {name} and {assignment}
TRANSITION_TEMPLATES: dict[str, str] = {
    "released": "{name}, {assignment} has been released.",
    "working": "{name} is working on {assignment}.",
    "submitted": "{name} has submitted {assignment}.",
    "final_reminder": "{name}, {assignment} final reminder.",
    "pass": "{name} has passed {assignment}.",
    "fail": "{name} has failed {assignment}.",
}

FALLBACK_TEMPLATE = "{name}, {assignment} is now {status}."


def format_transition_message(
    student_name: str, assignment_name: str, status: Any
) -> str:
    """
    Builds the one-line notification text for an assignment transition.

    Unknown statuses fall back to a generic "is now <status>" message instead of failing.
    """
    status_value = getattr(status, "value", status)
    template = TRANSITION_TEMPLATES.get(str(status_value), FALLBACK_TEMPLATE)
    body = template.format(
        name=student_name, assignment=assignment_name, status=status_value
    )

    return f"{NOTIFICATION_PREFIX} {body}"


# === grade formatters ===


def format_grade(grade: float | None) -> str:
    if grade is None:
        return "[NO GRADE]"

    return f"{grade:.1f}" if grade != int(grade) else f"{int(grade)}"
