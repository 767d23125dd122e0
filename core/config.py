# core/config.py

"""
Program-wide settings for the assignment workflow.

Values are plain module-level constants. Per-student overrides (such as the deferred
transition delay) are passed as constructor arguments instead of mutating this module.
"""

# seconds between a trigger and its deferred self-transition (auto-submit, auto-grade)
DEFERRED_TRANSITION_DELAY = 0.5

# grading policy
MIN_GRADE = 0
MAX_GRADE = 100
PASS_THRESHOLD = 50  # grades strictly above this pass

# label returned when querying an assignment the student has never seen
NOT_ASSIGNED = "Hasn't been assigned"

# logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
