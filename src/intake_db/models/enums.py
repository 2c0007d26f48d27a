"""Database-level enumerations for intake cases."""

import enum


class CaseStatus(str, enum.Enum):
    """Lifecycle states for an intake case.

    Any state may be set by staff; new cases start ``open``.
    """

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"
    CANCELLED = "cancelled"
