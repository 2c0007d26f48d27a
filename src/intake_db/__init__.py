"""intake_db — PostgreSQL persistence layer for intake cases.

This package provides the ORM models, async engine factory, and repository
for creating, updating, and querying cases and their questionnaires.  It is
consumed by ``intake_pathways.service`` and the FastAPI server.
"""

from intake_db.engine import get_engine, get_session_factory
from intake_db.models.case import Case, Questionnaire
from intake_db.models.enums import CaseStatus
from intake_db.repository import CaseRepository

__all__ = [
    "Case",
    "CaseStatus",
    "Questionnaire",
    "get_engine",
    "get_session_factory",
    "CaseRepository",
]
