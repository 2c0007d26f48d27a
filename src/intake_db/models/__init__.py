"""ORM models for intake_db."""

from intake_db.models.base import Base
from intake_db.models.case import Case, Questionnaire
from intake_db.models.enums import CaseStatus

__all__ = ["Base", "Case", "CaseStatus", "Questionnaire"]
