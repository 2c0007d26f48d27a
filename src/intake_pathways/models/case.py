"""Case and questionnaire models — the contract between the service and API callers.

They are intentionally decoupled from the ORM models in ``intake_db`` so that
API consumers never see database internals.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import ConfigDict, Field

from .base import WireModel

CaseStatusValue = Literal["open", "in_progress", "closed", "cancelled"]


class Vitals(WireModel):
    """Vital signs recorded by the nurse.  Every field is optional.

    Bounds reject values that are physiologically implausible rather than
    merely abnormal.
    """

    bp: Optional[str] = Field(None, max_length=20)
    hr: Optional[float] = Field(None, ge=0, le=300)
    spo2: Optional[float] = Field(None, ge=0, le=100)
    temp: Optional[float] = Field(None, ge=30, le=45)
    resp_rate: Optional[float] = Field(None, ge=0, le=60)
    pain_score: Optional[float] = Field(None, ge=0, le=10)


class NewCase(WireModel):
    """Body for creating a case.  Surrounding whitespace is trimmed."""

    model_config = ConfigDict(str_strip_whitespace=True)

    patient_name: str = Field(min_length=2, max_length=100)
    national_id: str = Field(min_length=5, max_length=20)


class CaseInfo(WireModel):
    """Public view of a case."""

    case_id: str
    patient_name: str
    national_id: str
    status: CaseStatusValue
    vitals: Optional[Vitals] = None
    summary: Optional[str] = None
    ai_diagnosis: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CaseList(WireModel):
    """Response body for the case listing."""

    count: int
    cases: list[CaseInfo]


class QuestionnaireInfo(WireModel):
    """Public view of a stored questionnaire.  ``answers`` is opaque."""

    questionnaire_id: str
    case_id: str
    answers: dict[str, Any]
    created_at: datetime
    updated_at: datetime
