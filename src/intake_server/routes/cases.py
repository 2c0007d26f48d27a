"""Case endpoints — create, list, get, status, questionnaire, vitals.

Case ids are UUID strings.  A malformed id yields 400, an unknown one 404.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from intake_pathways.models.base import WireModel
from intake_pathways.models.case import (
    CaseInfo,
    CaseList,
    CaseStatusValue,
    NewCase,
    QuestionnaireInfo,
    Vitals,
)
from intake_pathways.service import CaseService

from intake_server.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from intake_server.dependencies import get_db, get_service

router = APIRouter(prefix="/cases", tags=["cases"])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class StatusUpdateRequest(WireModel):
    """Body for PATCH /cases/{case_id}/status."""
    status: CaseStatusValue


class QuestionnaireRequest(WireModel):
    """Body for POST /cases/{case_id}/questionnaire."""
    answers: dict[str, Any]


# ------------------------------------------------------------------
# Cases
# ------------------------------------------------------------------

@router.get("")
async def list_cases(
    db: AsyncSession = Depends(get_db),
    service: CaseService = Depends(get_service),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
) -> CaseList:
    """List cases, most recent first."""
    return await service.list_cases(db, limit=limit, offset=offset)


@router.post("", status_code=201)
async def create_case(
    body: NewCase,
    db: AsyncSession = Depends(get_db),
    service: CaseService = Depends(get_service),
) -> CaseInfo:
    """Register a new case.  409 if the national id is already registered."""
    return await service.create_case(
        db, patient_name=body.patient_name, national_id=body.national_id,
    )


@router.get("/{case_id}")
async def get_case(
    case_id: str,
    db: AsyncSession = Depends(get_db),
    service: CaseService = Depends(get_service),
) -> CaseInfo:
    return await service.get_case(db, case_id)


@router.patch("/{case_id}/status")
async def update_status(
    case_id: str,
    body: StatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
    service: CaseService = Depends(get_service),
) -> CaseInfo:
    return await service.update_status(db, case_id, body.status)


# ------------------------------------------------------------------
# Questionnaire
# ------------------------------------------------------------------

@router.get("/{case_id}/questionnaire")
async def get_questionnaire(
    case_id: str,
    db: AsyncSession = Depends(get_db),
    service: CaseService = Depends(get_service),
) -> QuestionnaireInfo:
    """Return the most recent questionnaire for the case."""
    return await service.get_questionnaire(db, case_id)


@router.post("/{case_id}/questionnaire", status_code=201)
async def save_questionnaire(
    case_id: str,
    body: QuestionnaireRequest,
    db: AsyncSession = Depends(get_db),
    service: CaseService = Depends(get_service),
) -> QuestionnaireInfo:
    """Store the intake form.  ``answers`` is kept as submitted."""
    return await service.save_questionnaire(db, case_id, body.answers)


# ------------------------------------------------------------------
# Vitals
# ------------------------------------------------------------------

@router.post("/{case_id}/vitals")
async def record_vitals(
    case_id: str,
    body: Vitals,
    db: AsyncSession = Depends(get_db),
    service: CaseService = Depends(get_service),
) -> CaseInfo:
    """Merge vitals into the case.  At least one field is required."""
    return await service.record_vitals(db, case_id, body)
