"""Clinical-note endpoints — AI summary and differential diagnosis.

Both return 503 when no OpenAI key is configured.  OpenAI quota and
credential failures surface as 429 and 401.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from intake_pathways.models.base import WireModel
from intake_pathways.service import CaseService

from intake_server.dependencies import get_db, get_service

router = APIRouter(prefix="/cases", tags=["notes"])


class SummaryResponse(WireModel):
    summary: str


class DiagnosisResponse(WireModel):
    diagnosis: str
    case_id: str


@router.post("/{case_id}/summary")
async def generate_summary(
    case_id: str,
    db: AsyncSession = Depends(get_db),
    service: CaseService = Depends(get_service),
) -> SummaryResponse:
    """Generate and store a clinical summary for the case."""
    summary = await service.generate_summary(db, case_id)
    return SummaryResponse(summary=summary)


@router.post("/{case_id}/diagnosis")
async def generate_diagnosis(
    case_id: str,
    db: AsyncSession = Depends(get_db),
    service: CaseService = Depends(get_service),
) -> DiagnosisResponse:
    """Generate and store differential diagnoses.  Requires a questionnaire."""
    diagnosis = await service.generate_diagnosis(db, case_id)
    return DiagnosisResponse(diagnosis=diagnosis, case_id=case_id)
