"""CaseService — case, questionnaire, vitals and clinical-note workflow.

Sits between the HTTP layer and ``intake_db``: it validates input, loads
rows through ``CaseRepository`` and converts them to the public models in
``intake_pathways.models.case``.  Clinical notes are produced by an optional
``ClinicalNoteWriter`` from prompts rendered by ``PromptManager``.

Errors are raised as ``ValueError`` with a message that names the problem
("not found", "already exists", "invalid", "not configured"); the server
maps those to HTTP status codes.

Usage::

    service = CaseService(writer=OpenAINoteWriter(...))

    info = await service.create_case(db, patient_name="Somchai", national_id="1101700203451")
    await service.save_questionnaire(db, info.case_id, answers)
    await service.record_vitals(db, info.case_id, {"hr": 88, "spo2": 97})
    summary = await service.generate_summary(db, info.case_id)
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from intake_db.models.case import Case, Questionnaire
from intake_db.models.enums import CaseStatus
from intake_db.repository import CaseRepository

from intake_pathways.interfaces import ClinicalNoteWriter
from intake_pathways.models.case import (
    CaseInfo,
    CaseList,
    NewCase,
    QuestionnaireInfo,
    Vitals,
)
from intake_pathways.prompt import PromptManager

logger = logging.getLogger(__name__)

SUMMARY_TEMPERATURE = 0.4
DIAGNOSIS_TEMPERATURE = 0.3
DIAGNOSIS_MAX_TOKENS = 1500

SUMMARY_FALLBACK = "Unable to generate summary"
DIAGNOSIS_FALLBACK = "Unable to generate diagnosis"


class CaseService:
    """Case workflow over an async DB session.

    Args:
        writer: note writer used by ``generate_summary`` and
            ``generate_diagnosis``; if ``None`` both raise
            ``ValueError("AI writer not configured")``
        prompts: prompt renderer; defaults to the packaged templates
    """

    def __init__(
        self,
        writer: ClinicalNoteWriter | None = None,
        prompts: PromptManager | None = None,
    ) -> None:
        self._writer = writer
        self._prompts = prompts if prompts is not None else PromptManager()
        self._repo = CaseRepository()

    # ==================================================================
    # Cases
    # ==================================================================

    async def create_case(
        self, db: AsyncSession, *, patient_name: str, national_id: str
    ) -> CaseInfo:
        """Register a new case.

        Names and national ids are trimmed and length-checked.  A second
        case for the same national id is rejected.
        """
        body = NewCase(patient_name=patient_name, national_id=national_id)
        existing = await self._repo.get_by_national_id(db, body.national_id)
        if existing is not None:
            raise ValueError(f"Case already exists for this national id: {existing.id}")

        row = await self._repo.create_case(
            db, patient_name=body.patient_name, national_id=body.national_id,
        )
        logger.info("Created case %s", row.id)
        return self._to_case_info(row)

    async def list_cases(
        self, db: AsyncSession, *, limit: int = 20, offset: int = 0
    ) -> CaseList:
        """List cases, most recent first."""
        rows = await self._repo.list_cases(db, limit=limit, offset=offset)
        cases = [self._to_case_info(r) for r in rows]
        return CaseList(count=len(cases), cases=cases)

    async def get_case(self, db: AsyncSession, case_id: str) -> CaseInfo:
        row = await self._load_case(db, case_id)
        return self._to_case_info(row)

    async def update_status(
        self, db: AsyncSession, case_id: str, status: str
    ) -> CaseInfo:
        """Move a case to ``status`` (open, in_progress, closed, cancelled)."""
        try:
            new_status = CaseStatus(status)
        except ValueError:
            raise ValueError(f"Invalid case status: {status!r}") from None
        row = await self._load_case(db, case_id)
        row = await self._repo.update_status(db, row, new_status)
        logger.info("Case %s status -> %s", row.id, new_status.value)
        return self._to_case_info(row)

    # ==================================================================
    # Questionnaires
    # ==================================================================

    async def save_questionnaire(
        self, db: AsyncSession, case_id: str, answers: Any
    ) -> QuestionnaireInfo:
        """Store the intake form for a case.

        ``answers`` is kept as-is; it only has to be a JSON object.
        """
        if not isinstance(answers, Mapping):
            raise ValueError("Invalid answers: expected a JSON object")
        row = await self._load_case(db, case_id)
        questionnaire = await self._repo.create_questionnaire(db, row, dict(answers))
        logger.info("Saved questionnaire %s for case %s", questionnaire.id, row.id)
        return self._to_questionnaire_info(questionnaire)

    async def get_questionnaire(
        self, db: AsyncSession, case_id: str
    ) -> QuestionnaireInfo:
        """Return the most recent questionnaire for a case."""
        row = await self._load_case(db, case_id)
        questionnaire = await self._repo.get_latest_questionnaire(db, row.id)
        if questionnaire is None:
            raise ValueError(f"Questionnaire not found for case {row.id}")
        return self._to_questionnaire_info(questionnaire)

    # ==================================================================
    # Vitals
    # ==================================================================

    async def record_vitals(
        self,
        db: AsyncSession,
        case_id: str,
        vitals: Vitals | Mapping[str, Any],
    ) -> CaseInfo:
        """Merge newly measured vitals into the case.

        Fields left out (or null) keep their previous value.  At least one
        field must be provided.
        """
        if not isinstance(vitals, Vitals):
            vitals = Vitals.model_validate(vitals)
        update = vitals.model_dump(exclude_none=True)
        if not update:
            raise ValueError("Invalid vitals: at least one vital field must be provided")

        row = await self._load_case(db, case_id)
        row = await self._repo.update_vitals(db, row, update)
        logger.info("Recorded vitals %s for case %s", sorted(update), row.id)
        return self._to_case_info(row)

    # ==================================================================
    # Clinical notes
    # ==================================================================

    async def generate_summary(self, db: AsyncSession, case_id: str) -> str:
        """Write an EMR-style summary for the case and store it.

        The questionnaire is optional; without one the summary is based on
        case details and vitals alone.
        """
        row = await self._load_case(db, case_id)
        writer = self._require_writer()

        questionnaire = await self._repo.get_latest_questionnaire(db, row.id)
        answers = questionnaire.answers if questionnaire is not None else {}
        prompt = self._prompts.render_summary(self._to_case_info(row), answers)

        text = await writer.complete(
            system=self._prompts.summary_system_prompt,
            prompt=prompt,
            temperature=SUMMARY_TEMPERATURE,
        )
        summary = (text or "").strip() or SUMMARY_FALLBACK
        await self._repo.save_summary(db, row, summary)
        logger.info("Generated summary for case %s (%d chars)", row.id, len(summary))
        return summary

    async def generate_diagnosis(self, db: AsyncSession, case_id: str) -> str:
        """Write differential diagnoses and test recommendations, and store them.

        Requires a submitted questionnaire.
        """
        row = await self._load_case(db, case_id)
        questionnaire = await self._repo.get_latest_questionnaire(db, row.id)
        if questionnaire is None:
            raise ValueError(f"Questionnaire not found for case {row.id}")
        writer = self._require_writer()

        prompt = self._prompts.render_diagnosis(
            self._to_case_info(row), questionnaire.answers,
        )
        text = await writer.complete(
            system=self._prompts.diagnosis_system_prompt,
            prompt=prompt,
            temperature=DIAGNOSIS_TEMPERATURE,
            max_tokens=DIAGNOSIS_MAX_TOKENS,
        )
        diagnosis = (text or "").strip() or DIAGNOSIS_FALLBACK
        await self._repo.save_diagnosis(db, row, diagnosis)
        logger.info("Generated diagnosis for case %s", row.id)
        return diagnosis

    # ==================================================================
    # Internal: helpers
    # ==================================================================

    @staticmethod
    def _parse_case_id(case_id: str | uuid.UUID) -> uuid.UUID:
        if isinstance(case_id, uuid.UUID):
            return case_id
        try:
            return uuid.UUID(str(case_id))
        except ValueError:
            raise ValueError(f"Invalid case id: {case_id!r}") from None

    async def _load_case(self, db: AsyncSession, case_id: str | uuid.UUID) -> Case:
        """Load a case row or raise ValueError if not found."""
        pk = self._parse_case_id(case_id)
        row = await self._repo.get_by_id(db, pk)
        if row is None:
            raise ValueError(f"Case not found: {pk}")
        return row

    def _require_writer(self) -> ClinicalNoteWriter:
        if self._writer is None:
            raise ValueError("AI writer not configured")
        return self._writer

    @staticmethod
    def _to_case_info(row: Case) -> CaseInfo:
        """Convert an ORM row to a public CaseInfo."""
        return CaseInfo(
            case_id=str(row.id),
            patient_name=row.patient_name,
            national_id=row.national_id,
            status=row.status.value if isinstance(row.status, CaseStatus) else str(row.status),
            vitals=Vitals.model_validate(row.vitals) if row.vitals else None,
            summary=row.summary,
            ai_diagnosis=row.ai_diagnosis,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _to_questionnaire_info(row: Questionnaire) -> QuestionnaireInfo:
        return QuestionnaireInfo(
            questionnaire_id=str(row.id),
            case_id=str(row.case_id),
            answers=row.answers,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
