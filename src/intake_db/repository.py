"""Async CRUD repository for cases and questionnaires.

All public methods accept an ``AsyncSession`` so the caller controls
transaction boundaries.  Methods ``flush()`` but never ``commit()``.

The repository avoids business-logic validation; that belongs in
``intake_pathways.service``.  Uniqueness of national ids is also enforced
by a DB constraint.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from intake_db.models.case import Case, Questionnaire
from intake_db.models.enums import CaseStatus


class CaseRepository:
    """Async read/write operations on the ``cases`` and ``questionnaires`` tables."""

    # ------------------------------------------------------------------
    # Cases: create / read
    # ------------------------------------------------------------------

    async def create_case(
        self, db: AsyncSession, *, patient_name: str, national_id: str
    ) -> Case:
        """Insert a new case row and return it.

        The caller must ``await db.commit()`` to persist.
        """
        case = Case(
            patient_name=patient_name,
            national_id=national_id,
            status=CaseStatus.OPEN,
            vitals={},
        )
        db.add(case)
        await db.flush()  # Populate defaults (id, timestamps)
        return case

    async def get_by_id(self, db: AsyncSession, case_pk: uuid.UUID) -> Case | None:
        """Fetch a case by its primary-key UUID."""
        return await db.get(Case, case_pk)

    async def get_by_national_id(
        self, db: AsyncSession, national_id: str
    ) -> Case | None:
        """Fetch the case registered under ``national_id``."""
        stmt = select(Case).where(Case.national_id == national_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_cases(
        self, db: AsyncSession, *, limit: int = 20, offset: int = 0
    ) -> list[Case]:
        """List cases, most recent first."""
        stmt = (
            select(Case)
            .order_by(Case.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Cases: update
    # ------------------------------------------------------------------

    async def update_status(
        self, db: AsyncSession, case: Case, status: CaseStatus
    ) -> Case:
        case.status = status
        case.updated_at = datetime.now(timezone.utc)
        await db.flush()
        return case

    async def update_vitals(
        self, db: AsyncSession, case: Case, vitals: dict[str, Any]
    ) -> Case:
        """Merge ``vitals`` into the stored vitals; omitted keys are kept."""
        # New dict so SQLAlchemy detects the JSONB mutation
        case.vitals = {**(case.vitals or {}), **vitals}
        case.updated_at = datetime.now(timezone.utc)
        await db.flush()
        return case

    async def save_summary(self, db: AsyncSession, case: Case, summary: str) -> Case:
        case.summary = summary
        case.updated_at = datetime.now(timezone.utc)
        await db.flush()
        return case

    async def save_diagnosis(
        self, db: AsyncSession, case: Case, diagnosis: str
    ) -> Case:
        case.ai_diagnosis = diagnosis
        case.updated_at = datetime.now(timezone.utc)
        await db.flush()
        return case

    # ------------------------------------------------------------------
    # Questionnaires
    # ------------------------------------------------------------------

    async def create_questionnaire(
        self, db: AsyncSession, case: Case, answers: dict[str, Any]
    ) -> Questionnaire:
        """Store a questionnaire for ``case``."""
        questionnaire = Questionnaire(case_id=case.id, answers=answers)
        db.add(questionnaire)
        await db.flush()
        return questionnaire

    async def get_latest_questionnaire(
        self, db: AsyncSession, case_pk: uuid.UUID
    ) -> Questionnaire | None:
        """Return the most recently created questionnaire for a case."""
        stmt = (
            select(Questionnaire)
            .where(Questionnaire.case_id == case_pk)
            .order_by(Questionnaire.created_at.desc())
            .limit(1)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()
