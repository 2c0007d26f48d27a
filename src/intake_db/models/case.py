"""Case and Questionnaire ORM models.

A case is one patient visit.  Its vitals live in a JSONB column so fields
can be merged without schema changes.  Questionnaire answers are stored as
an opaque JSONB document; a case may accumulate several questionnaires and
the most recent one is authoritative.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from intake_db.models.base import Base
from intake_db.models.enums import CaseStatus


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Case(Base):
    """One row per patient visit."""

    __tablename__ = "cases"

    # --- Primary key ---
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # --- Identity ---
    patient_name: Mapped[str] = mapped_column(String(100), nullable=False)
    # One case per national id
    national_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)

    # --- Lifecycle ---
    status: Mapped[CaseStatus] = mapped_column(
        # Store as the lowercase string value, not the Python name
        String(20),
        nullable=False,
        default=CaseStatus.OPEN,
        index=True,
    )

    # --- Nurse-recorded vitals ---
    # Shape: {"bp": "120/80", "hr": 72, "spo2": 98, ...}; absent keys are unrecorded
    vitals: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'{}'::jsonb"),
        default=dict,
    )

    # --- Generated notes ---
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    ai_diagnosis: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Timestamps ---
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now,
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('open', 'in_progress', 'closed', 'cancelled')",
            name="ck_case_status",
        ),
        Index("ix_cases_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Case(id={self.id!s}, status={self.status!r})>"


class Questionnaire(Base):
    """A submitted intake questionnaire for a case."""

    __tablename__ = "questionnaires"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    case_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("cases.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Full form payload as submitted by the intake UI, including the
    # ``adaptiveQuestions`` block produced by build_submission.
    answers: Mapped[dict] = mapped_column(JSONB, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now,
    )

    __table_args__ = (
        # GIN index for JSONB path lookups
        Index("ix_questionnaire_answers_gin", "answers", postgresql_using="gin"),
    )

    def __repr__(self) -> str:
        return f"<Questionnaire(id={self.id!s}, case_id={self.case_id!s})>"
