"""In-memory stand-ins for the DB layer and the note writer.

Mock strategy:
  - MockCaseRow / MockQuestionnaireRow have the same attributes as the
    ORM models but no SQLAlchemy dependency.  The service reads and writes
    attributes directly.
  - MockRepository implements every async method CaseService calls,
    mutating rows in place just like the real repository.
  - AsyncMock stands in for AsyncSession (db); flush() is a no-op.
  - FakeNoteWriter records each call and returns a canned reply.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from intake_db.models.enums import CaseStatus
from intake_pathways.interfaces import ClinicalNoteWriter


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MockCaseRow:
    """In-memory stand-in for the Case ORM model."""

    patient_name: str = "Somchai Jaidee"
    national_id: str = "1101700203451"
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    status: CaseStatus = CaseStatus.OPEN
    vitals: dict = field(default_factory=dict)
    summary: str | None = None
    ai_diagnosis: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


@dataclass
class MockQuestionnaireRow:
    """In-memory stand-in for the Questionnaire ORM model."""

    case_id: uuid.UUID
    answers: dict
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


class MockRepository:
    """In-memory CaseRepository replacement.

    Cases are kept in insertion order; "most recent" means last inserted.
    """

    def __init__(self):
        self.cases: dict[uuid.UUID, MockCaseRow] = {}
        self.questionnaires: list[MockQuestionnaireRow] = []

    async def create_case(self, db, *, patient_name, national_id):
        row = MockCaseRow(patient_name=patient_name, national_id=national_id)
        self.cases[row.id] = row
        return row

    async def get_by_id(self, db, case_pk):
        return self.cases.get(case_pk)

    async def get_by_national_id(self, db, national_id):
        for row in self.cases.values():
            if row.national_id == national_id:
                return row
        return None

    async def list_cases(self, db, *, limit=20, offset=0):
        rows = list(reversed(list(self.cases.values())))
        return rows[offset:offset + limit]

    async def update_status(self, db, case, status):
        case.status = status
        case.updated_at = _now()
        return case

    async def update_vitals(self, db, case, vitals):
        case.vitals = {**case.vitals, **vitals}
        case.updated_at = _now()
        return case

    async def save_summary(self, db, case, summary):
        case.summary = summary
        case.updated_at = _now()
        return case

    async def save_diagnosis(self, db, case, diagnosis):
        case.ai_diagnosis = diagnosis
        case.updated_at = _now()
        return case

    async def create_questionnaire(self, db, case, answers):
        row = MockQuestionnaireRow(case_id=case.id, answers=answers)
        self.questionnaires.append(row)
        return row

    async def get_latest_questionnaire(self, db, case_pk):
        for row in reversed(self.questionnaires):
            if row.case_id == case_pk:
                return row
        return None


class FakeNoteWriter(ClinicalNoteWriter):
    """Returns ``reply`` for every prompt and records the calls."""

    def __init__(self, reply: str = "Generated note."):
        self.reply = reply
        self.calls: list[dict[str, Any]] = []

    async def complete(self, *, system, prompt, temperature, max_tokens=None):
        self.calls.append({
            "system": system,
            "prompt": prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        return self.reply
