"""SymptomPathway — a named, ordered question set for one chief complaint.

Pathways are immutable once built.  Construction enforces the structural
rules the evaluator relies on:

  - question ids are unique within the pathway
  - a visibility condition references a question that appears *earlier*
    in the same pathway (no forward or cross-pathway references)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from .question import LocationPickerQuestion, Question, SliderQuestion


class SymptomPathway(BaseModel):
    """An ordered sequence of questions identified by a stable key."""

    model_config = ConfigDict(frozen=True)

    pathway_id: str
    name: str
    questions: tuple[Question, ...]

    @model_validator(mode="after")
    def _chk(self):
        seen: set[str] = set()
        for q in self.questions:
            if q.qid in seen:
                raise ValueError(f"{self.pathway_id}: duplicate question id {q.qid!r}")
            if q.condition is not None and q.condition.depends_on not in seen:
                raise ValueError(
                    f"{self.pathway_id}/{q.qid}: condition references "
                    f"{q.condition.depends_on!r}, which is not an earlier question"
                )
            seen.add(q.qid)
        return self

    def get_question(self, qid: str) -> Question:
        """Look up a question by id.

        Raises:
            KeyError: if the pathway has no such question.
        """
        for q in self.questions:
            if q.qid == qid:
                return q
        raise KeyError(f"{self.pathway_id} has no question {qid!r}")

    @property
    def severity_question(self) -> Optional[SliderQuestion]:
        """The first slider question, whose answer is the pathway's severity."""
        for q in self.questions:
            if isinstance(q, SliderQuestion):
                return q
        return None

    @property
    def location_question(self) -> Optional[LocationPickerQuestion]:
        """The first location-picker question, if the pathway has one."""
        for q in self.questions:
            if isinstance(q, LocationPickerQuestion):
                return q
        return None

    @property
    def red_flag_qids(self) -> list[str]:
        """Ids of every question that can raise a red flag, in order."""
        return [q.qid for q in self.questions if q.red_flag]
