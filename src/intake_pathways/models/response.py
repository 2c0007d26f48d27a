"""Answer and submission models produced by the evaluator.

These are built in memory while a patient works through the questionnaire
and handed whole to the persistence layer on submission.  Field names are
snake_case in Python and camelCase on the wire, matching the document the
intake UI embeds under ``adaptiveQuestions``.
"""

from typing import Any, Literal, Optional, Union

from .base import WireModel


class LocationSelection(WireModel):
    """Answer to a location_picker question."""

    region_ids: list[str] = []
    laterality: Optional[Literal["bilateral", "left", "right", "notApplicable"]] = None


class SymptomResponseEntry(WireModel):
    """Captured state of one pathway."""

    pathway_id: str
    responses: dict[str, Any] = {}
    # Shortcut to the answer of the pathway's first slider question
    severity: Optional[Union[int, float]] = None
    # Shortcut to the answer of the pathway's first location question
    location_data: Optional[LocationSelection] = None
    red_flags_triggered: list[str] = []


class AdaptiveQuestionsData(WireModel):
    """The full adaptive-questionnaire submission unit."""

    completed_pathways: list[SymptomResponseEntry] = []
    overall_red_flags: list[str] = []
    completed: bool = False
