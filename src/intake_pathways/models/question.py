"""Question type models for symptom pathways.

Each question type maps to a specific UI component and answer shape:

    - single_select: pick one option                    -> str
    - multi_select: pick up to ``max_selections`` options -> list[str]
    - slider: numeric value between min and max         -> number
    - boolean: yes / no                                 -> bool
    - location_picker: body regions + laterality        -> LocationSelection
    - free_text: open-ended text input                  -> str

Every variant carries only the fields its type needs; unknown keys are
rejected so a slider cannot silently carry an option list.

Any question may carry a visibility ``condition`` pointing at an earlier
question in the same pathway, and may be marked ``red_flag`` together with
the answer value(s) that trigger escalation.

The discriminated ``Question`` union uses ``question_type`` as its discriminator.
The ``question_mapper`` dict maps type strings to their Pydantic classes.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from intake_pathways.constants import (
    DEFAULT_SLIDER_RED_FLAG_THRESHOLD,
    LOCATION_REGIONS,
)


# --- Shared models ---

class Option(BaseModel):
    """A selectable option with an id and display label."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str


class VisibilityCondition(BaseModel):
    """Show a question only when an earlier answer matches ``required_value``.

    ``required_value`` may be a scalar or a list of acceptable values.
    """

    model_config = ConfigDict(frozen=True)

    depends_on: str
    required_value: Any


class BaseQuestion(BaseModel):
    """Fields shared by all question types."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    qid: str
    label: str
    required: bool = False
    red_flag: bool = False
    condition: Optional[VisibilityCondition] = None


def _check_choice_red_flags(q: SingleSelectQuestion | MultiSelectQuestion) -> None:
    """Red-flag values of a choice question must be ids of its own options."""
    option_ids = {opt.id for opt in q.options}
    unknown = [v for v in q.red_flag_values if v not in option_ids]
    if unknown:
        raise ValueError(f"{q.qid}: red_flag_values {unknown} are not option ids")
    if q.red_flag and not q.red_flag_values:
        raise ValueError(f"{q.qid}: red_flag questions must list red_flag_values")


# --- Question types ---

class SingleSelectQuestion(BaseQuestion):
    """Pick exactly one option."""

    question_type: Literal["single_select"] = "single_select"
    options: tuple[Option, ...] = Field(min_length=1)
    red_flag_values: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _chk(self):
        _check_choice_red_flags(self)
        return self


class MultiSelectQuestion(BaseQuestion):
    """Pick one or more options, capped at ``max_selections`` when set."""

    question_type: Literal["multi_select"] = "multi_select"
    options: tuple[Option, ...] = Field(min_length=1)
    max_selections: Optional[int] = None
    red_flag_values: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _chk(self):
        if self.max_selections is not None and not (
            1 <= self.max_selections <= len(self.options)
        ):
            raise ValueError(
                f"{self.qid}: max_selections must be between 1 and {len(self.options)}"
            )
        _check_choice_red_flags(self)
        return self


class SliderQuestion(BaseQuestion):
    """Numeric slider with min/max/step constraints.

    When marked as a red flag, the first entry of ``red_flag_values`` is the
    inclusive threshold; without one the SDK-wide default applies.
    """

    question_type: Literal["slider"] = "slider"
    min_value: float
    max_value: float
    step: float = 1.0
    red_flag_values: tuple[float, ...] = ()

    @model_validator(mode="after")
    def _chk(self):
        if self.min_value >= self.max_value:
            raise ValueError("min_value must be < max_value")
        return self

    @property
    def red_flag_threshold(self) -> float:
        """Answers at or above this value trigger the red flag."""
        if self.red_flag_values:
            return self.red_flag_values[0]
        return DEFAULT_SLIDER_RED_FLAG_THRESHOLD


class BooleanQuestion(BaseQuestion):
    """Yes / no question."""

    question_type: Literal["boolean"] = "boolean"
    red_flag_values: tuple[bool, ...] = ()

    @model_validator(mode="after")
    def _chk(self):
        if self.red_flag and not self.red_flag_values:
            raise ValueError(f"{self.qid}: red_flag questions must list red_flag_values")
        return self


class LocationPickerQuestion(BaseQuestion):
    """Body-location picker; ``picker`` selects the region catalog."""

    question_type: Literal["location_picker"] = "location_picker"
    picker: Literal["abdomen", "head"]

    @model_validator(mode="after")
    def _chk(self):
        if self.red_flag:
            raise ValueError(f"{self.qid}: location_picker questions cannot be red flags")
        return self

    @property
    def regions(self) -> tuple[str, ...]:
        """Region ids selectable with this picker."""
        return LOCATION_REGIONS[self.picker]


class FreeTextQuestion(BaseQuestion):
    """Open-ended text input."""

    question_type: Literal["free_text"] = "free_text"
    placeholder: Optional[str] = None
    red_flag_values: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _chk(self):
        if self.red_flag and not self.red_flag_values:
            raise ValueError(f"{self.qid}: red_flag questions must list red_flag_values")
        return self


# --- Discriminated union of all question types ---

Question = Annotated[
    Union[
        SingleSelectQuestion,
        MultiSelectQuestion,
        SliderQuestion,
        BooleanQuestion,
        LocationPickerQuestion,
        FreeTextQuestion,
    ],
    Field(discriminator="question_type"),
]

# Maps question_type string -> Pydantic class for dynamic deserialization from YAML.
question_mapper = {
    "single_select": SingleSelectQuestion,
    "multi_select": MultiSelectQuestion,
    "slider": SliderQuestion,
    "boolean": BooleanQuestion,
    "location_picker": LocationPickerQuestion,
    "free_text": FreeTextQuestion,
}
