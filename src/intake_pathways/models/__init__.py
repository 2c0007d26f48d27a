"""Public model re-exports for intake_pathways.

Consumers should import from ``intake_pathways.models`` rather than
reaching into sub-modules directly.
"""

# --- Wire base ---
from intake_pathways.models.base import WireModel

# --- Questions ---
from intake_pathways.models.question import (
    BaseQuestion,
    BooleanQuestion,
    FreeTextQuestion,
    LocationPickerQuestion,
    MultiSelectQuestion,
    Option,
    Question,
    SingleSelectQuestion,
    SliderQuestion,
    VisibilityCondition,
    question_mapper,
)

# --- Pathways ---
from intake_pathways.models.pathway import SymptomPathway

# --- Answers / submission ---
from intake_pathways.models.response import (
    AdaptiveQuestionsData,
    LocationSelection,
    SymptomResponseEntry,
)

# --- Cases ---
from intake_pathways.models.case import (
    CaseInfo,
    CaseList,
    CaseStatusValue,
    NewCase,
    QuestionnaireInfo,
    Vitals,
)

__all__ = [
    "WireModel",
    # Questions
    "BaseQuestion",
    "BooleanQuestion",
    "FreeTextQuestion",
    "LocationPickerQuestion",
    "MultiSelectQuestion",
    "Option",
    "Question",
    "SingleSelectQuestion",
    "SliderQuestion",
    "VisibilityCondition",
    "question_mapper",
    # Pathways
    "SymptomPathway",
    # Answers
    "AdaptiveQuestionsData",
    "LocationSelection",
    "SymptomResponseEntry",
    # Cases
    "CaseInfo",
    "CaseList",
    "CaseStatusValue",
    "NewCase",
    "QuestionnaireInfo",
    "Vitals",
]
