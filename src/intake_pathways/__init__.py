"""intake_pathways — adaptive symptom questionnaire SDK for patient intake.

Public API:
    resolve_pathways  — chief-complaint selection -> ordered, deduplicated pathways
    is_visible        — evaluate a question's visibility condition
    visible_questions — the currently visible questions of a pathway
    detect_red_flags  — ids of red-flag questions triggered by the answers
    build_submission  — assemble the AdaptiveQuestionsData payload
    SYMPTOM_PATHWAYS  — read-only registry: pathway id -> SymptomPathway
    COMPLAINT_TO_PATHWAY — read-only table: complaint key -> pathway id
    PathwayRegistry   — loads pathway YAML into typed models

Case workflow:
    CaseService       — case, questionnaire, vitals and clinical-note operations
    ClinicalNoteWriter — ABC for the LLM that writes summaries and diagnoses
    PromptManager     — renders the summary / diagnosis prompts
"""

from intake_pathways.evaluator import (
    build_submission,
    detect_red_flags,
    is_visible,
    resolve_pathways,
    visible_questions,
)
from intake_pathways.interfaces import ClinicalNoteWriter
from intake_pathways.models import (
    AdaptiveQuestionsData,
    LocationSelection,
    Question,
    SymptomPathway,
    SymptomResponseEntry,
)
from intake_pathways.prompt import PromptManager
from intake_pathways.registry import (
    COMPLAINT_TO_PATHWAY,
    SYMPTOM_PATHWAYS,
    PathwayRegistry,
    get_pathway,
)
from intake_pathways.service import CaseService

__all__ = [
    # Evaluator
    "build_submission",
    "detect_red_flags",
    "is_visible",
    "resolve_pathways",
    "visible_questions",
    # Registry
    "COMPLAINT_TO_PATHWAY",
    "SYMPTOM_PATHWAYS",
    "PathwayRegistry",
    "get_pathway",
    # Models
    "AdaptiveQuestionsData",
    "LocationSelection",
    "Question",
    "SymptomPathway",
    "SymptomResponseEntry",
    # Case workflow
    "CaseService",
    "ClinicalNoteWriter",
    "PromptManager",
]
