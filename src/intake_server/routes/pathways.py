"""Symptom pathway endpoints — browse the registry and run the evaluator.

All operations are stateless: the caller sends the answers it holds and
receives visibility, red flags or the assembled submission back.
"""

from typing import Any, Union

from fastapi import APIRouter, Depends
from pydantic import Field

from intake_pathways.evaluator import (
    build_submission,
    detect_red_flags,
    resolve_pathways,
    visible_questions,
)
from intake_pathways.models.base import WireModel
from intake_pathways.models.pathway import SymptomPathway
from intake_pathways.models.question import Question
from intake_pathways.models.response import AdaptiveQuestionsData
from intake_pathways.registry import PathwayRegistry

from intake_server.dependencies import get_registry

router = APIRouter(prefix="/pathways", tags=["pathways"])

# Either an ordered list of complaint keys or the intake form's
# {complaint: flag} checkbox mapping.
ComplaintSelection = Union[list[str], dict[str, Any]]


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class PathwaySummary(WireModel):
    """Row in the pathway listing."""
    pathway_id: str
    name: str
    question_count: int
    red_flag_qids: list[str]
    complaints: list[str]


class ResolveRequest(WireModel):
    """Body for POST /pathways/resolve."""
    complaints: ComplaintSelection = Field(default_factory=list)


class EvaluateRequest(WireModel):
    """Body for POST /pathways/{pathway_id}/evaluate."""
    answers: dict[str, Any] = Field(default_factory=dict)


class EvaluateResponse(WireModel):
    visible_questions: list[Question]
    red_flags: list[str]


class SubmissionRequest(WireModel):
    """Body for POST /pathways/submission.

    ``responses`` maps pathway id to that pathway's ``{qid: answer}``.
    """
    complaints: ComplaintSelection = Field(default_factory=list)
    responses: dict[str, dict[str, Any]] = Field(default_factory=dict)


def _resolve(registry: PathwayRegistry, complaints: ComplaintSelection) -> list[SymptomPathway]:
    return resolve_pathways(
        complaints, pathways=registry.pathways, mapping=registry.complaint_map,
    )


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("")
def list_pathways(
    registry: PathwayRegistry = Depends(get_registry),
) -> list[PathwaySummary]:
    """Return every pathway in registry order."""
    return [
        PathwaySummary(
            pathway_id=p.pathway_id,
            name=p.name,
            question_count=len(p.questions),
            red_flag_qids=p.red_flag_qids,
            complaints=registry.complaints_for(p.pathway_id),
        )
        for p in registry.pathways.values()
    ]


@router.post("/resolve")
def resolve(
    body: ResolveRequest,
    registry: PathwayRegistry = Depends(get_registry),
) -> list[SymptomPathway]:
    """Map selected chief complaints to their pathways, deduplicated and in order."""
    return _resolve(registry, body.complaints)


@router.post("/submission")
def submission(
    body: SubmissionRequest,
    registry: PathwayRegistry = Depends(get_registry),
) -> AdaptiveQuestionsData:
    """Assemble the adaptive-questionnaire payload for the selected complaints."""
    active = _resolve(registry, body.complaints)
    return build_submission(active, body.responses)


@router.get("/{pathway_id}")
def get_pathway(
    pathway_id: str,
    registry: PathwayRegistry = Depends(get_registry),
) -> SymptomPathway:
    """Return one pathway with all its questions.  404 if unknown."""
    return registry.get_pathway(pathway_id)


@router.post("/{pathway_id}/evaluate")
def evaluate(
    pathway_id: str,
    body: EvaluateRequest,
    registry: PathwayRegistry = Depends(get_registry),
) -> EvaluateResponse:
    """Return the visible questions and triggered red flags for the answers so far."""
    pathway = registry.get_pathway(pathway_id)
    return EvaluateResponse(
        visible_questions=visible_questions(pathway, body.answers),
        red_flags=detect_red_flags(pathway, body.answers),
    )
