"""Reference data endpoints — complaint mapping, location catalogs, question types.

Read-only data the intake UI needs to draw the questionnaire.
"""

from fastapi import APIRouter, Depends

from intake_pathways.constants import (
    LATERALITY_VALUES,
    LOCATION_REGIONS,
    QUESTION_TYPE_NAMES,
)
from intake_pathways.registry import PathwayRegistry

from intake_server.dependencies import get_registry

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/complaints")
def list_complaints(
    registry: PathwayRegistry = Depends(get_registry),
) -> dict[str, str]:
    """Return the chief-complaint key -> pathway id table."""
    return dict(registry.complaint_map)


@router.get("/locations")
def list_locations() -> dict:
    """Return the body-region catalogs and laterality values."""
    return {
        "regions": {picker: list(ids) for picker, ids in LOCATION_REGIONS.items()},
        "laterality": list(LATERALITY_VALUES),
    }


@router.get("/question-types")
def list_question_types() -> list[dict]:
    """Return every question type with its display name."""
    return [{"id": qtype, "name": name} for qtype, name in QUESTION_TYPE_NAMES.items()]
