"""PathwayRegistry — loads the symptom pathways and complaint mapping from YAML.

This is the single source of truth for pathway data at runtime.  The default
registry is loaded once at import time from the YAML files shipped in
``intake_pathways/data/`` and exposed as read-only module constants:

    SYMPTOM_PATHWAYS      — pathway id -> SymptomPathway
    COMPLAINT_TO_PATHWAY  — complaint key -> pathway id

Usage::

    from intake_pathways.registry import SYMPTOM_PATHWAYS, get_pathway

    headache = get_pathway("headache")

    # Alternate data set (tests, staging rule changes)
    registry = PathwayRegistry("/path/to/data")
    registry.load()
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from intake_pathways.models.pathway import SymptomPathway
from intake_pathways.models.question import question_mapper

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class PathwayRegistry:
    """Loads pathway YAML and provides typed lookup.

    Attributes populated after :meth:`load`:

        pathways       — read-only {pathway_id: SymptomPathway} in YAML order
        complaint_map  — read-only {complaint_key: pathway_id}
    """

    def __init__(self, data_dir: str | Path | None = None) -> None:
        self._base = Path(data_dir) if data_dir is not None else DATA_DIR

        # Populated by load()
        self._pathways: dict[str, SymptomPathway] = {}
        self._complaint_map: dict[str, str] = {}
        self.pathways: Mapping[str, SymptomPathway] = MappingProxyType(self._pathways)
        self.complaint_map: Mapping[str, str] = MappingProxyType(self._complaint_map)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse ``pathways.yaml`` and ``complaint_mapping.yaml``.

        Raises ``FileNotFoundError`` if a file is missing and ``ValueError``
        if the data is inconsistent (unknown question type, a condition that
        does not point at an earlier question, or a complaint mapped to a
        pathway that does not exist).
        """
        self._load_pathways()
        self._load_complaint_map()
        logger.info(
            "PathwayRegistry loaded: %d pathways, %d complaint mappings",
            len(self.pathways),
            len(self.complaint_map),
        )

    def _load_pathways(self) -> None:
        raw = load_yaml(self._base / "pathways.yaml")
        for pathway_id, body in raw.items():
            questions = []
            for q_dict in body["questions"]:
                qtype = q_dict.get("question_type")
                cls = question_mapper.get(qtype)
                if cls is None:
                    raise ValueError(
                        f"Unknown question_type '{qtype}' in pathway {pathway_id}"
                    )
                questions.append(cls(**q_dict))
            self._pathways[pathway_id] = SymptomPathway(
                pathway_id=pathway_id,
                name=body["name"],
                questions=tuple(questions),
            )

    def _load_complaint_map(self) -> None:
        raw = load_yaml(self._base / "complaint_mapping.yaml")
        for complaint, pathway_id in raw.items():
            if pathway_id not in self.pathways:
                raise ValueError(
                    f"Complaint {complaint!r} maps to unknown pathway {pathway_id!r}"
                )
            self._complaint_map[complaint] = pathway_id

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get_pathway(self, pathway_id: str) -> SymptomPathway:
        """Look up a pathway by id.

        Raises:
            KeyError: if the pathway id is unknown.
        """
        return self.pathways[pathway_id]

    def complaints_for(self, pathway_id: str) -> list[str]:
        """Return every complaint key that routes to ``pathway_id``."""
        return [c for c, p in self.complaint_map.items() if p == pathway_id]


# ---------------------------------------------------------------------------
# Default registry, loaded once per process
# ---------------------------------------------------------------------------

_default_registry = PathwayRegistry()
_default_registry.load()

SYMPTOM_PATHWAYS: Mapping[str, SymptomPathway] = _default_registry.pathways
COMPLAINT_TO_PATHWAY: Mapping[str, str] = _default_registry.complaint_map


def get_pathway(pathway_id: str) -> SymptomPathway:
    """Look up a pathway in the default registry.

    Raises:
        KeyError: if the pathway id is unknown.
    """
    return SYMPTOM_PATHWAYS[pathway_id]


def get_default_registry() -> PathwayRegistry:
    """Return the process-wide registry backing the module constants."""
    return _default_registry
