"""Symptom pathway evaluator — pure functions over the pathway registry.

Four operations drive the adaptive questionnaire:

  - **resolve_pathways**: chief-complaint selection -> ordered, deduplicated pathways
  - **is_visible**: whether a question's visibility condition holds for the
    answers collected so far
  - **detect_red_flags**: which answers in a pathway call for escalation
  - **build_submission**: fold per-pathway answers into the submission payload

None of them perform I/O, keep state, or raise on degenerate input: unknown
complaints, missing registry entries and unanswered dependencies all degrade
to empty results.  Answer types are not validated here; a malformed value
simply fails to match.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError

from intake_pathways.models.pathway import SymptomPathway
from intake_pathways.models.question import (
    LocationPickerQuestion,
    MultiSelectQuestion,
    Question,
    SliderQuestion,
)
from intake_pathways.models.response import (
    AdaptiveQuestionsData,
    LocationSelection,
    SymptomResponseEntry,
)
from intake_pathways.registry import COMPLAINT_TO_PATHWAY, SYMPTOM_PATHWAYS

logger = logging.getLogger(__name__)


def _is_collection(value: Any) -> bool:
    """Multi-valued answers; strings and mappings count as scalars."""
    return isinstance(value, (list, tuple, set, frozenset))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _same(a: Any, b: Any) -> bool:
    """Equality without bool/number coercion: ``1`` never matches ``True``."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    return a == b


def _contains(values: Iterable[Any], value: Any) -> bool:
    return any(_same(v, value) for v in values)


# ----------------------------------------------------------------------
# Pathway resolution
# ----------------------------------------------------------------------

def selected_complaints(current_illness: Mapping[str, Any]) -> list[str]:
    """Return the complaint keys ticked on the intake form.

    Only flags that are exactly ``True`` count; free-text companions such as
    ``otherDiseasesText`` are ignored.
    """
    return [key for key, flag in current_illness.items() if flag is True]


def resolve_pathways(
    selected: Iterable[str] | Mapping[str, Any],
    *,
    pathways: Mapping[str, SymptomPathway] = SYMPTOM_PATHWAYS,
    mapping: Mapping[str, str] = COMPLAINT_TO_PATHWAY,
) -> list[SymptomPathway]:
    """Map selected chief complaints to their pathways.

    Args:
        selected: complaint keys in selection order, or the intake form's
            ``{complaint: flag}`` mapping.
        pathways: pathway registry (defaults to the packaged one)
        mapping: complaint -> pathway id table (defaults to the packaged one)

    Returns:
        Pathways in the order their ids were first reached, each at most once.
        Complaints without a mapping and ids without a registry entry are
        dropped.
    """
    if isinstance(selected, Mapping):
        selected = selected_complaints(selected)

    pathway_ids: list[str] = []
    for complaint in selected:
        pathway_id = mapping.get(complaint)
        if pathway_id is None or pathway_id in pathway_ids:
            continue
        pathway_ids.append(pathway_id)

    resolved: list[SymptomPathway] = []
    for pathway_id in pathway_ids:
        pathway = pathways.get(pathway_id)
        if pathway is None:
            logger.warning("Complaint mapping names unknown pathway %r", pathway_id)
            continue
        resolved.append(pathway)
    return resolved


# ----------------------------------------------------------------------
# Visibility
# ----------------------------------------------------------------------

def is_visible(question: Question, answers: Mapping[str, Any]) -> bool:
    """Decide whether a question is shown given the answers so far.

    A question without a condition is always visible.  Otherwise the answer
    recorded for ``condition.depends_on`` is matched against
    ``condition.required_value``:

      - both collections: visible if they share at least one value
      - answer is a collection: visible if it contains the required value
      - required value is a collection: visible if the answer is one of them
      - both scalars: visible if equal

    Booleans only ever match booleans, so an answer of ``1`` does not
    satisfy ``required_value: true``.

    An unanswered dependency hides the question.
    """
    condition = question.condition
    if condition is None:
        return True

    answer = answers.get(condition.depends_on)
    if answer is None:
        return False

    required = condition.required_value
    if _is_collection(answer) and _is_collection(required):
        return any(_contains(answer, v) for v in required)
    if _is_collection(answer):
        return _contains(answer, required)
    if _is_collection(required):
        return _contains(required, answer)
    return _same(answer, required)


def visible_questions(
    pathway: SymptomPathway, answers: Mapping[str, Any]
) -> list[Question]:
    """Return the pathway's currently visible questions, in order."""
    return [q for q in pathway.questions if is_visible(q, answers)]


# ----------------------------------------------------------------------
# Red flags
# ----------------------------------------------------------------------

def _triggers(question: Question, answer: Any) -> bool:
    """Apply the red-flag rule for the question's type to one answer."""
    if isinstance(question, SliderQuestion):
        return _is_number(answer) and answer >= question.red_flag_threshold
    if isinstance(question, MultiSelectQuestion):
        if not _is_collection(answer):
            return False
        return any(_contains(answer, v) for v in question.red_flag_values)
    if isinstance(question, LocationPickerQuestion):
        return False
    if _is_collection(answer):
        return False
    return _contains(question.red_flag_values, answer)


def detect_red_flags(
    pathway: SymptomPathway, answers: Mapping[str, Any]
) -> list[str]:
    """Return the ids of red-flag questions whose answer triggers escalation.

    Only questions marked ``red_flag`` are considered and unanswered ones
    are skipped.  Ids come back in pathway order.  The result depends only
    on the arguments, so live UI warnings and the final submission always
    agree.
    """
    flags: list[str] = []
    for q in pathway.questions:
        if not q.red_flag:
            continue
        answer = answers.get(q.qid)
        if answer is None:
            continue
        if _triggers(q, answer):
            flags.append(q.qid)
    return flags


# ----------------------------------------------------------------------
# Submission
# ----------------------------------------------------------------------

def _location_value(value: Any) -> LocationSelection | None:
    """Coerce a recorded location answer; anything unparseable becomes None."""
    if value is None or isinstance(value, LocationSelection):
        return value
    try:
        return LocationSelection.model_validate(value)
    except ValidationError:
        logger.debug("Ignoring malformed location answer: %r", value)
        return None


def build_entry(
    pathway: SymptomPathway, answers: Mapping[str, Any]
) -> SymptomResponseEntry:
    """Capture one pathway's answers with its severity/location shortcuts."""
    severity = None
    severity_q = pathway.severity_question
    if severity_q is not None and _is_number(answers.get(severity_q.qid)):
        severity = answers[severity_q.qid]

    location = None
    location_q = pathway.location_question
    if location_q is not None:
        location = _location_value(answers.get(location_q.qid))

    return SymptomResponseEntry(
        pathway_id=pathway.pathway_id,
        responses=dict(answers),
        severity=severity,
        location_data=location,
        red_flags_triggered=detect_red_flags(pathway, answers),
    )


def build_submission(
    active_pathways: Sequence[SymptomPathway],
    responses_by_pathway: Mapping[str, Mapping[str, Any]],
) -> AdaptiveQuestionsData:
    """Assemble the final adaptive-questionnaire payload.

    Args:
        active_pathways: pathways in resolver order
        responses_by_pathway: pathway id -> {qid: answer}; pathways with no
            entry are recorded with no answers

    Returns:
        AdaptiveQuestionsData with one entry per pathway, the deduplicated
        union of their red flags, and ``completed`` set.
    """
    entries: list[SymptomResponseEntry] = []
    overall: list[str] = []
    for pathway in active_pathways:
        entry = build_entry(pathway, responses_by_pathway.get(pathway.pathway_id, {}))
        entries.append(entry)
        for qid in entry.red_flags_triggered:
            if qid not in overall:
                overall.append(qid)

    return AdaptiveQuestionsData(
        completed_pathways=entries,
        overall_red_flags=overall,
        completed=True,
    )
