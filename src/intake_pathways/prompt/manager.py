"""PromptManager — Jinja2-based prompt renderer for the clinical-note writer.

Loads templates from the ``template/`` directory and renders a case, its
questionnaire answers and its vitals into LLM-ready prompt strings.

Two prompts exist:
  - ``summary.jinja2``   — EMR-style clinical summary paragraph
  - ``diagnosis.jinja2`` — differential diagnoses with test recommendations
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import jinja2

from intake_pathways.evaluator import selected_complaints
from intake_pathways.models.case import CaseInfo

SUMMARY_SYSTEM_PROMPT = (
    "You are a medical assistant writing medium-length clinical notes for doctors."
)
DIAGNOSIS_SYSTEM_PROMPT = (
    "You are a medical AI assistant specializing in differential diagnosis and "
    "test recommendations. Provide evidence-based analysis with clear probability "
    "assessments and actionable recommendations."
)

NOT_RECORDED = "Not recorded"


def _vital(value: Any) -> str:
    """Format a vital-sign value, dropping a trailing ``.0``."""
    if value is None:
        return NOT_RECORDED
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _section(value: Any) -> Mapping[str, Any]:
    """A questionnaire section, or an empty one if it is not a JSON object."""
    return value if isinstance(value, Mapping) else {}


def _flagged(section: Any, *, exclude: tuple[str, ...] = ()) -> list[str]:
    """Keys of a checkbox section whose flag is exactly True."""
    if not isinstance(section, Mapping):
        return []
    return [k for k in selected_complaints(section) if k not in exclude]


class PromptManager:
    """Jinja2-based prompt renderer.

    Args:
        template_dir: optional override for the template directory.
            Defaults to ``template/`` sibling of this module.
    """

    summary_system_prompt = SUMMARY_SYSTEM_PROMPT
    diagnosis_system_prompt = DIAGNOSIS_SYSTEM_PROMPT

    def __init__(self, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "template"
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["tojson"] = lambda v: json.dumps(
            v, ensure_ascii=False, indent=2, default=str
        )
        self._env.filters["vital"] = _vital

    def render(self, template_name: str, **context) -> str:
        """Render a named template with arbitrary context."""
        template = self._env.get_template(template_name)
        return template.render(**context)

    def render_summary(self, case: CaseInfo, answers: Mapping[str, Any]) -> str:
        """Render the clinical-summary prompt.

        ``answers`` is the stored questionnaire (empty when the patient has
        not submitted one); vitals come from the case itself.
        """
        vitals = (
            case.vitals.model_dump(by_alias=True, exclude_none=True)
            if case.vitals is not None
            else {}
        )
        return self.render(
            "summary.jinja2",
            case=case,
            answers=dict(answers),
            vitals=vitals,
        )

    def render_diagnosis(self, case: CaseInfo, answers: Mapping[str, Any]) -> str:
        """Render the differential-diagnosis prompt.

        Pulls demographics from ``personalInfo``, ticked complaints from
        ``currentIllness``, positive history from ``medicalHistory`` (the
        ``none`` checkbox is skipped) and escalations from the adaptive
        questionnaire's ``overallRedFlags``.
        """
        personal = _section(answers.get("personalInfo"))
        adaptive = _section(answers.get("adaptiveQuestions"))
        red_flags = adaptive.get("overallRedFlags")
        return self.render(
            "diagnosis.jinja2",
            case=case,
            age=personal.get("age") or "Unknown",
            gender=personal.get("gender") or "Unknown",
            symptoms=_flagged(answers.get("currentIllness")),
            history=_flagged(answers.get("medicalHistory"), exclude=("none",)),
            red_flags=list(red_flags) if isinstance(red_flags, list) else [],
            vitals=case.vitals.model_dump() if case.vitals is not None else {},
        )
