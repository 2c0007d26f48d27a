"""Evaluator unit tests — pathway resolution, visibility and red flags.

Resolution and red-flag tests run against the packaged registry.  The
packaged pathways carry no visibility conditions, so visibility tests build
small pathways inline.

Visibility matching (from evaluator.is_visible):
    collection vs collection — any shared value
    collection answer        — contains the required value
    collection requirement   — answer is one of the values
    scalar vs scalar         — equality (booleans never equal numbers)
    unanswered dependency    — hidden
"""

import pytest

from intake_pathways.evaluator import (
    detect_red_flags,
    is_visible,
    resolve_pathways,
    selected_complaints,
    visible_questions,
)
from intake_pathways.models.pathway import SymptomPathway
from intake_pathways.models.question import (
    BooleanQuestion,
    FreeTextQuestion,
    MultiSelectQuestion,
    Option,
    SingleSelectQuestion,
    VisibilityCondition,
)
from intake_pathways.models.response import LocationSelection
from intake_pathways.registry import SYMPTOM_PATHWAYS


def _ids(pathways):
    return [p.pathway_id for p in pathways]


def _conditional(depends_on, required_value):
    """A free-text question shown only when ``depends_on`` matches."""
    return FreeTextQuestion(
        qid="followUp",
        label="Tell us more",
        condition=VisibilityCondition(depends_on=depends_on, required_value=required_value),
    )


@pytest.fixture
def abdominal():
    return SYMPTOM_PATHWAYS["abdominalPain"]


@pytest.fixture
def dizziness():
    return SYMPTOM_PATHWAYS["dizziness"]


# =====================================================================
# resolve_pathways
# =====================================================================


class TestResolvePathways:
    """Complaint selection -> ordered, deduplicated pathways."""

    def test_empty_selection(self):
        assert resolve_pathways({}) == []
        assert resolve_pathways([]) == []

    def test_shared_pathway_is_deduplicated(self):
        """headInjury and injuryTrauma both map to injuryTrauma."""
        result = resolve_pathways({"headInjury": True, "injuryTrauma": True})
        assert _ids(result) == ["injuryTrauma"]

    def test_selection_order_preserved(self):
        result = resolve_pathways(["fever", "chestPain", "earPain", "headache"])
        assert _ids(result) == ["fever", "chestPain", "headache"]

    def test_first_occurrence_wins(self):
        result = resolve_pathways(["swellingEdema", "fever", "shortnessOfBreath"])
        assert _ids(result) == ["shortnessOfBreath", "fever"]

    def test_unmapped_complaints_dropped(self):
        result = resolve_pathways(["toothache", "otherDiseases", "backPain"])
        assert _ids(result) == ["backPain"]

    def test_only_true_flags_count(self):
        """False, truthy non-bools and free-text companions are ignored."""
        selection = {
            "fever": True,
            "headache": False,
            "chestPain": 1,
            "otherDiseasesText": "itchy skin",
        }
        assert _ids(resolve_pathways(selection)) == ["fever"]

    def test_output_has_no_duplicates_and_only_registry_pathways(self):
        result = resolve_pathways(list(SYMPTOM_PATHWAYS) + ["jointPain", "headInjury"])
        ids = _ids(result)
        assert len(ids) == len(set(ids))
        assert set(ids) <= set(SYMPTOM_PATHWAYS)

    def test_mapping_to_missing_pathway_dropped(self, abdominal):
        result = resolve_pathways(
            ["a", "b"],
            pathways={"abdominalPain": abdominal},
            mapping={"a": "abdominalPain", "b": "ghost"},
        )
        assert _ids(result) == ["abdominalPain"]

    def test_selected_complaints(self):
        assert selected_complaints({"a": True, "b": False, "c": True}) == ["a", "c"]


# =====================================================================
# is_visible
# =====================================================================


class TestIsVisible:
    """Visibility condition matching."""

    def test_no_condition_always_visible(self, abdominal):
        for q in abdominal.questions:
            assert is_visible(q, {}) is True

    def test_scalar_condition(self):
        q = _conditional("abOnsetType", "sudden")
        assert is_visible(q, {}) is False
        assert is_visible(q, {"abOnsetType": "gradual"}) is False
        assert is_visible(q, {"abOnsetType": "sudden"}) is True

    def test_none_answer_hides(self):
        q = _conditional("abOnsetType", "sudden")
        assert is_visible(q, {"abOnsetType": None}) is False

    def test_collection_answer_contains_required(self):
        q = _conditional("abAssociated", "vomiting")
        assert is_visible(q, {"abAssociated": ["nausea", "vomiting"]}) is True
        assert is_visible(q, {"abAssociated": ["nausea"]}) is False

    def test_required_collection_matches_scalar_answer(self):
        q = _conditional("abOnsetWhen", ["today", "1to3days"])
        assert is_visible(q, {"abOnsetWhen": "today"}) is True
        assert is_visible(q, {"abOnsetWhen": "overWeek"}) is False

    def test_both_collections_intersect(self):
        q = _conditional("abAssociated", ["fever", "vomiting"])
        assert is_visible(q, {"abAssociated": ["vomiting", "diarrhea"]}) is True
        assert is_visible(q, {"abAssociated": ["diarrhea"]}) is False

    def test_string_is_scalar(self):
        """A string answer is not treated as a collection of characters."""
        q = _conditional("notes", "a")
        assert is_visible(q, {"notes": "abc"}) is False

    def test_boolean_condition(self):
        q = _conditional("hadFall", True)
        assert is_visible(q, {"hadFall": True}) is True
        assert is_visible(q, {"hadFall": False}) is False

    def test_boolean_condition_does_not_match_numbers(self):
        q = _conditional("hadFall", True)
        assert is_visible(q, {"hadFall": 1}) is False
        assert is_visible(q, {"hadFall": [1]}) is False
        q = _conditional("hadFall", False)
        assert is_visible(q, {"hadFall": 0}) is False

    def test_numeric_condition_does_not_match_booleans(self):
        q = _conditional("count", [0, 1])
        assert is_visible(q, {"count": True}) is False
        assert is_visible(q, {"count": 1}) is True
        assert is_visible(q, {"count": 1.0}) is True

    def test_visible_questions_filters_in_order(self):
        onset = SingleSelectQuestion(
            qid="onset", label="Onset",
            options=(Option(id="sudden", label="Sudden"), Option(id="gradual", label="Gradual")),
        )
        pathway = SymptomPathway(
            pathway_id="p", name="P",
            questions=(onset, _conditional("onset", "sudden"), BooleanQuestion(qid="last", label="Last")),
        )
        assert [q.qid for q in visible_questions(pathway, {})] == ["onset", "last"]
        assert [q.qid for q in visible_questions(pathway, {"onset": "sudden"})] == [
            "onset", "followUp", "last",
        ]


# =====================================================================
# detect_red_flags
# =====================================================================


class TestDetectRedFlags:
    """Per-type red-flag rules."""

    def test_slider_threshold(self, abdominal):
        assert detect_red_flags(abdominal, {"abSeverity": 7}) == []
        assert detect_red_flags(abdominal, {"abSeverity": 8}) == ["abSeverity"]
        assert detect_red_flags(abdominal, {"abSeverity": 10}) == ["abSeverity"]

    def test_slider_custom_threshold(self):
        headache = SYMPTOM_PATHWAYS["headache"]
        assert detect_red_flags(headache, {"hdSeverity": 8}) == []
        assert detect_red_flags(headache, {"hdSeverity": 9}) == ["hdSeverity"]

    def test_slider_ignores_non_numbers(self, abdominal):
        assert detect_red_flags(abdominal, {"abSeverity": "9"}) == []
        assert detect_red_flags(abdominal, {"abSeverity": True}) == []

    def test_multi_select_any_overlap(self, dizziness):
        assert detect_red_flags(dizziness, {"dzAssociated": ["nausea", "doubleVision"]}) == [
            "dzAssociated"
        ]
        assert detect_red_flags(dizziness, {"dzAssociated": ["nausea"]}) == []

    def test_multi_select_scalar_answer_ignored(self, dizziness):
        assert detect_red_flags(dizziness, {"dzAssociated": "doubleVision"}) == []

    def test_single_select_membership(self):
        sob = SYMPTOM_PATHWAYS["shortnessOfBreath"]
        assert detect_red_flags(sob, {"sobSeverity": "cantSpeak"}) == ["sobSeverity"]
        assert detect_red_flags(sob, {"sobSeverity": "mild"}) == []

    def test_boolean(self, abdominal):
        assert detect_red_flags(abdominal, {"abRfBlood": True}) == ["abRfBlood"]
        assert detect_red_flags(abdominal, {"abRfBlood": False}) == []

    def test_boolean_ignores_numbers(self, abdominal):
        assert detect_red_flags(abdominal, {"abRfBlood": 1}) == []
        assert detect_red_flags(abdominal, {"abRfBlood": 1.0}) == []
        assert detect_red_flags(abdominal, {"abRfBlood": "true"}) == []

    def test_location_never_flags(self, abdominal):
        answers = {"abPainLocation": LocationSelection(region_ids=["RLQ"], laterality="right")}
        assert detect_red_flags(abdominal, answers) == []

    def test_unanswered_and_unknown_qids_skipped(self, abdominal):
        assert detect_red_flags(abdominal, {}) == []
        assert detect_red_flags(abdominal, {"abSeverity": None, "bogus": True}) == []

    def test_pathway_order(self, abdominal):
        answers = {"abRfPregnancy": True, "abRfFever": True, "abSeverity": 9}
        assert detect_red_flags(abdominal, answers) == ["abSeverity", "abRfFever", "abRfPregnancy"]

    def test_only_red_flag_questions_considered(self):
        q = MultiSelectQuestion(
            qid="m", label="M",
            options=(Option(id="x", label="X"),),
        )
        pathway = SymptomPathway(pathway_id="p", name="P", questions=(q,))
        assert detect_red_flags(pathway, {"m": ["x"]}) == []

    def test_idempotent(self, abdominal):
        answers = {"abSeverity": 9, "abRfFever": True}
        first = detect_red_flags(abdominal, answers)
        assert detect_red_flags(abdominal, answers) == first
        assert answers == {"abSeverity": 9, "abRfFever": True}
