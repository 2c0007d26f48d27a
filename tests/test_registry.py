"""PathwayRegistry loading and lookup smoke tests.

Validates that the packaged YAML loads into 12 typed pathways and a
20-entry complaint mapping, and that inconsistent data is rejected.
"""

import pytest

from intake_pathways.models.question import LocationPickerQuestion, SliderQuestion
from intake_pathways.registry import (
    COMPLAINT_TO_PATHWAY,
    SYMPTOM_PATHWAYS,
    PathwayRegistry,
    get_default_registry,
    get_pathway,
)

EXPECTED_PATHWAYS = [
    "abdominalPain",
    "headache",
    "chestPain",
    "fever",
    "shortnessOfBreath",
    "dizziness",
    "nauseaVomitingDiarrhea",
    "injuryTrauma",
    "changeInConsciousness",
    "backPain",
    "neckPain",
    "eyeProblems",
]


# =====================================================================
# Loading tests
# =====================================================================


def test_registry_loads_all_pathways(registry):
    """All 12 pathways load in file order with matching ids."""
    assert list(registry.pathways) == EXPECTED_PATHWAYS
    for pathway_id, pathway in registry.pathways.items():
        assert pathway.pathway_id == pathway_id
        assert pathway.name, f"Pathway {pathway_id} missing name"
        assert pathway.questions, f"Pathway {pathway_id} has no questions"


def test_registry_loads_complaint_mapping(registry):
    """20 complaints map onto registry pathways."""
    assert len(registry.complaint_map) == 20
    for complaint, pathway_id in registry.complaint_map.items():
        assert pathway_id in registry.pathways, f"{complaint} -> unknown {pathway_id}"


def test_every_pathway_has_a_red_flag(registry):
    for pathway in registry.pathways.values():
        assert pathway.red_flag_qids, f"{pathway.pathway_id} has no red-flag questions"


def test_location_pickers(registry):
    """Only abdominal pain and headache carry a location picker."""
    with_location = {
        p.pathway_id: p.location_question.picker
        for p in registry.pathways.values()
        if p.location_question is not None
    }
    assert with_location == {"abdominalPain": "abdomen", "headache": "head"}
    assert isinstance(registry.pathways["headache"].questions[0], LocationPickerQuestion)


@pytest.mark.parametrize(
    "qid, threshold",
    [
        ("abSeverity", 8),
        ("hdSeverity", 9),
        ("cpSeverity", 8),
        ("itSeverity", 7),
        ("bpSeverity", 8),
    ],
)
def test_slider_thresholds(registry, qid, threshold):
    pathway = next(p for p in registry.pathways.values() if qid in {q.qid for q in p.questions})
    q = pathway.get_question(qid)
    assert isinstance(q, SliderQuestion)
    assert q.red_flag_threshold == threshold


# =====================================================================
# Lookup helpers
# =====================================================================


def test_module_constants_match_default_registry():
    assert list(SYMPTOM_PATHWAYS) == EXPECTED_PATHWAYS
    assert len(COMPLAINT_TO_PATHWAY) == 20
    assert get_pathway("fever").name == "Fever"


def test_module_constants_are_read_only():
    with pytest.raises(TypeError):
        SYMPTOM_PATHWAYS["new"] = SYMPTOM_PATHWAYS["fever"]
    with pytest.raises(TypeError):
        COMPLAINT_TO_PATHWAY["new"] = "fever"


def test_default_registry_is_read_only():
    registry = get_default_registry()
    with pytest.raises(TypeError):
        registry.pathways["new"] = registry.pathways["fever"]
    with pytest.raises(TypeError):
        registry.complaint_map["earPain"] = "headache"
    assert COMPLAINT_TO_PATHWAY["earPain"] == "fever"


def test_shared_pathways(registry):
    """Several complaints route to the same pathway."""
    assert registry.complaint_map["headInjury"] == "injuryTrauma"
    assert registry.complaint_map["earPain"] == "fever"
    assert sorted(registry.complaints_for("injuryTrauma")) == [
        "headInjury", "injectionSitePain", "injuryTrauma", "painInLimbs",
    ]


def test_unknown_pathway_raises(registry):
    with pytest.raises(KeyError):
        registry.get_pathway("toothache")


# =====================================================================
# Inconsistent data
# =====================================================================


def _write(tmp_path, pathways_yaml, mapping_yaml):
    (tmp_path / "pathways.yaml").write_text(pathways_yaml, encoding="utf-8")
    (tmp_path / "complaint_mapping.yaml").write_text(mapping_yaml, encoding="utf-8")
    return PathwayRegistry(tmp_path)


_MINIMAL_PATHWAY = """\
cough:
  name: Cough
  questions:
    - qid: cgBlood
      question_type: boolean
      label: Coughing blood?
      red_flag: true
      red_flag_values: [true]
"""


def test_custom_data_dir(tmp_path):
    r = _write(tmp_path, _MINIMAL_PATHWAY, "cough: cough\n")
    r.load()
    assert list(r.pathways) == ["cough"]
    assert r.complaint_map == {"cough": "cough"}


def test_mapping_to_unknown_pathway_rejected(tmp_path):
    r = _write(tmp_path, _MINIMAL_PATHWAY, "cough: sneeze\n")
    with pytest.raises(ValueError, match="unknown pathway"):
        r.load()


def test_unknown_question_type_rejected(tmp_path):
    bad = _MINIMAL_PATHWAY.replace("question_type: boolean", "question_type: dial")
    r = _write(tmp_path, bad, "cough: cough\n")
    with pytest.raises(ValueError, match="Unknown question_type"):
        r.load()


def test_missing_file(tmp_path):
    r = PathwayRegistry(tmp_path)
    with pytest.raises(FileNotFoundError):
        r.load()
