"""Intake constants shared across the SDK.

These values are referenced by the evaluator, the question models and the
pathway registry.  They mirror conventions encoded in the YAML data under
``intake_pathways/data/``.

The slider red-flag threshold can be overridden via an environment variable
so that deployments can adjust the escalation cut-off without code changes.
"""

import os

# Slider questions marked as red flags trigger when the answer is >= this
# value, unless the question names its own threshold.
# Overridable via DEFAULT_SLIDER_RED_FLAG_THRESHOLD env var.
DEFAULT_SLIDER_RED_FLAG_THRESHOLD = float(
    os.getenv("DEFAULT_SLIDER_RED_FLAG_THRESHOLD", "8")
)

# Abdominal regions, row by row as drawn on the 3x3 picker grid.
ABDOMEN_REGIONS: tuple[str, ...] = (
    "RUQ", "epigastric", "LUQ",
    "rightFlank", "periumbilical", "leftFlank",
    "RLQ", "suprapubic", "LLQ",
)

# Head regions.  "diffuse" means the whole head.
HEAD_REGIONS: tuple[str, ...] = (
    "frontal", "temporalLeft", "temporalRight",
    "occipital", "vertex", "diffuse",
)

# Picker kind -> allowed region ids.
LOCATION_REGIONS: dict[str, tuple[str, ...]] = {
    "abdomen": ABDOMEN_REGIONS,
    "head": HEAD_REGIONS,
}

LATERALITY_VALUES: tuple[str, ...] = ("bilateral", "left", "right", "notApplicable")

# Human-readable names for the question types, used in API listings.
QUESTION_TYPE_NAMES: dict[str, str] = {
    "single_select": "Single choice",
    "multi_select": "Multiple choice",
    "slider": "Numeric slider",
    "boolean": "Yes / No",
    "location_picker": "Body location",
    "free_text": "Free text",
}
