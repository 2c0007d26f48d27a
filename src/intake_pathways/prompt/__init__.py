"""Prompt rendering for the clinical-note writer.

Provides ``PromptManager``, a Jinja2-based template engine that renders case
data into summary and differential-diagnosis prompts.
"""

from intake_pathways.prompt.manager import PromptManager

__all__ = ["PromptManager"]
