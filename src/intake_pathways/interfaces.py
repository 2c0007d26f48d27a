"""Abstract interface for the clinical-note writer.

The SDK renders prompts but ships no model client of its own; the server
wires in ``intake_server.llm.OpenAINoteWriter``.  Tests substitute a fake.

Typical integration flow::

    prompts = PromptManager()
    writer: ClinicalNoteWriter = MyNoteWriter(...)

    text = await writer.complete(
        system=prompts.summary_system_prompt,
        prompt=prompts.render_summary(case, answers),
        temperature=0.4,
    )
"""

from abc import ABC, abstractmethod


class ClinicalNoteWriter(ABC):
    """Interface for generating free-text clinical notes from a prompt.

    Implementations receive a system prompt and a rendered user prompt and
    return the model's text.  An empty string means the model produced
    nothing; callers substitute their own placeholder.
    """

    @abstractmethod
    async def complete(
        self,
        *,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int | None = None,
    ) -> str:
        """Generate text for a single prompt.

        Parameters
        ----------
        system:
            Role instructions for the model.
        prompt:
            The rendered user prompt (see ``PromptManager``).
        temperature:
            Sampling temperature.
        max_tokens:
            Optional cap on the completion length.

        Returns
        -------
        str
            Generated text, stripped of surrounding whitespace.
        """
        ...
