"""OpenAI-backed ClinicalNoteWriter."""

import logging

from openai import AsyncOpenAI

from intake_pathways.interfaces import ClinicalNoteWriter

logger = logging.getLogger(__name__)


class OpenAINoteWriter(ClinicalNoteWriter):
    """Chat-completions note writer.

    Client errors (``openai.RateLimitError`` and friends) propagate to the
    server's exception handlers.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client if client is not None else AsyncOpenAI(api_key=api_key)
        self._model = model

    async def complete(
        self,
        *,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int | None = None,
    ) -> str:
        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            **kwargs,
        )
        if not response.choices:
            logger.warning("OpenAI returned no choices (model=%s)", self._model)
            return ""
        content = response.choices[0].message.content or ""
        return content.strip()
