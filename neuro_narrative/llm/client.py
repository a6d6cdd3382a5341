"""
Text generation backends.

The game only needs one capability from a language model: turn a prompt into
text. Anything with a matching ``generate`` method can drive the Dungeon
Master and the AI character, which keeps tests free of network calls.
"""

import logging
from typing import Optional, Protocol

from openai import OpenAI

from neuro_narrative.config import ConfigError, Settings

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Protocol for text generation — pluggable backend."""

    def generate(self, prompt: str) -> str: ...


class OpenAITextGenerator:
    """
    Chat-completions backend.

    Each call sends the prompt as a single user message. Requests are bounded
    by ``timeout`` seconds and retried once by the client on transient
    failures; anything beyond that propagates to the caller.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        timeout: float = 60.0,
        max_retries: int = 1,
        client: Optional[OpenAI] = None,
    ):
        if client is None:
            if not api_key:
                raise ConfigError("OPENAI_API_KEY is required for the OpenAI text generator")
            client = OpenAI(api_key=api_key, timeout=timeout, max_retries=max_retries)
        self._client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAITextGenerator":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.llm_timeout_seconds,
        )

    def generate(self, prompt: str) -> str:
        logger.debug("Requesting completion from %s (%d prompt chars)", self.model, len(prompt))
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.choices[0].message.content or ""
