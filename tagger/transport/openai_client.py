"""
OpenAI-compatible chat-completions transport.

Sends one prompt, returns the model's raw text. Works against the OpenAI API
or any server exposing the same endpoint (vLLM, Ollama, ...), selected by
base_url. Timeouts and retries with exponential backoff are delegated to the
openai client.
"""

import logging
from typing import Optional, Protocol

import openai
from openai import OpenAI

from ..config import TransportConfig
from ..exceptions import ConfigurationError, MalformedResponseError, TransportError

# Suppress OpenAI HTTP logging
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


class LLMTransport(Protocol):
    """Protocol for anything that can turn a prompt into raw model text."""

    def complete(self, prompt: str) -> str:
        """
        Send a prompt and return the raw reply.

        Raises:
            TransportError: If the endpoint failed or returned an error status
            MalformedResponseError: If the reply carried no text
        """
        ...


class OpenAITransport:
    """
    Transport backed by the openai SDK.

    Args:
        config: Generation settings and connection options
        client: Pre-built OpenAI client (created from config when omitted)
    """

    def __init__(self, config: Optional[TransportConfig] = None, client: Optional[OpenAI] = None):
        self.config = config or TransportConfig()

        if client is None:
            if not self.config.api_key:
                raise ConfigurationError(
                    "No API key configured. Set OPENAI_API_KEY or transport.api_key."
                )
            client = OpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                max_retries=self.config.max_retries,
            )

        self.client = client
        logger.info("OpenAI transport ready with model: %s", self.config.model_name)

    def complete(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.config.model_name,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except openai.APIStatusError as e:
            logger.error("Model API error (status %s): %s", e.status_code, e.message)
            raise TransportError(f"Model API returned status {e.status_code}") from e
        except openai.APIError as e:
            logger.error("Error calling model API: %s", e)
            raise TransportError(f"Model API request failed: {e}") from e

        choices = getattr(response, "choices", None)
        if not choices:
            raise MalformedResponseError("Model response contained no choices")

        content = choices[0].message.content
        if content is None:
            raise MalformedResponseError("Model response contained no message content")

        logger.debug("Model response: %s", content)
        return content

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
