"""
Model transport for content tagging.

This package contains everything that talks to the generative model:
- The transport protocol the pipeline depends on
- An OpenAI-compatible chat-completions client
"""

from .openai_client import LLMTransport, OpenAITransport

__all__ = [
    "LLMTransport",
    "OpenAITransport",
]
