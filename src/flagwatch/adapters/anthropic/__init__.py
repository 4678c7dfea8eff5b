"""Public interface for the Anthropic extraction oracle adapter."""

from __future__ import annotations

from .client import AnthropicExtractionOracle, parse_answer
from .schema import MessagesResponse, ReasonAnswer

__all__ = [
    "AnthropicExtractionOracle",
    "MessagesResponse",
    "ReasonAnswer",
    "parse_answer",
]
