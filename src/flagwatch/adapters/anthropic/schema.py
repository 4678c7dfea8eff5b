"""Pydantic models describing the Anthropic Messages API payloads we use."""

from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Width of the reason columns in the flag_order table.
MAX_ANSWER_CHARS: Final[int] = 255


def _clip_text(value: object) -> object:
    if isinstance(value, str):
        collapsed = " ".join(value.split())
        return collapsed[:MAX_ANSWER_CHARS].rstrip() or None
    return value


class AnthropicBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ContentBlock(AnthropicBaseModel):
    type: str
    text: str | None = None


class Usage(AnthropicBaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class MessagesResponse(AnthropicBaseModel):
    id: str | None = None
    role: Literal["assistant"] = "assistant"
    model: str | None = None
    content: list[ContentBlock] = Field(default_factory=list)
    stop_reason: str | None = None
    usage: Usage | None = None

    @property
    def text(self) -> str:
        return "".join(block.text or "" for block in self.content if block.type == "text")


class ErrorDetail(AnthropicBaseModel):
    type: str
    message: str


class ErrorResponse(AnthropicBaseModel):
    type: Literal["error"]
    error: ErrorDetail


class ReasonAnswer(AnthropicBaseModel):
    """The JSON object the model is asked to reply with."""

    reason: str
    reason_detail: str | None = None

    _normalize_reason = field_validator("reason", mode="before")(_clip_text)
    _normalize_detail = field_validator("reason_detail", mode="before")(_clip_text)
