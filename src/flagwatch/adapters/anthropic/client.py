"""Extraction oracle backed by the Anthropic Messages API."""

from __future__ import annotations

import asyncio
import json
import re
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final, cast

import httpx
from pydantic import ValidationError

from flagwatch.adapters.http_resilience import ResilientClient
from flagwatch.domain.errors import ExtractionOracleUnavailable
from flagwatch.domain.ports.extraction import Extraction

from .schema import ErrorResponse, MessagesResponse, ReasonAnswer

if TYPE_CHECKING:
    from collections.abc import Callable

    from flagwatch.config.http_resilience import ResilienceConfig
    from flagwatch.config.oracle import OracleConfig

log = getLogger(__name__)

MESSAGES_PATH: Final[str] = "/v1/messages"

PROMPT_TEMPLATE: Final[str] = (
    "The following text announces that flags are to be flown at half-staff.\n"
    "Reply with a single JSON object and nothing else, with two keys:\n"
    '"reason": the person or event being honored, in at most a few words, and\n'
    '"reason_detail": one short phrase saying who they were or what happened, '
    "or null if the text does not say.\n\n"
    "Text:\n{text}"
)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def _loop_is_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def parse_answer(text: str) -> Extraction:
    """Turn the model's reply into an :class:`Extraction`.

    Prose or code fences around the JSON object are tolerated.
    """

    match = _JSON_OBJECT.search(text)
    if match is None:
        raise ExtractionOracleUnavailable("Oracle reply contained no JSON object")
    try:
        answer = ReasonAnswer.model_validate(json.loads(match.group(0)))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ExtractionOracleUnavailable(f"Oracle reply was not usable: {exc}") from exc
    return Extraction(reason=answer.reason, reason_detail=answer.reason_detail)


@dataclass(slots=True)
class AnthropicExtractionOracle:
    config: OracleConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, text: str) -> Extraction:
        """Blocking call; must not be made from inside a running event loop."""

        if _loop_is_running():
            raise ExtractionOracleUnavailable("Oracle cannot be called from a running event loop")
        return asyncio.run(self._extract_async(text[: self.config.max_input_chars]))

    def build_request(self, text: str) -> dict[str, object]:
        return {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": [{"role": "user", "content": PROMPT_TEMPLATE.format(text=text)}],
        }

    async def _extract_async(self, text: str) -> Extraction:
        resilience = self.config.effective_resilience()
        try:
            async with self.client_factory(resilience) as client:
                response = await client.post(
                    MESSAGES_PATH,
                    json=self.build_request(text),
                    headers={"x-api-key": self.config.api_key},
                )
        except httpx.HTTPError as exc:
            log.warning("Anthropic request failed: %r", exc)
            raise ExtractionOracleUnavailable(f"Anthropic request failed: {exc}") from exc

        payload = self._payload(response)
        try:
            message = MessagesResponse.model_validate(payload)
        except ValidationError as exc:
            raise ExtractionOracleUnavailable("Unexpected Anthropic response payload") from exc

        extraction = parse_answer(message.text)
        log.debug("Oracle extracted reason %r", extraction.reason)
        return extraction

    @staticmethod
    def _payload(response: httpx.Response) -> object:
        try:
            payload = response.json()
        except ValueError as exc:
            raise ExtractionOracleUnavailable(
                f"Anthropic returned a non-JSON body (HTTP {response.status_code})"
            ) from exc

        if isinstance(payload, dict) and payload.get("type") == "error":
            try:
                error = ErrorResponse.model_validate(payload).error
            except ValidationError:
                message = "unknown error"
            else:
                message = f"{error.type}: {error.message}"
            log.error("Anthropic API error (HTTP %s) %s", response.status_code, message)
            raise ExtractionOracleUnavailable(f"Anthropic API error: {message}")

        if response.is_error:
            raise ExtractionOracleUnavailable(f"Anthropic returned HTTP {response.status_code}")
        return payload


if TYPE_CHECKING:
    from flagwatch.domain.ports.extraction import ExtractionOracle

    _oracle_check: ExtractionOracle = AnthropicExtractionOracle(cast("OracleConfig", object()))
