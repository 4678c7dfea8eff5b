"""Two-tier reason extraction: the oracle first, deterministic patterns second."""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final, Protocol

from flagwatch.domain.errors import ExtractionOracleUnavailable
from flagwatch.domain.ports.extraction import Extraction

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flagwatch.domain.ports.extraction import ExtractionOracle

log = getLogger(__name__)

DEFAULT_ORACLE_INPUT_CHARS: Final[int] = 1500
MAX_REASON_CHARS: Final[int] = 80

REASON_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(rf"\b{prefix}\s+([^.,\n]{{1,{MAX_REASON_CHARS}}})(?=[.,\n]|$)", re.IGNORECASE)
    for prefix in (r"in\s+honou?r\s+of", r"in\s+memory\s+of", r"honou?ring", r"for")
)


class Extractor(Protocol):
    """One extraction strategy; returns ``None`` when it has nothing to offer."""

    name: str

    def __call__(self, text: str) -> Extraction | None: ...


@dataclass(slots=True)
class OracleExtractor:
    """Ask the extraction oracle, treating any failure as a miss."""

    oracle: ExtractionOracle
    max_chars: int = DEFAULT_ORACLE_INPUT_CHARS
    name: str = "oracle"

    def __call__(self, text: str) -> Extraction | None:
        if not text.strip():
            return None
        try:
            extraction = self.oracle(text[: self.max_chars])
        except ExtractionOracleUnavailable as exc:
            log.warning("Extraction oracle unavailable, falling back: %s", exc)
            return None
        if not extraction.reason:
            log.warning("Extraction oracle returned an empty reason, falling back")
            return None
        return extraction


@dataclass(slots=True)
class PatternExtractor:
    """Match "in honor of ...", "in memory of ...", "honoring ..." and "for ..."."""

    patterns: tuple[re.Pattern[str], ...] = REASON_PATTERNS
    name: str = "pattern"

    def __call__(self, text: str) -> Extraction | None:
        for pattern in self.patterns:
            match = pattern.search(text)
            if match is None:
                continue
            reason = _clean(match.group(1))
            if reason:
                log.debug("Pattern %s extracted reason %r", pattern.pattern, reason)
                # the detail cannot be inferred reliably without the oracle
                return Extraction(reason=reason, reason_detail=None)
        return None


def _clean(value: str) -> str:
    return " ".join(value.split()).strip(" \"'“”:;-")


def extract_reason(
    extractors: Iterable[Extractor],
    text: str,
    *,
    fallback_reason: str,
) -> tuple[Extraction, str]:
    """Return the first hit and the name of the extractor that produced it."""

    for extractor in extractors:
        extraction = extractor(text)
        if extraction is not None:
            return extraction, extractor.name
    log.info("No reason found in message text, using %r", fallback_reason)
    return Extraction(reason=fallback_reason, reason_detail=None), "default"
