"""Turn an inbound message into a candidate order."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from flagwatch.domain.model import ScopeKind

from .date_range import extract_date_range
from .extraction import PatternExtractor, extract_reason
from .scope import Scope, detect_scope

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .extraction import Extractor

log = getLogger(__name__)

NATIONAL_PLACEHOLDER_REASON: Final[str] = "Presidential Proclamation"
STATE_PLACEHOLDER_REASON: Final[str] = "Governor's Order"


def placeholder_reason(scope_kind: ScopeKind) -> str:
    """Default reason used when nothing better is known for ``scope_kind``."""

    if scope_kind is ScopeKind.NATIONAL:
        return NATIONAL_PLACEHOLDER_REASON
    return STATE_PLACEHOLDER_REASON


@dataclass(frozen=True, slots=True)
class Classification:
    scope: Scope
    reason: str | None = None
    reason_detail: str | None = None
    start: str | None = None
    end: str | None = None
    extracted_by: str | None = None

    @property
    def is_recognized(self) -> bool:
        return self.scope.is_recognized


def _default_extractors() -> tuple[Extractor, ...]:
    return (PatternExtractor(),)


@dataclass(slots=True)
class TextClassifier:
    """Classify a subject/body pair into scope, reason and date window.

    ``extractors`` are tried in order; the usual setup is an oracle-backed
    extractor followed by :class:`PatternExtractor`.
    """

    extractors: Sequence[Extractor] = field(default_factory=_default_extractors)

    def classify(self, subject: str | None, body: str) -> Classification:
        scope = detect_scope(subject)
        if not scope.is_recognized:
            log.info("No jurisdiction recognised in subject %r", subject)
            return Classification(scope=scope)

        extraction, extracted_by = extract_reason(
            self.extractors,
            body,
            fallback_reason=placeholder_reason(scope.kind),
        )
        window = extract_date_range(body)
        log.info(
            "Classified message: scope=%s reason=%r (%s) start=%s end=%s",
            scope.jurisdiction,
            extraction.reason,
            extracted_by,
            window.start,
            window.end,
        )
        return Classification(
            scope=scope,
            reason=extraction.reason,
            reason_detail=extraction.reason_detail,
            start=window.start,
            end=window.end,
            extracted_by=extracted_by,
        )
