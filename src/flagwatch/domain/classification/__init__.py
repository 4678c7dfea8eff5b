"""Classification of inbound order messages."""

from __future__ import annotations

from .classifier import (
    NATIONAL_PLACEHOLDER_REASON,
    STATE_PLACEHOLDER_REASON,
    Classification,
    TextClassifier,
    placeholder_reason,
)
from .date_range import DateRange, extract_date_range
from .extraction import Extractor, OracleExtractor, PatternExtractor, extract_reason
from .scope import Scope, detect_scope
from .text import html_to_text, message_text

__all__ = [
    "NATIONAL_PLACEHOLDER_REASON",
    "STATE_PLACEHOLDER_REASON",
    "Classification",
    "DateRange",
    "Extractor",
    "OracleExtractor",
    "PatternExtractor",
    "Scope",
    "TextClassifier",
    "detect_scope",
    "extract_date_range",
    "extract_reason",
    "html_to_text",
    "message_text",
    "placeholder_reason",
]
