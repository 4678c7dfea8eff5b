"""Decide which jurisdiction a message subject is about."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from flagwatch.domain.model import NATIONAL, STATE_CODES, ScopeKind
from flagwatch.domain.model.jurisdictions import STATE_NAME_INDEX

NATIONAL_PHRASES: Final[tuple[str, ...]] = (
    "UNITED STATES",
    "NATIONWIDE",
    "ALL U.S.",
    "US FLAG",
    "U.S. FLAG",
    "U. S. FLAG",
    "U S FLAG",
)

# Whole words only; a trailing plural "S" is allowed so "US FLAG" also
# matches "US FLAGS" but never "CAMPUS FLAGS".
_NATIONAL_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(rf"(?<![A-Z]){re.escape(phrase)}S?(?![A-Z])") for phrase in NATIONAL_PHRASES
)
_NAME_PATTERNS: Final[tuple[tuple[re.Pattern[str], str], ...]] = tuple(
    (re.compile(rf"(?<![A-Z]){re.escape(name)}(?![A-Z])"), code)
    for name, code in STATE_NAME_INDEX
)
_CODE_PATTERN = re.compile(r"\b([A-Z]{2})\b")


@dataclass(frozen=True, slots=True)
class Scope:
    kind: ScopeKind
    state_code: str | None = None

    @classmethod
    def national(cls) -> Scope:
        return cls(kind=ScopeKind.NATIONAL)

    @classmethod
    def state(cls, code: str) -> Scope:
        return cls(kind=ScopeKind.STATE, state_code=code)

    @classmethod
    def unrecognized(cls) -> Scope:
        return cls(kind=ScopeKind.UNRECOGNIZED)

    @property
    def is_recognized(self) -> bool:
        return self.kind is not ScopeKind.UNRECOGNIZED

    @property
    def jurisdiction(self) -> str | None:
        """Store key for this scope, ``None`` when unrecognized."""

        if self.kind is ScopeKind.NATIONAL:
            return NATIONAL
        return self.state_code


def is_national_subject(subject: str) -> bool:
    upper = subject.upper()
    return any(pattern.search(upper) for pattern in _NATIONAL_PATTERNS)


def detect_state(subject: str) -> str | None:
    """Return the state code named in ``subject``, if any.

    Full names are matched case-insensitively. Bare two-letter codes only
    count when written in capitals, so that "in" or "or" in running text is
    never read as Indiana or Oregon.
    """

    upper = subject.upper()
    for pattern, code in _NAME_PATTERNS:
        if pattern.search(upper):
            return code
    for match in _CODE_PATTERN.finditer(subject):
        if match.group(1) in STATE_CODES:
            return match.group(1)
    return None


def detect_scope(subject: str | None) -> Scope:
    """Classify a subject line; national phrases win over any state match."""

    if not subject or not subject.strip():
        return Scope.unrecognized()
    if is_national_subject(subject):
        return Scope.national()
    code = detect_state(subject)
    if code is None:
        return Scope.unrecognized()
    return Scope.state(code)
