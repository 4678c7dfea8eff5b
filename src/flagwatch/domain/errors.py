"""Error taxonomy for the order pipeline.

Only :class:`StoreUnavailable` is meant to reach callers; the extraction and
date-parsing errors are recovered where they are raised.
"""

from __future__ import annotations


class FlagWatchError(RuntimeError):
    """Base class for Flagwatch errors."""


class ExtractionOracleUnavailable(FlagWatchError):
    """The extraction oracle could not produce a usable answer."""


class DateParseFailure(FlagWatchError, ValueError):
    """A date token was present but could not be parsed."""

    def __init__(self, message: str, *, value: str) -> None:
        super().__init__(message)
        self.value = value


class StoreUnavailable(FlagWatchError):
    """The order store failed during a read or a write."""


class InvalidJurisdictionError(FlagWatchError, ValueError):
    """A jurisdiction code is not one of the known states or the national key."""
