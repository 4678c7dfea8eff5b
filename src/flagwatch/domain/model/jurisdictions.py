"""Static jurisdiction reference data: the national key plus 50 states and DC."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from flagwatch.domain.errors import InvalidJurisdictionError

if TYPE_CHECKING:
    from collections.abc import Mapping

NATIONAL: Final[str] = "national"


@dataclass(frozen=True, slots=True)
class Jurisdiction:
    code: str
    name: str
    aliases: tuple[str, ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


STATES: Final[tuple[Jurisdiction, ...]] = (
    Jurisdiction("AL", "Alabama"),
    Jurisdiction("AK", "Alaska"),
    Jurisdiction("AZ", "Arizona"),
    Jurisdiction("AR", "Arkansas"),
    Jurisdiction("CA", "California"),
    Jurisdiction("CO", "Colorado"),
    Jurisdiction("CT", "Connecticut"),
    Jurisdiction("DE", "Delaware"),
    Jurisdiction(
        "DC",
        "District of Columbia",
        aliases=("Washington DC", "Washington D.C.", "Washington, D.C."),
    ),
    Jurisdiction("FL", "Florida"),
    Jurisdiction("GA", "Georgia"),
    Jurisdiction("HI", "Hawaii", aliases=("Hawai'i", "Hawaiʻi")),
    Jurisdiction("ID", "Idaho"),
    Jurisdiction("IL", "Illinois"),
    Jurisdiction("IN", "Indiana"),
    Jurisdiction("IA", "Iowa"),
    Jurisdiction("KS", "Kansas"),
    Jurisdiction("KY", "Kentucky"),
    Jurisdiction("LA", "Louisiana"),
    Jurisdiction("ME", "Maine"),
    Jurisdiction("MD", "Maryland"),
    Jurisdiction("MA", "Massachusetts"),
    Jurisdiction("MI", "Michigan"),
    Jurisdiction("MN", "Minnesota"),
    Jurisdiction("MS", "Mississippi"),
    Jurisdiction("MO", "Missouri"),
    Jurisdiction("MT", "Montana"),
    Jurisdiction("NE", "Nebraska"),
    Jurisdiction("NV", "Nevada"),
    Jurisdiction("NH", "New Hampshire"),
    Jurisdiction("NJ", "New Jersey"),
    Jurisdiction("NM", "New Mexico"),
    Jurisdiction("NY", "New York"),
    Jurisdiction("NC", "North Carolina"),
    Jurisdiction("ND", "North Dakota"),
    Jurisdiction("OH", "Ohio"),
    Jurisdiction("OK", "Oklahoma"),
    Jurisdiction("OR", "Oregon"),
    Jurisdiction("PA", "Pennsylvania"),
    Jurisdiction("RI", "Rhode Island"),
    Jurisdiction("SC", "South Carolina"),
    Jurisdiction("SD", "South Dakota"),
    Jurisdiction("TN", "Tennessee"),
    Jurisdiction("TX", "Texas"),
    Jurisdiction("UT", "Utah"),
    Jurisdiction("VT", "Vermont"),
    Jurisdiction("VA", "Virginia"),
    Jurisdiction("WA", "Washington"),
    Jurisdiction("WV", "West Virginia"),
    Jurisdiction("WI", "Wisconsin"),
    Jurisdiction("WY", "Wyoming"),
)

STATES_BY_CODE: Final[Mapping[str, Jurisdiction]] = MappingProxyType(
    {state.code: state for state in STATES}
)
STATE_CODES: Final[frozenset[str]] = frozenset(STATES_BY_CODE)

# Upper-case keys, longest first, so "WEST VIRGINIA" is tried before "VIRGINIA" and
# "ARKANSAS" before "KANSAS".
STATE_NAME_INDEX: Final[tuple[tuple[str, str], ...]] = tuple(
    sorted(
        ((name.upper(), state.code) for state in STATES for name in state.names),
        key=lambda item: len(item[0]),
        reverse=True,
    )
)


def normalize_state_code(value: str) -> str:
    """Return the upper-case state code or raise :class:`InvalidJurisdictionError`."""

    code = value.strip().upper()
    if code not in STATE_CODES:
        raise InvalidJurisdictionError(f"Invalid state code: {value!r}")
    return code


def state_name(code: str) -> str:
    return STATES_BY_CODE[normalize_state_code(code)].name
