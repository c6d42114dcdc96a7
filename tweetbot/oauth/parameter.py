"""
Signed request parameters and their canonical encoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
from urllib.parse import quote


def percent_encode(text: str) -> str:
    """
    Percent-encode ``text`` as UTF-8, keeping only ``A-Z a-z 0-9 - _ . ~``.

    Reserved sub-delimiters such as ``! * ' ( )`` are escaped as well, which
    is what the Twitter API expects in signature base strings.
    """

    return quote(text, safe="~")


@dataclass(frozen=True, slots=True)
class Parameter:
    """A key/value pair that takes part in the OAuth signature."""

    key: str
    value: str

    @property
    def raw(self) -> str:
        return f"{self.key}={self.value}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameter):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    def __lt__(self, other: "Parameter") -> bool:
        # Ordered by the unencoded form, not by the percent-encoded one.
        return self.raw < other.raw

    def __le__(self, other: "Parameter") -> bool:
        return self.raw <= other.raw

    def __gt__(self, other: "Parameter") -> bool:
        return self.raw > other.raw

    def __ge__(self, other: "Parameter") -> bool:
        return self.raw >= other.raw

    def encoded(self) -> str:
        return f"{percent_encode(self.key)}={percent_encode(self.value)}"


def join(params: Iterable[Parameter]) -> str:
    """Join parameters as ``key=value`` pairs separated by ``&``, in the given order."""

    return "&".join(param.encoded() for param in params)


def from_mapping(fields: dict[str, str]) -> list[Parameter]:
    return [Parameter(key, value) for key, value in fields.items()]
