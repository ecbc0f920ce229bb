"""File selectors: how a caller identifies the one file to download."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from gdrivedl.errors import InvalidInputError


@dataclass(slots=True, frozen=True)
class ById:
    file_id: str


@dataclass(slots=True, frozen=True)
class ByExactName:
    name: str

    def matches(self, name: str) -> bool:
        return name == self.name


@dataclass(slots=True, frozen=True)
class ByNameContains:
    partial: str

    def matches(self, name: str) -> bool:
        return self.partial in name


@dataclass(slots=True, frozen=True)
class ByRegex:
    """
    Full-match regular expression on the file name.

    The pattern is compiled on construction; an invalid pattern raises
    InvalidInputError before any Drive request is made.
    """

    pattern: str
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.pattern)
        except re.error as exc:
            raise InvalidInputError(
                "Invalid regular expression",
                details={"pattern": self.pattern},
                cause=exc,
            ) from exc
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, name: str) -> bool:
        return self._compiled.fullmatch(name) is not None


Selector = Union[ById, ByExactName, ByNameContains, ByRegex]


def describe(selector: Selector) -> str:
    """Human-readable form used in error messages and logs."""
    if isinstance(selector, ById):
        return f"id {selector.file_id!r}"
    if isinstance(selector, ByExactName):
        return f"name {selector.name!r}"
    if isinstance(selector, ByNameContains):
        return f"name containing {selector.partial!r}"
    return f"name matching regex {selector.pattern!r}"
