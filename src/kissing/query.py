# src/kissing/query.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, Overflow
from enum import Enum
from typing import Any

from kissing.bounds import estimate
from kissing.table import BoundedResult, ExactResult, lookup
from kissing.utility import UserInputError

log = logging.getLogger(__name__)

INVALID_DIMENSION = "Invalid dimension"

# Report.status values
EXACT = "exact"
BOUNDED = "bounded-unproven"
NO_DATA = "no-data"
ASYMPTOTIC = "asymptotic"
INVALID = "invalid"


class InvalidDimension(UserInputError):
    def __init__(self, message: str = INVALID_DIMENSION):
        super().__init__(message)


class DisplayMode(Enum):
    EXACT = "exact"
    ASYMPTOTIC = "asymptotic"

    @classmethod
    def parse(cls, value: DisplayMode | str) -> DisplayMode:
        """Accept a DisplayMode, 'exact'/'asymptotic' or the key aliases 'e'/'a'."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        aliases = {"e": cls.EXACT, "a": cls.ASYMPTOTIC}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise UserInputError(f"Unknown mode: '{value}' (use 'exact' or 'asymptotic')") from None


@dataclass(frozen=True)
class Report:
    status: str
    dimension: int | None
    fields: tuple[tuple[str, Any], ...] = ()

    def get(self, label: str, default: Any = None) -> Any:
        for key, val in self.fields:
            if key == label:
                return val
        return default

    @property
    def value(self) -> int | None:
        return self.get("value")

    @property
    def root_system(self) -> str | None:
        return self.get("root_system")

    @property
    def diagram(self) -> str | None:
        return self.get("diagram")

    @property
    def lower_bound(self) -> int | Decimal | None:
        return self.get("lower_bound")

    @property
    def upper_bound(self) -> int | Decimal | None:
        return self.get("upper_bound")

    @property
    def message(self) -> str | None:
        return self.get("message")

    @property
    def is_error(self) -> bool:
        return self.status == INVALID


def invalid_report(message: str = INVALID_DIMENSION) -> Report:
    return Report(INVALID, None, (("message", message),))


def _check_dimension(dimension: Any) -> int:
    # bool is an int subclass; True is not a dimension
    if not isinstance(dimension, int) or isinstance(dimension, bool) or dimension < 1:
        raise InvalidDimension()
    return dimension


def _exact_report(n: int) -> Report:
    entry = lookup(n)
    if isinstance(entry, ExactResult):
        return Report(EXACT, n, (
            ("value", entry.value),
            ("root_system", entry.root_system),
            ("diagram", entry.diagram),
        ))
    if isinstance(entry, BoundedResult):
        return Report(BOUNDED, n, (
            ("lower_bound", entry.lower),
            ("upper_bound", entry.upper),
        ))
    return Report(NO_DATA, n)


def _asymptotic_report(n: int) -> Report:
    try:
        lower, upper = estimate(n)
    except Overflow:
        raise InvalidDimension(f"{INVALID_DIMENSION}: {n} is too large") from None
    return Report(ASYMPTOTIC, n, (
        ("lower_bound", lower),
        ("upper_bound", upper),
    ))


def query(dimension: int, mode: DisplayMode | str = DisplayMode.EXACT) -> Report:
    """
    Build the report for `dimension` in `mode`.

    Raises InvalidDimension for anything that is not a positive integer.
    Stateless: identical arguments always give equal reports.
    """
    n = _check_dimension(dimension)
    mode = DisplayMode.parse(mode)
    report = _exact_report(n) if mode is DisplayMode.EXACT else _asymptotic_report(n)
    log.debug("query(%d, %s) -> %s", n, mode.value, report.status)
    return report
