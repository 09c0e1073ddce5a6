# src/kissing/table.py
"""
Known kissing numbers.

Each stored dimension maps to exactly one of ExactResult or BoundedResult;
dimensions without stored data are reported as UnknownResult.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class ExactResult:
    dimension: int
    value: int
    root_system: str
    diagram: str


@dataclass(frozen=True)
class BoundedResult:
    dimension: int
    lower: int
    upper: int


@dataclass(frozen=True)
class UnknownResult:
    dimension: int


KnownResult = ExactResult | BoundedResult | UnknownResult

NO_DIAGRAM = "(No Coxeter diagram exists)\n"

_D4_DIAGRAM = """
    o
    |
o---o---o
"""

_E8_DIAGRAM = """
o---o---o---o---o---o---o
                |
                o
"""

_ENTRIES: tuple[ExactResult | BoundedResult, ...] = (
    ExactResult(1, 2, "A1", "o\n"),
    ExactResult(2, 6, "A2", "o---o\n"),
    ExactResult(3, 12, "A3", "o---o---o\n"),
    ExactResult(4, 24, "D4", _D4_DIAGRAM),
    BoundedResult(5, 40, 44),
    BoundedResult(6, 72, 78),
    BoundedResult(7, 126, 134),
    ExactResult(8, 240, "E8", _E8_DIAGRAM),
    ExactResult(24, 196560, "Leech lattice", NO_DIAGRAM),
)

KNOWN_RESULTS: MappingProxyType[int, ExactResult | BoundedResult] = MappingProxyType(
    {entry.dimension: entry for entry in _ENTRIES}
)


def lookup(dimension: int) -> ExactResult | BoundedResult | None:
    """Stored entry for `dimension`, or None when nothing is known."""
    return KNOWN_RESULTS.get(dimension)


def result_for(dimension: int) -> KnownResult:
    return KNOWN_RESULTS.get(dimension) or UnknownResult(dimension)


def known_dimensions() -> list[int]:
    return sorted(KNOWN_RESULTS)
