# src/kissing/fmt.py
from __future__ import annotations

import re
from decimal import Decimal

from colorama import Fore, Style

from kissing.query import ASYMPTOTIC, BOUNDED, EXACT, INVALID, INVALID_DIMENSION, NO_DATA, Report
from kissing.runtime import CFG

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
_EXP_RE = re.compile(r"e([+-])(\d)$")

TITLE = "Kissing Numbers"
PROMPT_LABEL = "Dimension n: "
KL_HEADING = "Asymptotic Bounds (Kabatiansky–Levenshtein)"


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def format_sci(x: Decimal | float | int, digits: int = 3) -> str:
    """
    Scientific notation with `digits` fraction digits and an exponent of at
    least two digits ('%.3e' style), for values far beyond the float range too.
    """
    s = format(Decimal(x), f".{digits}e")
    # Decimal prints 'e+0'; match printf's 'e+00'
    return _EXP_RE.sub(r"e\g<1>0\g<2>", s)


def help_line(color: bool = True) -> str:
    keys = ("[E] Exact / Bounds", "[A] Asymptotic", "[Q] Quit")
    if not color:
        return "   ".join(keys)
    return "   ".join(f"{Fore.YELLOW}{k[:3]}{Style.RESET_ALL}{k[3:]}" for k in keys)


class _Painter:
    def __init__(self, color: bool):
        self.color = color

    def __call__(self, fore: str, text: str) -> str:
        return f"{fore}{text}{Style.RESET_ALL}" if self.color else text


def _render_exact(r: Report, c: _Painter) -> list[str]:
    return [
        f"{c(Fore.GREEN, 'Dimension:')} {r.dimension}",
        f"{c(Fore.GREEN, 'Exact Kissing Number:')} {r.value}",
        f"{c(Fore.GREEN, 'Root System:')} {r.root_system}",
        "",
        c(Fore.GREEN, "Coxeter Diagram:"),
        (r.diagram or "").rstrip("\n"),
    ]


def _render_bounded(r: Report, c: _Painter) -> list[str]:
    return [
        c(Fore.YELLOW, f"Dimension {r.dimension} (Unproven)"),
        "",
        f"{c(Fore.GREEN, 'Lower Bound:')} {r.lower_bound}",
        f"{c(Fore.RED, 'Upper Bound:')} {r.upper_bound}",
        "",
        c(Fore.YELLOW, "Exact kissing number not known."),
    ]


def _render_no_data(r: Report, c: _Painter) -> list[str]:
    return [
        c(Fore.YELLOW, f"Dimension {r.dimension}"),
        c(Fore.YELLOW, "No finite bounds stored."),
    ]


def _render_asymptotic(r: Report, c: _Painter, digits: int) -> list[str]:
    return [
        c(Fore.CYAN, KL_HEADING),
        "",
        f"{c(Fore.GREEN, 'Lower Bound:')} {format_sci(r.lower_bound, digits)}",
        f"{c(Fore.RED, 'Upper Bound:')} {format_sci(r.upper_bound, digits)}",
        "",
        c(Fore.YELLOW, "These bounds hold for sufficiently large dimensions."),
    ]


def format_report(report: Report, *, color: bool | None = None, sci_digits: int | None = None) -> str:
    """
    Render a Report as terminal text.

    color / sci_digits default to DISPLAY.COLOR / DISPLAY.SCI_DIGITS.
    """
    if color is None:
        color = bool(CFG("DISPLAY.COLOR", True))
    if sci_digits is None:
        sci_digits = int(CFG("DISPLAY.SCI_DIGITS", 3))
    c = _Painter(color)

    if report.status == EXACT:
        lines = _render_exact(report, c)
    elif report.status == BOUNDED:
        lines = _render_bounded(report, c)
    elif report.status == NO_DATA:
        lines = _render_no_data(report, c)
    elif report.status == ASYMPTOTIC:
        lines = _render_asymptotic(report, c, sci_digits)
    elif report.status == INVALID:
        lines = [c(Fore.RED, report.message or INVALID_DIMENSION)]
    else:
        raise ValueError(f"Unknown report status: {report.status!r}")
    return "\n".join(lines)
