# src/kissing/display.py
from __future__ import annotations

import sys
import time
from typing import TextIO

from colorama import Fore, Style

from kissing import __version__
from kissing.fmt import KL_HEADING, TITLE, format_report, help_line
from kissing.query import Report
from kissing.runtime import CFG
from kissing.session import HistoryItem
from kissing.table import BoundedResult, ExactResult, known_dimensions, lookup
from kissing.utility import clear_screen, get_terminal_width


def _color() -> bool:
    return bool(CFG("DISPLAY.COLOR", True))


def screen_header() -> str:
    text = f"{TITLE} v{__version__} — sphere packings by dimension"
    if not _color():
        return text
    return f"{Fore.YELLOW}{Style.BRIGHT}{text}{Style.RESET_ALL}"


def _rule() -> str:
    return "─" * min(get_terminal_width(), 60)


def print_report(report: Report | None, *, out: TextIO | None = None) -> None:
    """Print a report framed by rules; errors go to stderr."""
    if report is None:
        return
    if out is None:
        out = sys.stderr if report.is_error else sys.stdout
    print(_rule(), file=out)
    print(format_report(report, color=_color()), file=out)
    print(_rule(), file=out)


def show_intro_help(*, clear: bool = False) -> None:
    if clear:
        clear_screen()
    c = _color()
    g = Fore.GREEN if c else ""
    r = Style.RESET_ALL if c else ""
    print(screen_header())
    print()
    print("Enter a dimension n (a positive integer) to see its kissing number.")
    print()
    print(f"  {g}e{r}, exact        show exact values / proven bounds (default)")
    print(f"  {g}a{r}, asymptotic   show {KL_HEADING}")
    print(f"  {g}t{r}, table        list all dimensions with stored results")
    print(f"  {g}hist{r}, history   dimensions queried in this session")
    print(f"  {g}h{r}, help         this help")
    print(f"  {g}q{r}, quit         leave (an empty line quits too)")
    print()
    print(help_line(color=c))


def show_table() -> None:
    c = _color()
    head = f"{'n':>3}  {'kissing number':<16}  root system"
    print(f"{Fore.CYAN}{head}{Style.RESET_ALL}" if c else head)
    for n in known_dimensions():
        entry = lookup(n)
        if isinstance(entry, ExactResult):
            print(f"{n:>3}  {entry.value:<16}  {entry.root_system}")
        elif isinstance(entry, BoundedResult):
            bounds = f"{entry.lower} – {entry.upper}"
            print(f"{n:>3}  {bounds:<16}  (unproven)")


def print_history(items: list[HistoryItem]) -> None:
    if not items:
        print("History is empty.")
        return
    for item in items:
        ts = time.strftime("%H:%M:%S", time.localtime(item.timestamp))
        print(f"{ts}  n={item.dimension:<12}  mode={item.mode.value}")
