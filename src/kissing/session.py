# src/kissing/session.py
"""
Session state machine.

The transition functions are pure: they take a Session and return a new one.
SessionController keeps the current Session for a host (REPL or TUI) and
notifies it after every change.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple

from kissing.query import DisplayMode, InvalidDimension, Report, invalid_report, query
from kissing.utility import parse_int_literal

log = logging.getLogger(__name__)


class SessionState(Enum):
    AWAITING_INPUT = "awaiting-input"
    SHOWING_REPORT = "showing-report"


@dataclass(frozen=True)
class Session:
    dimension: int | None = None       # None until the first valid submission
    mode: DisplayMode = DisplayMode.EXACT
    report: Report | None = None
    state: SessionState = SessionState.AWAITING_INPUT


def parse_dimension(text: str, max_dimension: int | None = None) -> int:
    n = parse_int_literal(text)
    if n is None or n < 1:
        raise InvalidDimension()
    if max_dimension is not None and n > max_dimension:
        raise InvalidDimension(f"Invalid dimension: {n} exceeds the limit of {max_dimension}")
    return n


def submit_dimension(session: Session, text: str, *, max_dimension: int | None = None) -> Session:
    try:
        n = parse_dimension(text, max_dimension)
        report = query(n, session.mode)
    except InvalidDimension as e:
        log.debug("rejected dimension %r: %s", text, e)
        return replace(session, report=invalid_report(str(e)), state=SessionState.SHOWING_REPORT)
    return replace(session, dimension=n, report=report, state=SessionState.SHOWING_REPORT)


def select_mode(session: Session, mode: DisplayMode | str) -> Session:
    mode = DisplayMode.parse(mode)
    if session.dimension is None:
        return replace(session, mode=mode)
    try:
        report = query(session.dimension, mode)
    except InvalidDimension as e:
        report = invalid_report(str(e))
    return replace(session, mode=mode, report=report, state=SessionState.SHOWING_REPORT)


# In memory session history
class HistoryItem(NamedTuple):
    dimension: int
    mode: DisplayMode
    timestamp: float


class SessionController:
    """
    Host-facing wrapper around the pure transitions.

    on_change, when given, is called with the new Session after every event
    so the host can re-render.
    """

    KEYMAP = {"e": DisplayMode.EXACT, "a": DisplayMode.ASYMPTOTIC}

    def __init__(
        self,
        mode: DisplayMode | str = DisplayMode.EXACT,
        *,
        max_dimension: int | None = None,
        on_change: Callable[[Session], None] | None = None,
    ):
        self.session = Session(mode=DisplayMode.parse(mode))
        self.max_dimension = max_dimension
        self.on_change = on_change
        self.quit_requested = False
        self._history: list[HistoryItem] = []

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def mode(self) -> DisplayMode:
        return self.session.mode

    @property
    def dimension(self) -> int | None:
        return self.session.dimension

    def _commit(self, new: Session) -> None:
        log.debug("session %s -> %s (n=%s, mode=%s)",
                  self.session.state.value, new.state.value, new.dimension, new.mode.value)
        self.session = new
        if self.on_change is not None:
            self.on_change(new)

    def submit_dimension(self, text: str) -> Report:
        new = submit_dimension(self.session, text, max_dimension=self.max_dimension)
        if new.report is not None and not new.report.is_error:
            self._history.append(HistoryItem(new.dimension, new.mode, time.time()))
        self._commit(new)
        return new.report

    def select_mode(self, mode: DisplayMode | str) -> Report | None:
        self._commit(select_mode(self.session, mode))
        return self.session.report

    def current_report(self) -> Report | None:
        return self.session.report

    def quit(self) -> None:
        self.quit_requested = True

    def handle_key(self, key: str) -> bool:
        """Apply a single-key command (e/a/q, any case). Returns False for unbound keys."""
        k = (key or "").lower()
        if k == "q":
            self.quit()
            return True
        if k in self.KEYMAP:
            self.select_mode(self.KEYMAP[k])
            return True
        return False

    def history(self) -> list[HistoryItem]:
        return list(self._history)
