"""Kissing Numbers — Textual TUI.

Launch with:  kissing --tui
"""

from __future__ import annotations

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Input, Label, Static

from kissing.fmt import PROMPT_LABEL, TITLE as APP_TITLE, format_report, help_line, strip_ansi
from kissing.runtime import CFG
from kissing.session import Session, SessionController


def _color() -> bool:
    return bool(CFG("DISPLAY.COLOR", True))


class KissingApp(App[None]):
    """Dimension prompt on top, bordered report in the middle, key help at the bottom."""

    TITLE = APP_TITLE

    CSS = """
    #input-row {
        height: 3;
        padding: 0 1;
    }

    #input-row Label {
        padding: 1 1 0 0;
    }

    #dimension {
        width: 16;
    }

    #report-box {
        height: 1fr;
        border: round $primary;
        border-title-color: $text;
        padding: 0 1;
    }

    #help {
        height: 1;
        padding: 0 1;
    }
    """

    # ctrl+e / ctrl+a take priority over the Input's own home/end shortcuts
    BINDINGS = [
        Binding("ctrl+e", "command_key('e')", "Exact", priority=True),
        Binding("ctrl+a", "command_key('a')", "Asymptotic", priority=True),
        Binding("ctrl+q", "command_key('q')", "Quit", priority=True),
        Binding("e", "command_key('e')", "Exact", show=False),
        Binding("a", "command_key('a')", "Asymptotic", show=False),
        Binding("q", "command_key('q')", "Quit", show=False),
        Binding("escape", "leave_input", "Leave input", show=False, priority=True),
    ]

    def __init__(self, controller: SessionController | None = None, **kw) -> None:
        super().__init__(**kw)
        self.controller = controller or SessionController()
        self.controller.on_change = self._render_session
        self.report_text = ""
        self.help_text = ""

    def compose(self) -> ComposeResult:
        with Horizontal(id="input-row"):
            yield Label(PROMPT_LABEL)
            yield Input(placeholder="e.g. 8", id="dimension")
        with VerticalScroll(id="report-box"):
            yield Static("", id="report")
        self.help_text = help_line(color=_color())
        yield Static(Text.from_ansi(self.help_text), id="help")

    def on_mount(self) -> None:
        self.query_one("#report-box", VerticalScroll).border_title = APP_TITLE
        self.query_one("#dimension", Input).focus()
        self._render_session(self.controller.session)

    # ── rendering ───────────────────────────────────────────

    def _render_session(self, session: Session) -> None:
        self.sub_title = f"mode: {session.mode.value}"
        if session.report is None:
            return
        ansi = format_report(session.report, color=_color())
        self.report_text = strip_ansi(ansi)
        self.query_one("#report", Static).update(Text.from_ansi(ansi))

    # ── events ──────────────────────────────────────────────

    @on(Input.Submitted, "#dimension")
    def _on_submit(self, event: Input.Submitted) -> None:
        self.controller.submit_dimension(event.value)

    def action_command_key(self, key: str) -> None:
        self.controller.handle_key(key)
        if self.controller.quit_requested:
            self.exit()

    def action_leave_input(self) -> None:
        self.query_one("#report-box", VerticalScroll).focus()
