# src/kissing/cli.py

"""
Kissing Numbers - how many unit spheres can touch a central one

Description:
    Reports the kissing number for a dimension n: the exact value or the
    best proven bounds where they are known, or the Kabatiansky–Levenshtein
    asymptotic bounds for any n.

usage: see kissing -h
"""

from __future__ import annotations

import argparse
import logging
import os
import platform
import sys
import textwrap
import traceback

from colorama import Fore, Style
from colorama import init as colorama_init

from kissing import __version__ as _ver
from kissing.config import load_settings
from kissing.display import (
    print_history,
    print_report,
    screen_header,
    show_intro_help,
    show_table,
)
from kissing.fmt import PROMPT_LABEL, help_line
from kissing.logging_config import CONSOLE_STDERR, CONSOLE_TEXTUAL, parse_level, setup_logging
from kissing.runtime import APPLY, CFG
from kissing.runtime import current as _rt_current
from kissing.session import Session, SessionController
from kissing.utility import UserInputError, clear_screen, flatten_dotted, typename

log = logging.getLogger(__name__)

# long spellings of the single-key commands handled by SessionController.handle_key
_KEY_WORDS = {"exact": "e", "asymptotic": "a", "quit": "q"}


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _configure_text_streams() -> None:
    # Respect explicit user choice
    if os.environ.get("PYTHONIOENCODING"):
        return
    try:
        # Only touch redirected output (pipes/files), leave TTY as-is
        if not sys.stdout.isatty():
            enc = (sys.stdout.encoding or "").lower()
            if platform.system() == "Windows" or enc in ("", "ascii", "us-ascii"):
                sys.stdout.reconfigure(encoding="utf-8", errors="replace")
                sys.stderr.reconfigure(encoding="utf-8", errors="replace")
    except (AttributeError, OSError, ValueError):
        # Never crash because of reconfigure
        pass


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    interactive commands:
      <n>            show the kissing number for dimension n
      e | exact      exact values and proven bounds
      a | asymptotic Kabatiansky–Levenshtein asymptotic bounds
      t | table      list stored dimensions
      hist           dimensions queried in this session
      h | help       help
      q | quit       leave
    """)

    p = argparse.ArgumentParser(
        prog="kissing",
        description="Kissing numbers — exact values, proven bounds and asymptotic estimates",
        usage=(
            "kissing [dimension] [--mode {exact,asymptotic}] [--profile PROFILE] [--no-color] [--debug]\n"
            "       kissing --tui\n"
            "       kissing -h | --help\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("dimension", nargs="?", default=None,
                   help="dimension to report once; omit for the interactive prompt")
    p.add_argument("--mode", choices=("exact", "asymptotic"), default=None,
                   help="display mode (default: BEHAVIOUR.DEFAULT_MODE from the profile)")
    p.add_argument("--profile", default=None,
                   help="profile name or path to a TOML profile (default: $KISSING_PROFILE or 'default')")
    p.add_argument("--tui", action="store_true", help="Start the full-screen terminal interface")
    p.add_argument("--no-color", action="store_true", help="Plain text output without ANSI colours")
    p.add_argument("--log-file", default=None, help="Also write log records to this file")
    p.add_argument("--debug", action="store_true", help="Verbose logging and full tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _apply_profile(args) -> None:
    selected = load_settings(args.profile)
    APPLY(selected)  # install into runtime
    rt = _rt_current()
    if args.no_color:
        rt.settings["DISPLAY"]["COLOR"] = False
    if args.debug:
        rt.debug = True

    level = logging.DEBUG if rt.debug else parse_level(CFG("LOGGING.LEVEL"))
    console = CONSOLE_TEXTUAL if args.tui else CONSOLE_STDERR
    setup_logging(level, args.log_file or CFG("LOGGING.FILE"), console)

    log.debug("active profile: %s (%s)", selected.name, selected._source)
    for k, v in sorted(flatten_dotted(rt.settings).items(), key=lambda kv: kv[0].lower()):
        log.debug("  %s = %r (%s)", k, v, typename(v))


def _make_controller(args, on_change=None) -> SessionController:
    mode = args.mode or CFG("BEHAVIOUR.DEFAULT_MODE", "exact")
    return SessionController(
        mode,
        max_dimension=CFG("LIMITS.MAX_DIMENSION", None),
        on_change=on_change,
    )


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)
    _configure_text_streams()

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.tui and args.dimension is not None:
        parser.error("a dimension cannot be combined with --tui")

    _apply_profile(args)

    if args.tui:
        from kissing.tui import KissingApp

        KissingApp(controller=_make_controller(args)).run()
        return 0

    # --- one-shot path ---
    if args.dimension is not None:
        ctl = _make_controller(args)
        report = ctl.submit_dimension(args.dimension)
        print_report(report)
        return 2 if report.is_error else 0

    return repl(args)


def repl(args) -> int:
    def _render(session: Session) -> None:
        print_report(session.report)

    ctl = _make_controller(args, on_change=_render)

    if CFG("DISPLAY.CLEAR_SCREEN", True) and not _rt_current().debug:
        clear_screen()
    print(screen_header())
    print(help_line(color=bool(CFG("DISPLAY.COLOR", True))))

    while not ctl.quit_requested:
        try:
            user_input = input(f"\n[{ctl.mode.value}] {PROMPT_LABEL}").strip()
            low = user_input.lower()

            if not low:
                ctl.quit()
                continue

            key = _KEY_WORDS.get(low, low)
            had_dimension = ctl.dimension is not None
            if ctl.handle_key(key):
                if key in SessionController.KEYMAP and not had_dimension:
                    print(f"Mode: {ctl.mode.value}")
                continue

            if low in {"h", "help"}:
                show_intro_help()
                continue

            if low in {"t", "table"}:
                show_table()
                continue

            if low in {"hist", "history"}:
                print_history(ctl.history())
                continue

            ctl.submit_dimension(user_input)

        except (EOFError, KeyboardInterrupt):
            print()
            ctl.quit()
        except UserInputError as e:
            _print_user_error(str(e))
        except Exception as e:
            if _rt_current().debug:
                traceback.print_exc()
            else:
                _print_user_error(f"{e.__class__.__name__}: {e}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
