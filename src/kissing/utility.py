# src/kissing/utility.py
from __future__ import annotations

import os
import re
import shutil
import sys


class KissingError(Exception):
    """Base class for every error raised by the kissing package."""


class UserInputError(KissingError):
    pass


# ---- integer parsing ----
_THIN_SPACES = ("\u2009", "\u202F", "\u00A0")  # thin, narrow no-break, no-break
_SEP_CLASS = r"[ ,_\u00A0\u2009\u202F]"       # spaces/commas/underscores & NBSP variants
_GROUPED_RE = re.compile(rf"^[+-]?\d{{1,3}}(?:{_SEP_CLASS}\d{{3}})+$")
_PLAIN_RE = re.compile(r"[+-]?\d[\d_]*")


def parse_int_literal(text: str | None) -> int | None:
    """Accepts: 42  -7  +8  1_000  1,000  1 000 000
       Rejects: 3.14  8.000  1,23  abc  ''  0x10"""

    if text is None:
        return None

    s = text.strip()
    if not s:
        return None

    for ch in _THIN_SPACES:
        s = s.replace(ch, " ")

    if _PLAIN_RE.fullmatch(s):
        try:
            return int(s.replace("_", ""))
        except ValueError:
            return None

    if _GROUPED_RE.match(s):
        compact = re.sub(_SEP_CLASS, "", s)
        try:
            return int(compact)
        except ValueError:
            return None

    return None


# ---- terminal helpers ----

def clear_screen(keep_scrollback: bool = False) -> None:
    """
    Clear the terminal screen.
    - On Windows: uses 'cls'
    - On POSIX: ANSI sequences; optionally clear scrollback
    """
    try:
        if os.name == "nt":
            os.system("cls")
        else:
            seq = "\033[H\033[2J" if keep_scrollback else "\033[3J\033[H\033[2J"
            sys.stdout.write(seq)
            sys.stdout.flush()
    except OSError:
        pass


def get_terminal_width(default=80):
    """
    Return the terminal's character width if detected, else the default
    value (80 by default).
    """
    try:
        return shutil.get_terminal_size().columns
    except Exception:
        return default


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
