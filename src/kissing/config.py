from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import TYPE_CHECKING, Any

try:
    import tomllib as toml
except ImportError:  # pragma: no cover
    import tomli as toml  # type: ignore

from kissing.utility import UserInputError

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

PROFILE_ENV = "KISSING_PROFILE"

# Built-in values; profile sections are merged on top of these.
DEFAULTS: dict[str, dict[str, Any]] = {
    "DISPLAY": {"COLOR": True, "SCI_DIGITS": 3, "CLEAR_SCREEN": True},
    "LIMITS": {"MAX_DIMENSION": 1_000_000_000},
    "BEHAVIOUR": {"DEBUG": False, "DEFAULT_MODE": "exact"},
    "LOGGING": {"LEVEL": "WARNING", "FILE": None},
}


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (file stem if not given in [_PROFILE_])
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | Traversable | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path | Traversable) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None
    except OSError as e:
        raise UserInputError(f"reading {path}: {e.strerror or e}.") from None


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


def _merge_defaults(data: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {sec: dict(vals) for sec, vals in DEFAULTS.items()}
    for sec, vals in data.items():
        if isinstance(vals, dict) and isinstance(merged.get(sec), dict):
            merged[sec].update(vals)
        else:
            merged[sec] = vals
    return merged


def _validate(data: dict[str, Any], path: Path | Traversable) -> None:
    digits = data["DISPLAY"].get("SCI_DIGITS")
    if not isinstance(digits, int) or isinstance(digits, bool) or digits < 0:
        raise UserInputError(f"{path.name}: DISPLAY.SCI_DIGITS must be a non-negative integer.")
    limit = data["LIMITS"].get("MAX_DIMENSION")
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise UserInputError(f"{path.name}: LIMITS.MAX_DIMENSION must be a positive integer.")
    mode = str(data["BEHAVIOUR"].get("DEFAULT_MODE", "")).lower()
    if mode not in {"exact", "asymptotic"}:
        raise UserInputError(f"{path.name}: BEHAVIOUR.DEFAULT_MODE must be 'exact' or 'asymptotic'.")


# --- Paths -----------------------------------------------------------------


def _packaged_profile(name: str) -> Traversable | None:
    ref = pkg_files("kissing") / "profiles" / f"{name}.toml"
    return ref if ref.is_file() else None


def resolve_profile(source: str | None) -> Path | Traversable:
    """
    Precedence:
      1) explicit source (file path, or name of a packaged profile)
      2) $KISSING_PROFILE
      3) packaged 'default'

    Packaged profiles come back as package resources and are read in place,
    so they also work from a zipped install.
    """
    source = source or os.environ.get(PROFILE_ENV) or "default"
    candidate = Path(source).expanduser()
    if candidate.suffix.lower() == ".toml" or candidate.exists():
        if not candidate.is_file():
            raise UserInputError(f"Profile file not found: {candidate}")
        return candidate
    packaged = _packaged_profile(source)
    if packaged is None:
        raise UserInputError(f"Unknown profile: '{source}'")
    return packaged


# --- Public API ------------------------------------------------------------


def load_settings(source: str | None = None) -> Settings:
    """
    Load a profile, strip the [_PROFILE_] metadata, fill in DEFAULTS and
    return Settings(data=..., name=..., description=..., _source=path).
    """
    path = resolve_profile(source)
    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, Path(path.name).stem)
    data = _merge_defaults(data)
    _validate(data, path)
    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
