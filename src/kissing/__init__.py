from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("kissing-numbers")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .bounds import estimate
from .config import load_settings
from .query import DisplayMode, InvalidDimension, Report, query
from .runtime import APPLY, CFG
from .session import Session, SessionController, SessionState
from .table import BoundedResult, ExactResult, UnknownResult, lookup

__all__ = [
    "APPLY",
    "CFG",
    "BoundedResult",
    "DisplayMode",
    "ExactResult",
    "InvalidDimension",
    "Report",
    "Session",
    "SessionController",
    "SessionState",
    "UnknownResult",
    "__version__",
    "estimate",
    "load_settings",
    "lookup",
    "query",
]
