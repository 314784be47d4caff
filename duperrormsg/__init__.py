"""Find error and log messages reused across call sites in Go source."""

from .analyzer import Diagnostic, analyze, analyze_units
from .normalizer import normalize
from .recognizer import DEFAULT_RULES, Recognition, recognize

__all__ = [
    "DEFAULT_RULES",
    "Diagnostic",
    "Recognition",
    "analyze",
    "analyze_units",
    "normalize",
    "recognize",
]

__version__ = "0.1.0"
