"""Preview listing and selection"""

from .parser import parse_preview_line, parse_preview_output
from .selector import resolve_ordinal, resolve_position, select_preview

__all__ = [
    "parse_preview_line",
    "parse_preview_output",
    "resolve_ordinal",
    "resolve_position",
    "select_preview",
]
