"""
fimov
=====

A command-line tool that moves image files modified between two dates from a
configured source folder into a dated destination folder.
"""

__version__ = "1.0.0"

from .config import PathConfig, load_config, validate_paths
from .dates import DateRange, parse_date, resolve_range
from .organizer import find_matching_files, get_exif_date, is_in_range, move_file, organize
from .errors import (
    FimovError,
    UsageError,
    ConfigReadError,
    ConfigParseError,
    UnknownKeywordError,
    PathNotFoundError,
    InvalidDateError,
    WalkError,
    MoveError,
)

__all__ = [
    "PathConfig",
    "load_config",
    "validate_paths",
    "DateRange",
    "parse_date",
    "resolve_range",
    "find_matching_files",
    "get_exif_date",
    "is_in_range",
    "move_file",
    "organize",
    "FimovError",
    "UsageError",
    "ConfigReadError",
    "ConfigParseError",
    "UnknownKeywordError",
    "PathNotFoundError",
    "InvalidDateError",
    "WalkError",
    "MoveError",
]
