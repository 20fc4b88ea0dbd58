"""
Error kinds for fimov.

Every error carries the exit code the CLI returns when it reaches `main()`.
"""


class FimovError(Exception):
    """Base class for all handled fimov errors."""

    exit_code = 1


class UsageError(FimovError):
    """Bad command line (missing keyword, missing --start, unknown option)."""

    exit_code = 2


class ConfigReadError(FimovError):
    """The configuration file could not be read."""

    exit_code = 3


class ConfigParseError(FimovError):
    """The configuration file is not valid JSON of the expected shape."""

    exit_code = 4


class UnknownKeywordError(FimovError):
    """The keyword is not a profile of the configuration."""

    exit_code = 5


class PathNotFoundError(FimovError):
    """A profile's source or destination does not exist."""

    exit_code = 6


class InvalidDateError(FimovError):
    """A date is not a valid YYYY-MM-DD string."""

    exit_code = 7


class WalkError(FimovError):
    """Walking the source tree failed. Aborts the whole operation."""

    exit_code = 8


class MoveError(FimovError):
    """Moving a single file failed. Reported per file, the walk continues."""

    exit_code = 9
