"""
Namesake Exception Hierarchy

Structured exceptions for clear error handling across CLI, API, and MCP
consumers.  Each exception type maps to a specific failure mode so that
callers can handle errors precisely without parsing message strings.

Usage::

    from namesake.exceptions import NamesakeError, ConfigError

    try:
        result = client.check("./src")
    except ConfigError:
        print("Fix the similarity threshold first.")
    except NamesakeError as exc:
        print(f"Namesake error: {exc}")
"""


class NamesakeError(Exception):
    """Base exception for all Namesake errors."""


class ConfigError(NamesakeError, ValueError):
    """Configuration is invalid (e.g. a threshold outside ``(0, 1]``).

    Inherits from ``ValueError`` so callers that already catch
    ``ValueError`` around threshold parsing keep working.
    """


class SourceNotFoundError(NamesakeError, FileNotFoundError):
    """A file or directory handed to Namesake does not exist.

    Inherits from ``FileNotFoundError`` for intuitive exception handling.
    """


class HarvestError(NamesakeError):
    """A source file could not be read or decoded."""


class MatchError(NamesakeError):
    """Matching the names of a single scope failed."""
