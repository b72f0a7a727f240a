"""
Namesake Configuration Module

Instance-based configuration for the name similarity engine and the
tooling around it (source scanning, logging).  A config object is built
once at process start and passed explicitly through the call stack; it is
never mutated during a run.
"""

import logging
import math
import os
from dataclasses import dataclass

DEFAULT_SIMILARITY_THRESHOLD = 0.75


def validate_threshold(value: float) -> float:
    """
    Return *value* if it is a usable similarity threshold.

    A threshold must lie in ``(0.0, 1.0]``.  Out-of-range values are
    rejected with :class:`~namesake.exceptions.ConfigError`, never clamped.
    """
    from namesake.exceptions import ConfigError

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(
            f"Similarity threshold must be a number, got {type(value).__name__}."
        )
    if math.isnan(value) or not 0.0 < value <= 1.0:
        raise ConfigError(
            f"Similarity threshold {value!r} is outside the valid range (0.0, 1.0].\n"
            "  Set via: export NAMESAKE_SIMILARITY_THRESHOLD=0.75"
        )
    return float(value)


def _env_float(name: str, default: float) -> float:
    from namesake.exceptions import ConfigError

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name}={raw!r} is not a number.") from None


def _env_int(name: str, default: int) -> int:
    from namesake.exceptions import ConfigError

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name}={raw!r} is not an integer.") from None


@dataclass(frozen=True)
class NamesakeConfig:
    """
    Configuration for a Namesake run.

    Create from environment variables::

        config = NamesakeConfig.from_env()

    Or with explicit values::

        config = NamesakeConfig(similarity_threshold=0.8, propagate_nested=True)
    """

    # ── Similarity ────────────────────────────────────────────────
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD

    # ── Name harvesting ───────────────────────────────────────────
    propagate_nested: bool = False
    """If True, every enclosing scope also sees the names of its nested scopes."""

    # ── File Processing ───────────────────────────────────────────
    target_extensions: frozenset = frozenset((".py",))
    exclude_dirs: frozenset = frozenset((
        "__pycache__", ".git", ".venv", "venv",
        ".pytest_cache", "dist", "build",
    ))
    max_file_size_mb: int = 5
    max_workers: int = 4

    # ── Logging ───────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ── Factory ───────────────────────────────────────────────────

    @classmethod
    def from_env(cls) -> "NamesakeConfig":
        """Build a config snapshot from current environment variables.

        Reads :envvar:`NAMESAKE_SIMILARITY_THRESHOLD`,
        :envvar:`NAMESAKE_PROPAGATE_NESTED` (1/true/yes),
        :envvar:`NAMESAKE_MAX_WORKERS` and :envvar:`NAMESAKE_LOG_LEVEL`.
        """
        nested_raw = os.getenv("NAMESAKE_PROPAGATE_NESTED", "").lower()
        return cls(
            similarity_threshold=_env_float(
                "NAMESAKE_SIMILARITY_THRESHOLD", DEFAULT_SIMILARITY_THRESHOLD,
            ),
            propagate_nested=nested_raw in ("1", "true", "yes", "on"),
            max_workers=_env_int("NAMESAKE_MAX_WORKERS", 4),
            log_level=os.getenv("NAMESAKE_LOG_LEVEL", "INFO").upper(),
        )

    # ── Validation ────────────────────────────────────────────────

    def validate(self) -> bool:
        """
        Check the whole configuration before any matching begins.

        Raises :class:`~namesake.exceptions.ConfigError` on failure.
        """
        from namesake.exceptions import ConfigError

        validate_threshold(self.similarity_threshold)

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(
                f"Unknown log level '{self.log_level}'. "
                "Supported: DEBUG, INFO, WARNING, ERROR, CRITICAL."
            )
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be at least 1, got {self.max_workers}.")
        if self.max_file_size_mb <= 0:
            raise ConfigError(
                f"max_file_size_mb must be positive, got {self.max_file_size_mb}."
            )
        return True
