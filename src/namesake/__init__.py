"""
Namesake — find near-duplicate identifier names in source code.

Names such as ``ALEXANDRE`` and ``ALEKSANDER`` bound in the same scope are
easy to confuse.  The ``namesake`` package harvests identifier names per
lexical scope, scores every pair by longest common subsequence, and
reports pairs above a similarity threshold with one common subsequence as
evidence.

Quick start (programmatic API)::

    from namesake import Namesake

    client = Namesake()                          # reads env vars
    result = client.check("./src")               # scan a project
    client.compare("buffer", "fer").score        # 0.5

Quick start (CLI)::

    namesake check ./src
    namesake compare ALEXANDRE ALEKSANDER

Configuration override::

    from namesake import Namesake, NamesakeConfig

    client = Namesake(config=NamesakeConfig(similarity_threshold=0.8))
"""

__version__ = "1.0.0"

# Primary public API — the Namesake facade
from namesake.client import Namesake

# Configuration
from namesake.core.config import NamesakeConfig

# Core data types that callers interact with
from namesake.core.matcher import Comparison, MatchResult, Name, ScopeCollection
from namesake.core.pipeline import ScanResult, ScopeReport

# Exception hierarchy
from namesake.exceptions import (
    ConfigError,
    HarvestError,
    MatchError,
    NamesakeError,
    SourceNotFoundError,
)


def health(config: NamesakeConfig | None = None) -> dict:
    """
    Return a small status dict for agents or status checks.

    When *config* is None, uses :meth:`NamesakeConfig.from_env()` for the snapshot.
    """
    cfg = config or NamesakeConfig.from_env()
    return {
        "version": __version__,
        "similarity_threshold": cfg.similarity_threshold,
        "propagate_nested": cfg.propagate_nested,
    }


__all__ = [
    "__version__",
    # Facade
    "Namesake",
    # Config
    "NamesakeConfig",
    # Data types
    "Comparison",
    "MatchResult",
    "Name",
    "ScopeCollection",
    "ScanResult",
    "ScopeReport",
    # Exceptions
    "NamesakeError",
    "ConfigError",
    "SourceNotFoundError",
    "HarvestError",
    "MatchError",
    # Status
    "health",
]
