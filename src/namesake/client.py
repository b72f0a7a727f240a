"""
Namesake Client Facade

Single entry point for programmatic use of Namesake.  Wraps string
comparison, name-list matching and project checks behind an
instance-based API with optional async support.

Usage::

    from namesake import Namesake

    # From environment variables
    client = Namesake()

    # With explicit configuration
    from namesake.core.config import NamesakeConfig
    client = Namesake(config=NamesakeConfig(similarity_threshold=0.8))

    # Compare two strings
    cmp = client.compare("ALEXANDRE", "ALEKSANDER")
    print(f"{cmp.score:.0%} similar, common: {cmp.evidence}")

    # Check a project
    result = client.check("./myproject")
    for report in result.reports:
        for match in report.matches:
            print(match.first.text, match.second.text, match.percentage)

    # Async variants (for FastAPI / Django async views)
    result = await client.acheck("./myproject")
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Union

from namesake.core.config import NamesakeConfig
from namesake.core.matcher import Comparison, MatchResult, Name, ScopeMatcher, compare
from namesake.core.pipeline import DetectionPipeline, ScanResult

logger = logging.getLogger(__name__)


class Namesake:
    """
    High-level Namesake client.

    Each instance carries its own :class:`NamesakeConfig`, validated on
    construction, and never touches global state.

    Args:
        config: Explicit configuration object.  When *None*, a config
            is built from environment variables plus keyword overrides.
        **kwargs: Forwarded to :class:`NamesakeConfig` when *config* is
            ``None`` (e.g. ``similarity_threshold=0.8``).

    Raises:
        ConfigError: If the resulting configuration is invalid.
    """

    def __init__(self, config: NamesakeConfig | None = None, **kwargs):
        if config is not None:
            self._config = config
        elif kwargs:
            self._config = dataclasses.replace(NamesakeConfig.from_env(), **kwargs)
        else:
            self._config = NamesakeConfig.from_env()

        self._config.validate()
        self._matcher = ScopeMatcher(self._config.similarity_threshold)

    # ── Configuration ─────────────────────────────────────────────

    @property
    def config(self) -> NamesakeConfig:
        """The active configuration for this client."""
        return self._config

    # ── Comparison ────────────────────────────────────────────────

    def compare(self, first: str, second: str) -> Comparison:
        """Score two strings and return one longest common subsequence."""
        return compare(first, second, self._config.similarity_threshold)

    def match(self, names: Iterable[Union[str, Name]]) -> List[MatchResult]:
        """
        Find similar pairs within one list of names.

        Plain strings are wrapped in :class:`Name` with no origin.
        """
        collection = [n if isinstance(n, Name) else Name(n) for n in names]
        return self._matcher.match(collection)

    # ── Project checks ────────────────────────────────────────────

    def check(self, *paths: str | Path, show_progress: bool = False) -> ScanResult:
        """
        Check Python files and directories for similar names per scope.

        Args:
            paths: Files or directories (default: the current directory).
            show_progress: Show a tqdm progress bar.

        Raises:
            SourceNotFoundError: If a path does not exist.
        """
        targets = [Path(p).resolve() for p in (paths or (".",))]
        pipeline = DetectionPipeline(targets, config=self._config,
                                     show_progress=show_progress)
        return pipeline.run()

    # ── Async variants ────────────────────────────────────────────
    # These use asyncio.to_thread() to run sync operations off the
    # event loop and raise the same exceptions as the sync methods.

    async def acompare(self, first: str, second: str) -> Comparison:
        """Async variant of :meth:`compare`."""
        return await asyncio.to_thread(self.compare, first, second)

    async def acheck(self, *paths: str | Path, show_progress: bool = False) -> ScanResult:
        """Async variant of :meth:`check`. Raises same exceptions as sync."""
        return await asyncio.to_thread(
            self.check, *paths, show_progress=show_progress,
        )

    # ── Health ─────────────────────────────────────────────────────

    def health(self) -> Dict[str, object]:
        """Return a small status dict for agents or status endpoints."""
        from namesake import health

        return health(self._config)
