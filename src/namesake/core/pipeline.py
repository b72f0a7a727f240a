"""
Namesake Detection Pipeline

Crawls files and directories, harvests names from every Python source
file, and runs one scope matcher per lexical scope.

- Concurrent harvesting across files (scope matching has no shared state)
- Deterministic output order regardless of worker scheduling
- Per-file and per-scope error isolation: a failure is logged and
  counted, and results already produced are kept
- Optional tqdm progress bar
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from namesake.core.config import NamesakeConfig
from namesake.core.harvester import NameHarvester, scan_directory
from namesake.core.matcher import MatchResult, ScopeCollection, ScopeMatcher
from namesake.exceptions import HarvestError, MatchError, SourceNotFoundError

logger = logging.getLogger(__name__)


# =============================================================================
# Results
# =============================================================================

@dataclass
class ScopeReport:
    """The matches found in one scope."""
    scope: object
    matches: List[MatchResult] = field(default_factory=list)


@dataclass
class ScanResult:
    """Typed result returned by :meth:`DetectionPipeline.run`."""
    files_scanned: int = 0
    files_processed: int = 0
    scopes_examined: int = 0
    names_harvested: int = 0
    matches_found: int = 0
    errors: int = 0
    threshold: float = 0.0
    reports: List[ScopeReport] = field(default_factory=list)
    """Scopes with at least one match, ordered by file then harvest order."""

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict for API/agent pipelines."""
        return asdict(self)


def _own_names(collection: ScopeCollection) -> int:
    """Count the names bound by the scope itself, not copied up from nested scopes."""
    qualname = getattr(collection.scope, "qualname", None)
    return sum(
        1 for name in collection
        if qualname is None or getattr(name.origin, "scope", qualname) == qualname
    )


# =============================================================================
# Pipeline
# =============================================================================

class DetectionPipeline:
    """
    Orchestrates a full similar-name check over files and directories.

    Source files are only read, never modified.
    """

    def __init__(self, paths: Iterable[Path], config: NamesakeConfig | None = None,
                 show_progress: bool = False):
        """
        Initialize the detection pipeline.

        Args:
            paths: Files and/or directories to check.
            config: Run configuration.  Defaults to ``NamesakeConfig()``.
            show_progress: Show a tqdm progress bar while harvesting.

        Raises:
            ConfigError: If the configuration is invalid.
            SourceNotFoundError: If one of *paths* does not exist.
        """
        self.config = config or NamesakeConfig()
        self.config.validate()
        self.paths = [Path(p) for p in paths]
        for p in self.paths:
            if not p.exists():
                raise SourceNotFoundError(f"No such file or directory: {p}")
        self.show_progress = show_progress
        self.matcher = ScopeMatcher(self.config.similarity_threshold)

    def collect_files(self) -> List[Path]:
        """Expand directories into their Python source files."""
        files: List[Path] = []
        for p in self.paths:
            if p.is_dir():
                files.extend(scan_directory(p, self.config))
            else:
                files.append(p)
        seen = set()
        unique = []
        for f in files:
            key = f.resolve()
            if key not in seen:
                seen.add(key)
                unique.append(f)
        return unique

    def run(self) -> ScanResult:
        """
        Execute the check.

        Steps:
          1. Collect source files
          2. Harvest scope collections from each file (concurrently)
          3. Match the names of each scope
        """
        result = ScanResult(threshold=self.config.similarity_threshold)

        logger.info("[1/3] Scanning for source files...")
        files = self.collect_files()
        result.files_scanned = len(files)
        logger.info(f"  Found {len(files):,} source files")
        if not files:
            logger.warning("No source files found to check.")
            return result

        logger.info(f"[2/3] Harvesting names ({self.config.max_workers} workers)...")
        harvested = self._harvest_all(files, result)

        logger.info("[3/3] Matching names per scope...")
        for file_path in files:
            for collection in harvested.get(file_path, []):
                self._match_collection(collection, result)

        logger.info(
            f"  {result.matches_found:,} similar pairs in {len(result.reports):,} scopes "
            f"({result.scopes_examined:,} scopes, {result.names_harvested:,} names, "
            f"{result.errors} errors)"
        )
        return result

    # ── Steps ────────────────────────────────────────────────────

    def _harvest_all(self, files: List[Path], result: ScanResult) -> Dict[Path, List[ScopeCollection]]:
        harvested: Dict[Path, List[ScopeCollection]] = {}
        with tqdm(total=len(files), desc="Harvesting names", unit="file",
                  disable=not self.show_progress) as pbar:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = {
                    executor.submit(self._harvest_file, file_path): file_path
                    for file_path in files
                }
                for future in as_completed(futures):
                    file_path = futures[future]
                    try:
                        harvested[file_path] = future.result()
                        result.files_processed += 1
                    except HarvestError as e:
                        logger.error(str(e))
                        result.errors += 1
                    finally:
                        pbar.update(1)
        return harvested

    def _harvest_file(self, file_path: Path) -> List[ScopeCollection]:
        # One harvester per file: the visitor keeps per-walk state.
        harvester = NameHarvester(propagate_nested=self.config.propagate_nested)
        return harvester.harvest_file(file_path)

    def _match_collection(self, collection: ScopeCollection, result: ScanResult) -> None:
        result.scopes_examined += 1
        result.names_harvested += _own_names(collection)
        try:
            matches = self.matcher.match(collection)
        except MatchError as e:
            logger.error(str(e))
            result.errors += 1
            return
        if matches:
            result.reports.append(ScopeReport(collection.scope, matches))
            result.matches_found += len(matches)
