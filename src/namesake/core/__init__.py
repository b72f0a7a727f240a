"""
Namesake Core — similarity scoring, scope matching, name harvesting and reporting.

Re-exports the primary classes for convenience::

    from namesake.core import ScopeMatcher, similarity_score
"""

from namesake.core.config import NamesakeConfig, validate_threshold
from namesake.core.harvester import NameHarvester, NameOrigin, ScopeInfo, scan_directory
from namesake.core.matcher import (
    Comparison,
    MatchResult,
    Name,
    ScopeCollection,
    ScopeMatcher,
    compare,
    iter_pairs,
    match_scope,
)
from namesake.core.pipeline import DetectionPipeline, ScanResult, ScopeReport
from namesake.core.similarity import (
    longest_common_subsequence,
    may_exceed_threshold,
    similarity_score,
)

__all__ = [
    "NamesakeConfig",
    "validate_threshold",
    "NameHarvester",
    "NameOrigin",
    "ScopeInfo",
    "scan_directory",
    "Comparison",
    "MatchResult",
    "Name",
    "ScopeCollection",
    "ScopeMatcher",
    "compare",
    "iter_pairs",
    "match_scope",
    "DetectionPipeline",
    "ScanResult",
    "ScopeReport",
    "longest_common_subsequence",
    "may_exceed_threshold",
    "similarity_score",
]
