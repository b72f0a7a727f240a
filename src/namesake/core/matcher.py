"""
Namesake Scope Matcher

Data model for harvested names and the pairwise matching that runs over
one scope's collection: every unordered pair is visited exactly once,
hopeless pairs are pruned by length, the rest are scored, and pairs that
clear the threshold are reported with an LCS as evidence.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, Tuple, Union

from namesake.core.config import DEFAULT_SIMILARITY_THRESHOLD, validate_threshold
from namesake.core.similarity import (
    longest_common_subsequence,
    may_exceed_threshold,
    similarity_score,
)
from namesake.exceptions import MatchError

logger = logging.getLogger(__name__)


# =============================================================================
# Data Models
# =============================================================================

@dataclass(frozen=True)
class Name:
    """An identifier's text plus an opaque reference to where it came from.

    The matcher never looks inside :attr:`origin`; it is carried through
    to :class:`MatchResult` so the reporter can show provenance.
    """
    text: str
    origin: Any = None

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class ScopeCollection:
    """The ordered names that share one lexical scope."""
    scope: Any
    names: Tuple[Name, ...] = ()

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[Name]:
        return iter(self.names)


@dataclass(frozen=True)
class MatchResult:
    """Two names whose similarity strictly exceeded the threshold."""
    first: Name
    second: Name
    score: float
    evidence: str
    """One longest common subsequence of the two names."""

    @property
    def percentage(self) -> int:
        """Similarity as a whole percentage, truncated (0.849 -> 84)."""
        return int(100 * self.score)


@dataclass(frozen=True)
class Comparison:
    """Outcome of comparing two arbitrary strings, whatever their score."""
    first: str
    second: str
    score: float
    evidence: str
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    exceeds_threshold: bool = False


NameSequence = Union[ScopeCollection, Sequence[Name]]


# =============================================================================
# Matching
# =============================================================================

def iter_pairs(names: Sequence[Name]) -> Iterator[Tuple[Name, Name]]:
    """Yield every unordered pair ``(names[i], names[j])`` with ``i < j`` once."""
    for i in range(len(names)):
        for j in range(i + 1, len(names)):
            yield names[i], names[j]


def compare(first: str, second: str,
            threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> Comparison:
    """Score two strings and always compute the evidence subsequence."""
    threshold = validate_threshold(threshold)
    score = similarity_score(first, second)
    return Comparison(
        first=first,
        second=second,
        score=score,
        evidence=longest_common_subsequence(first, second),
        threshold=threshold,
        exceeds_threshold=score > threshold,
    )


def match_scope(names: NameSequence,
                threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> List[MatchResult]:
    """
    Find all pairs of *names* whose similarity strictly exceeds *threshold*.

    Pairs are visited in upper-triangular order and results keep that
    order.  A collection with fewer than two names yields ``[]``.

    Raises:
        ConfigError: If *threshold* is outside ``(0.0, 1.0]``.  Checked
            before any pair is considered.
    """
    threshold = validate_threshold(threshold)
    if isinstance(names, ScopeCollection):
        names = names.names

    results: List[MatchResult] = []
    pruned = 0
    scored = 0
    for first, second in iter_pairs(names):
        if not may_exceed_threshold(len(first.text), len(second.text), threshold):
            pruned += 1
            continue

        scored += 1
        score = similarity_score(first.text, second.text)
        if score > threshold:
            evidence = longest_common_subsequence(first.text, second.text)
            logger.debug(
                f'"{first.text}" and "{second.text}" are {score * 100:3.0f}% similar '
                f'(common: "{evidence}")'
            )
            results.append(MatchResult(first, second, score, evidence))

    logger.debug(
        f"Matched {len(names)} names: {pruned} pairs pruned, "
        f"{scored} scored, {len(results)} above {threshold:.2f}"
    )
    return results


class ScopeMatcher:
    """
    Applies :func:`match_scope` to scope collections with a fixed threshold.

    The threshold is validated once, on construction.  A failure while
    matching one scope is raised as :class:`MatchError` so callers can
    log it and carry on with the next scope.
    """

    def __init__(self, threshold: float = DEFAULT_SIMILARITY_THRESHOLD):
        self.threshold = validate_threshold(threshold)

    def match(self, collection: NameSequence) -> List[MatchResult]:
        """Return the matches found in one scope collection."""
        try:
            return match_scope(collection, self.threshold)
        except MatchError:
            raise
        except Exception as exc:
            scope = getattr(collection, "scope", None)
            raise MatchError(f"Failed to match names in scope {scope!r}: {exc}") from exc
