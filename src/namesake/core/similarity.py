"""
Namesake Similarity Primitives

Longest-common-subsequence based string similarity:

- :func:`similarity_score` — LCS length normalised by the longer string.
- :func:`longest_common_subsequence` — one concrete LCS, used as evidence.
- :func:`may_exceed_threshold` — length-only upper bound used to skip
  hopeless pairs before paying for the O(len1 * len2) alignment.

All functions are pure; every table they build lives only for the
duration of one call.
"""

from typing import List


def similarity_score(a: str, b: str) -> float:
    """
    Return the similarity of *a* and *b* in ``[0.0, 1.0]``.

    The score is the LCS length divided by the length of the longer
    string, so the argument order never matters::

        similarity_score("buffer", "fer") == similarity_score("fer", "buffer") == 0.5

    Empty input on either side scores ``0.0``.
    """
    if len(a) >= len(b):
        longer, shorter = a, b
    else:
        longer, shorter = b, a

    long_len = len(longer)
    if long_len == 0 or len(shorter) == 0:
        return 0.0

    # Two rows of the (S+1) x (L+1) table; column 0 stays zero.
    previous = [0] * (long_len + 1)
    current = [0] * (long_len + 1)

    for ch in shorter:
        for k in range(1, long_len + 1):
            if longer[k - 1] == ch:
                current[k] = previous[k - 1] + 1
            elif previous[k] >= current[k - 1]:
                current[k] = previous[k]
            else:
                current[k] = current[k - 1]
        previous, current = current, previous

    return previous[long_len] / long_len


def _alignment_table(a: str, b: str) -> List[List[int]]:
    """Full LCS table: ``align[r][c]`` is the LCS length of ``b[:r]`` and ``a[:c]``."""
    align = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for r in range(1, len(b) + 1):
        row, above = align[r], align[r - 1]
        for c in range(1, len(a) + 1):
            if a[c - 1] == b[r - 1]:
                row[c] = above[c - 1] + 1
            else:
                row[c] = above[c] if above[c] >= row[c - 1] else row[c - 1]
    return align


def longest_common_subsequence(a: str, b: str) -> str:
    """
    Return one longest common subsequence of *a* and *b*.

    When several exist, the traceback prefers moving up (dropping the
    last character of *b*), then left (dropping the last character of
    *a*), and only then takes a diagonal match.  That order fixes which
    subsequence is returned, so output is reproducible.

    Empty input on either side yields ``""``.
    """
    if not a or not b:
        return ""

    align = _alignment_table(a, b)
    r, c = len(b), len(a)
    length = align[r][c]
    chars = [""] * length

    i = length
    while i > 0 and r > 0 and c > 0:
        if align[r - 1][c] == i:
            r -= 1
        elif align[r][c - 1] == i:
            c -= 1
        else:
            chars[i - 1] = b[r - 1]
            r -= 1
            c -= 1
        i = align[r][c]

    return "".join(chars)


def may_exceed_threshold(len_a: int, len_b: int, threshold: float) -> bool:
    """
    Cheap upper-bound test on two string lengths.

    The LCS can be no longer than the shorter string, so no pair can
    score above ``min(len_a, len_b) / max(len_a, len_b)``.  Returns False
    only when that bound is already below *threshold*; a True result
    still has to be confirmed by :func:`similarity_score`.
    """
    if len_a == 0 or len_b == 0:
        return False
    ratio = min(len_a, len_b) / max(len_a, len_b)
    return ratio >= threshold
