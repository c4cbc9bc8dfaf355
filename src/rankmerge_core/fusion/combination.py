"""
Score-based combination functions (the Comb* family).

Each function reduces the normalized scores of one document, one slot per
source list, to a single fused score. Absent slots (None) are skipped.

Functions:
    - comb_sum: Sum of scores
    - comb_mnz: Sum of scores multiplied by the number of lists containing
      the document
    - comb_max: Highest score

Reference:
    Fox, E. A., & Shaw, J. A. (1994). Combination of multiple searches.
    In TREC-2.

License: MIT
"""

from typing import List, Optional, Sequence


def _present(scores: Sequence[Optional[float]]) -> List[float]:
    return [score for score in scores if score is not None]


def comb_sum(scores: Sequence[Optional[float]]) -> float:
    """
    CombSUM: sum of all present scores.

    A list lacking the document contributes nothing.

    Example:
        ```python
        comb_sum([1.0, None, 0.5])  # 1.5
        ```
    """
    return float(sum(_present(scores)))


def comb_mnz(scores: Sequence[Optional[float]]) -> float:
    """
    CombMNZ: sum of present scores multiplied by their count.

    Rewards documents recovered by several independent sources over
    documents scored highly by only one of them.

    Example:
        ```python
        comb_mnz([1.0, None, 0.5])  # (1.0 + 0.5) * 2 = 3.0
        comb_mnz([1.0, None, None])  # 1.0 * 1 = 1.0
        ```
    """
    present = _present(scores)
    return float(len(present) * sum(present))


def comb_max(scores: Sequence[Optional[float]]) -> float:
    """CombMAX: highest present score, 0.0 when no list contains the document."""
    present = _present(scores)
    return float(max(present)) if present else 0.0
