"""
Rank-based fusion strategies.

These strategies ignore raw scores and only look at each document's
position in every source list, so they need no score normalization.

Strategies:
    - BordaCount: a document at rank r of a list of length N earns
      N - r + 1 points; points are summed across lists.
    - ReciprocalRankFusion: score(d) = sum(1 / (k + rank_i(d)))

Reference:
    Cormack, G. V., Clarke, C. L., & Buettcher, S. (2009).
    Reciprocal rank fusion outperforms condorcet and individual rank
    learning methods. In SIGIR.

License: MIT
"""

from typing import Optional, Sequence

from rankmerge_core.exceptions import ValidationError
from rankmerge_core.fusion.base import RankFunction, RankSlot
from rankmerge_core.models import ScoredList


class BordaCount(RankFunction):
    """
    Borda-style position count.

    Example:
        ```python
        borda = BordaCount()
        # Rank 1 of 3 in the first list, rank 2 of 2 in the second
        borda([RankSlot(1, 3), RankSlot(2, 2)])  # 3 + 1 = 4.0
        borda([RankSlot(1, 3), None])  # 3.0
        ```
    """

    def contribution(self, slot: RankSlot) -> float:
        return float(slot.list_length - slot.rank + 1)

    def __call__(self, slots: Sequence[Optional[RankSlot]]) -> float:
        return float(sum(self.contribution(slot) for slot in slots if slot is not None))

    def __repr__(self) -> str:
        return "BordaCount()"


class ReciprocalRankFusion(RankFunction):
    """
    Reciprocal Rank Fusion (RRF).

    The formula for each document d is:
        score(d) = sum over lists containing d of 1 / (k + rank(d))

    Attributes:
        k: Smoothing constant (default: 60). Higher values reduce the
           difference between adjacent ranks.

    Example:
        ```python
        rrf = ReciprocalRankFusion(k=60)
        rrf([RankSlot(1, 10), RankSlot(2, 10)])  # 1/61 + 1/62
        ```
    """

    def __init__(self, k: int = 60) -> None:
        """
        Initialize ReciprocalRankFusion with smoothing constant k.

        Args:
            k: Smoothing constant for rank fusion. Must be > 0.
               Default: 60 (standard value from original RRF paper).

        Raises:
            ValidationError: If k is not a positive integer
        """
        if isinstance(k, bool) or not isinstance(k, int):
            raise ValidationError(
                message=f"k must be an integer, got {type(k).__name__}",
                error_code="VAL_002",
                details={"k": k, "type": type(k).__name__},
            )

        if k <= 0:
            raise ValidationError(
                message=f"k must be > 0, got {k}",
                error_code="VAL_003",
                details={"k": k},
            )

        self.k = k

    def contribution(self, slot: RankSlot) -> float:
        return 1.0 / (self.k + slot.rank)

    def __call__(self, slots: Sequence[Optional[RankSlot]]) -> float:
        return float(sum(self.contribution(slot) for slot in slots if slot is not None))

    def __repr__(self) -> str:
        return f"ReciprocalRankFusion(k={self.k})"


def rank_to_scored_list(
    scored_list: ScoredList,
    rank_function: Optional[RankFunction] = None,
) -> ScoredList:
    """
    Replace each entry's score with its rank contribution.

    Turns rank evidence into a pseudo-score list that score-based
    combination functions can consume, which lets a caller blend rank
    and score evidence in one fusion call.

    Args:
        scored_list: Source list
        rank_function: Strategy whose single-list contribution becomes the
            new score (default: BordaCount)

    Returns:
        New ScoredList with the same order, ranks and metadata.

    Example:
        ```python
        votes = rank_to_scored_list(run)  # Borda points: N, N-1, ..., 1
        fused = fuse([run_a, votes], comb_sum)
        ```
    """
    rank_function = rank_function if rank_function is not None else BordaCount()
    length = len(scored_list)
    return scored_list.rescored(
        [rank_function.contribution(RankSlot(entry.rank, length)) for entry in scored_list]
    )
