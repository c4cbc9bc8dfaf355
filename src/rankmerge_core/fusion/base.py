"""
Fusion strategy contracts.

Two families of strategies reduce the evidence gathered for one document
across all source lists to a single fused score:

    - CombinationFunction: score-based. Receives one normalized score per
      source list, in source order, with None for lists lacking the document.
    - RankFunction: rank-based. Receives one RankSlot per source list, in
      source order, with None for lists lacking the document.

Absent slots are always None, never 0.0, so a strategy can tell "not found
by this source" from "found with the lowest score".

License: MIT
"""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Protocol, Sequence, Union


class CombinationFunction(Protocol):
    """
    Protocol for score-based combination functions.

    Any callable with this signature is accepted by the fusion engine,
    including plain functions and lambdas.

    Example:
        ```python
        def comb_min(scores):
            present = [s for s in scores if s is not None]
            return min(present) if present else 0.0

        fuse(lists, comb_min)
        ```
    """

    def __call__(self, scores: Sequence[Optional[float]]) -> float: ...


class RankSlot(NamedTuple):
    """Position of a document in one source list."""

    rank: int
    """1-based rank of the document in the list"""
    list_length: int
    """Number of entries in the list"""


class RankFunction(ABC):
    """
    Base class for rank-based fusion strategies.

    The fusion engine recognizes rank strategies by this base class and
    skips score normalization for them.
    """

    @abstractmethod
    def __call__(self, slots: Sequence[Optional[RankSlot]]) -> float:
        """
        Compute the fused score of one document.

        Args:
            slots: One entry per source list, None where the document is absent.

        Returns:
            Fused score, higher is better.
        """
        ...

    def contribution(self, slot: RankSlot) -> float:
        """Score contributed by a single present slot."""
        return self((slot,))


Strategy = Union[CombinationFunction, RankFunction]
