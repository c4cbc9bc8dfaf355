"""
Fusion module for late fusion of ranked lists.

Provides normalization, strategies and the engine that merges results from
multiple retrieval sources into one ranking.

Strategies:
    - CombinationFunction: Protocol for score-based strategies
    - comb_sum, comb_mnz, comb_max: Comb* family on normalized scores
    - RankFunction: Base class for rank-based strategies
    - BordaCount: Position count
    - ReciprocalRankFusion: Reciprocal Rank Fusion

License: MIT
"""

from rankmerge_core.fusion.base import CombinationFunction, RankFunction, RankSlot, Strategy
from rankmerge_core.fusion.combination import comb_max, comb_mnz, comb_sum
from rankmerge_core.fusion.engine import FusionEngine, fuse, fuse_batch
from rankmerge_core.fusion.normalization import min_max_normalize
from rankmerge_core.fusion.rank import BordaCount, ReciprocalRankFusion, rank_to_scored_list

__all__ = [
    "CombinationFunction",
    "RankFunction",
    "RankSlot",
    "Strategy",
    "comb_sum",
    "comb_mnz",
    "comb_max",
    "BordaCount",
    "ReciprocalRankFusion",
    "rank_to_scored_list",
    "min_max_normalize",
    "FusionEngine",
    "fuse",
    "fuse_batch",
]
