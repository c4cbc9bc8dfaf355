"""
rankmerge Core Layer.

Late fusion of ranked result lists. Contains:
- Data model (ScoredList, MergedList)
- Score normalization and fusion strategies
- Fusion engine
- Exception hierarchy
- Configuration management
- Logging service

License: MIT
"""

from .config import RankMergeSettings, get_config_summary
from .exceptions import (
    DuplicateDocumentError,
    EmptyInputError,
    FusionError,
    InconsistentOrderError,
    RankMergeError,
    UnknownStrategyError,
    ValidationError,
)
from .fusion import (
    BordaCount,
    CombinationFunction,
    FusionEngine,
    RankFunction,
    RankSlot,
    ReciprocalRankFusion,
    comb_max,
    comb_mnz,
    comb_sum,
    fuse,
    fuse_batch,
    min_max_normalize,
    rank_to_scored_list,
)
from .logging_service import LoggingConfig, LoggingService
from .models import FusedEntry, MergedList, ScoredEntry, ScoredList

__version__ = "0.3.0"

__all__ = [
    # Models
    "ScoredEntry",
    "ScoredList",
    "FusedEntry",
    "MergedList",
    # Fusion
    "FusionEngine",
    "fuse",
    "fuse_batch",
    "min_max_normalize",
    "CombinationFunction",
    "comb_sum",
    "comb_mnz",
    "comb_max",
    "RankFunction",
    "RankSlot",
    "BordaCount",
    "ReciprocalRankFusion",
    "rank_to_scored_list",
    # Exceptions
    "RankMergeError",
    "ValidationError",
    "DuplicateDocumentError",
    "InconsistentOrderError",
    "FusionError",
    "EmptyInputError",
    "UnknownStrategyError",
    # Configuration
    "RankMergeSettings",
    "get_config_summary",
    # Logging
    "LoggingService",
    "LoggingConfig",
]
