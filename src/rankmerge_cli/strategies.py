"""
Strategy registry for the command line.

Maps strategy names to fusion strategies. The table is built once at import
and exposed read-only; the fusion engine never sees names, only the
resolved strategy.

License: MIT
"""

from types import MappingProxyType
from typing import Callable, List, Mapping

import structlog

from rankmerge_core.exceptions import UnknownStrategyError
from rankmerge_core.fusion import (
    BordaCount,
    ReciprocalRankFusion,
    Strategy,
    comb_max,
    comb_mnz,
    comb_sum,
)

logger = structlog.get_logger(__name__)

StrategyFactory = Callable[[int], Strategy]


def _combination(strategy: Strategy) -> StrategyFactory:
    return lambda rrf_k: strategy


STRATEGIES: Mapping[str, StrategyFactory] = MappingProxyType(
    {
        "combsum": _combination(comb_sum),
        "combmnz": _combination(comb_mnz),
        "combmax": _combination(comb_max),
        "borda": lambda rrf_k: BordaCount(),
        "rrf": lambda rrf_k: ReciprocalRankFusion(k=rrf_k),
    }
)


def available_strategies() -> List[str]:
    return sorted(STRATEGIES)


def resolve_strategy(name: str, rrf_k: int = 60) -> Strategy:
    """
    Look up a strategy by name (case-insensitive).

    Args:
        name: Registered strategy name, e.g. "combmnz" or "rrf"
        rrf_k: Smoothing constant used when the name is "rrf"

    Returns:
        The fusion strategy.

    Raises:
        UnknownStrategyError: If no strategy is registered under the name
        ValidationError: If rrf_k is invalid for "rrf"
    """
    key = name.strip().lower()
    factory = STRATEGIES.get(key)
    if factory is None:
        raise UnknownStrategyError(
            message=(
                f"unknown fusion strategy {name!r}, "
                f"expected one of: {', '.join(available_strategies())}"
            ),
            details={"name": name, "available": available_strategies()},
        )

    strategy = factory(rrf_k)
    logger.debug("strategy_resolved", name=key, strategy=repr(strategy))
    return strategy
