"""
FusionEngine - merges per-source ranked lists into one consensus ranking.

Algorithm:
    1. Reject an empty input
    2. Min-max normalize each list on its own (score strategies only)
    3. Collect the union of document identifiers over all lists
    4. For each document, build one slot per list in input order,
       None where the list lacks the document
    5. Apply the strategy to the slots to get the fused score
    6. Sort by fused score descending, then by the number of lists
       containing the document descending, then by document id ascending
    7. Assign ranks 1..N

The engine is a pure function of its inputs: it never mutates the input
lists and keeps no state between calls, so independent queries can be fused
concurrently (see fuse_batch).

License: MIT
"""

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from rankmerge_core.exceptions import EmptyInputError, FusionError, ValidationError
from rankmerge_core.fusion.base import RankFunction, RankSlot, Strategy
from rankmerge_core.fusion.normalization import min_max_normalize
from rankmerge_core.models import FusedEntry, MergedList, ScoredList

Normalizer = Callable[[ScoredList], ScoredList]


def _validate_positive(name: str, value: Optional[int]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            message=f"{name} must be an integer, got {type(value).__name__}",
            error_code="VAL_002",
            details={name: value, "type": type(value).__name__},
        )
    if value <= 0:
        raise ValidationError(
            message=f"{name} must be > 0, got {value}",
            error_code="VAL_003",
            details={name: value},
        )


def _rank_slot(scored_list: ScoredList, doc_id: str) -> Optional[RankSlot]:
    entry = scored_list.get(doc_id)
    if entry is None:
        return None
    return RankSlot(entry.rank, len(scored_list))


class FusionEngine:
    """
    Orchestrates late fusion of ranked lists.

    Attributes:
        normalize: Whether score strategies see min-max normalized scores
            (default: True). Disable to fuse raw scores.
        normalizer: Per-list normalization function

    Example:
        ```python
        from rankmerge_core.fusion import FusionEngine, comb_mnz

        engine = FusionEngine()

        bm25 = ScoredList.from_pairs([("d1", 12.5), ("d2", 9.0)])
        dense = ScoredList.from_pairs([("d2", 0.91), ("d3", 0.40)])

        merged = engine.fuse([bm25, dense], comb_mnz)
        [entry.doc_id for entry in merged]
        # ["d2", "d1", "d3"]
        ```
    """

    def __init__(self, normalize: bool = True, normalizer: Normalizer = min_max_normalize) -> None:
        self.normalize = normalize
        self.normalizer = normalizer

    def fuse(
        self,
        lists: Sequence[ScoredList],
        strategy: Strategy,
        depth: Optional[int] = None,
        query_id: Optional[str] = None,
    ) -> MergedList:
        """
        Fuse source lists for one query into a single ranking.

        Args:
            lists: One ScoredList per source, in a fixed source order.
                A single list is legal and comes back normalized.
            strategy: A CombinationFunction (score-based) or a RankFunction
                instance (rank-based, no normalization)
            depth: Keep only the top ``depth`` fused entries (default: all)
            query_id: Query identifier for the result
                (default: the first list's query id)

        Returns:
            MergedList sorted by fused score with deterministic tie-breaks.

        Raises:
            EmptyInputError: If ``lists`` is empty
            ValidationError: If ``depth`` is not a positive integer
            FusionError: If the strategy returns NaN or infinity for a document
                (FUSE_002), e.g. a raw CombSUM overflowing the float range
        """
        lists = list(lists)
        if not lists:
            raise EmptyInputError(details={"query_id": query_id})

        _validate_positive("depth", depth)

        if query_id is None:
            query_id = lists[0].query_id

        rank_based = isinstance(strategy, RankFunction)
        if self.normalize and not rank_based:
            lists = [self.normalizer(scored_list) for scored_list in lists]

        # Union of ids in first-seen order
        doc_ids: Dict[str, None] = {}
        for scored_list in lists:
            for entry in scored_list:
                doc_ids.setdefault(entry.doc_id)

        fused: List[Tuple[float, int, str]] = []
        for doc_id in doc_ids:
            if rank_based:
                slots = tuple(_rank_slot(scored_list, doc_id) for scored_list in lists)
            else:
                slots = tuple(scored_list.score_of(doc_id) for scored_list in lists)
            coverage = sum(1 for slot in slots if slot is not None)
            score = float(strategy(slots))
            if not math.isfinite(score):
                raise FusionError(
                    message=f"strategy produced a non-finite score for document {doc_id!r}",
                    error_code="FUSE_002",
                    details={
                        "doc_id": doc_id,
                        "score": repr(score),
                        "strategy": repr(strategy),
                        "query_id": query_id,
                    },
                )
            fused.append((score, coverage, doc_id))

        fused.sort(key=lambda item: (-item[0], -item[1], item[2]))
        if depth is not None:
            fused = fused[:depth]

        return MergedList(
            (
                FusedEntry(doc_id=doc_id, fused_score=score, rank=rank, coverage=coverage)
                for rank, (score, coverage, doc_id) in enumerate(fused, start=1)
            ),
            query_id=query_id,
        )

    def fuse_batch(
        self,
        queries: Mapping[str, Sequence[ScoredList]],
        strategy: Strategy,
        depth: Optional[int] = None,
        max_workers: Optional[int] = None,
    ) -> Dict[str, MergedList]:
        """
        Fuse many independent queries concurrently.

        Each query is fused in its own worker thread. Inputs are immutable
        and every call allocates its own output, so no locking is involved.

        Args:
            queries: Mapping of query id to that query's source lists
            strategy: Fusion strategy applied to every query
            depth: Per-query truncation depth (default: all)
            max_workers: Thread pool size (default: executor's choice)

        Returns:
            Mapping of query id to MergedList, in the input's key order.

        Raises:
            EmptyInputError: If any query has no lists
            ValidationError: If depth or max_workers is not a positive integer
        """
        _validate_positive("depth", depth)
        _validate_positive("max_workers", max_workers)

        if not queries:
            return {}

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                query_id: executor.submit(self.fuse, lists, strategy, depth, query_id)
                for query_id, lists in queries.items()
            }
            return {query_id: future.result() for query_id, future in futures.items()}


# Module-level instance for convenience functions
_default_engine = FusionEngine()


def fuse(
    lists: Sequence[ScoredList],
    strategy: Strategy,
    depth: Optional[int] = None,
) -> MergedList:
    """
    Convenience function for fusing one query with the default engine.

    Example:
        ```python
        from rankmerge_core.fusion import comb_sum, fuse

        a = ScoredList.from_pairs([("d1", 10), ("d2", 5)])
        b = ScoredList.from_pairs([("d2", 8), ("d3", 2)])
        merged = fuse([a, b], comb_sum)
        # d2 (1.0, two lists), d1 (1.0, one list), d3 (0.0)
        ```
    """
    return _default_engine.fuse(lists, strategy, depth=depth)


def fuse_batch(
    queries: Mapping[str, Sequence[ScoredList]],
    strategy: Strategy,
    depth: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> Dict[str, MergedList]:
    """Convenience function for fusing many queries with the default engine."""
    return _default_engine.fuse_batch(queries, strategy, depth=depth, max_workers=max_workers)
