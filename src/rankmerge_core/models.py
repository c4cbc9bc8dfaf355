"""
Data models for rankmerge_core.

Defines the scored entries, per-source ranked lists and merged fusion output
shared by every fusion strategy.

License: MIT
"""

from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Tuple, Union, overload

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from rankmerge_core.exceptions import (
    DuplicateDocumentError,
    InconsistentOrderError,
    ValidationError,
)


class _Entry(BaseModel):
    """
    Frozen entry model reporting invalid fields as ValidationError.

    Raises:
        ValidationError: VAL_003 with the pydantic error as original_exception
    """

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise ValidationError(
                message=f"invalid {type(self).__name__}: {e.errors()[0]['msg']}",
                error_code="VAL_003",
                details={
                    "fields": [".".join(str(loc) for loc in err["loc"]) for err in e.errors()],
                    "doc_id": data.get("doc_id"),
                },
                original_exception=e,
            ) from e


class ScoredEntry(_Entry):
    """One document in one source list."""

    doc_id: str = Field(..., min_length=1)
    score: float = Field(..., allow_inf_nan=False)
    rank: Optional[int] = Field(default=None, ge=0)


class FusedEntry(_Entry):
    """One document of a merged list."""

    doc_id: str = Field(..., min_length=1)
    fused_score: float = Field(..., allow_inf_nan=False)
    rank: int = Field(..., ge=1)
    coverage: int = Field(..., ge=1)


class ScoredList(Sequence[ScoredEntry]):
    """
    Immutable ranked list of scored documents from one source for one query.

    The list is validated once on construction:
        - a document identifier may appear only once
        - ranks are supplied for every entry or for none
        - explicit ranks must agree with descending score order

    With explicit ranks, entries are ordered by declared rank. Without them,
    entries are stably sorted by descending score. Either way every stored
    entry carries its 1-based position as rank.

    Attributes:
        source: Optional run tag of the source that produced the list
        query_id: Optional query identifier

    Example:
        ```python
        run = ScoredList.from_pairs([("d1", 10.0), ("d2", 5.0)], source="bm25")
        run.rank_of("d2")  # 2
        "d1" in run  # True
        ```
    """

    __slots__ = ("_entries", "_index", "source", "query_id")

    def __init__(
        self,
        entries: Iterable[ScoredEntry] = (),
        source: Optional[str] = None,
        query_id: Optional[str] = None,
    ) -> None:
        entries = list(entries)
        self.source = source
        self.query_id = query_id

        index: Dict[str, ScoredEntry] = {}
        for entry in entries:
            if entry.doc_id in index:
                raise DuplicateDocumentError(
                    message=f"document {entry.doc_id!r} appears more than once",
                    details={"doc_id": entry.doc_id, "source": source, "query_id": query_id},
                )
            index[entry.doc_id] = entry

        explicit = [entry.rank is not None for entry in entries]
        if any(explicit) and not all(explicit):
            raise ValidationError(
                message="ranks must be given for every entry or for none",
                error_code="VAL_004",
                details={"source": source, "query_id": query_id},
            )

        if entries and all(explicit):
            ordered = sorted(entries, key=lambda e: e.rank)
            for prev, cur in zip(ordered, ordered[1:]):
                if cur.rank == prev.rank:
                    raise InconsistentOrderError(
                        message=f"rank {cur.rank} is assigned to more than one document",
                        details={"rank": cur.rank, "doc_ids": [prev.doc_id, cur.doc_id]},
                    )
                if cur.score > prev.score:
                    raise InconsistentOrderError(
                        message=(
                            f"document {cur.doc_id!r} at rank {cur.rank} scores higher "
                            f"than {prev.doc_id!r} at rank {prev.rank}"
                        ),
                        details={
                            "doc_id": cur.doc_id,
                            "rank": cur.rank,
                            "score": cur.score,
                            "previous_score": prev.score,
                        },
                    )
        else:
            ordered = sorted(entries, key=lambda e: -e.score)

        self._entries: Tuple[ScoredEntry, ...] = tuple(
            entry if entry.rank == position else entry.model_copy(update={"rank": position})
            for position, entry in enumerate(ordered, start=1)
        )
        self._index: Dict[str, ScoredEntry] = {entry.doc_id: entry for entry in self._entries}

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[Tuple[str, float]],
        source: Optional[str] = None,
        query_id: Optional[str] = None,
    ) -> "ScoredList":
        """Build a list from ``(doc_id, score)`` pairs, ranked by score."""
        return cls(
            (ScoredEntry(doc_id=doc_id, score=score) for doc_id, score in pairs),
            source=source,
            query_id=query_id,
        )

    def rescored(self, scores: Sequence[float]) -> "ScoredList":
        """
        Return a copy with new scores, keeping order, ranks and metadata.

        Args:
            scores: One score per entry, in rank order. Must be non-increasing.

        Raises:
            ValidationError: If the number of scores differs from the list length
            InconsistentOrderError: If the new scores break rank order
        """
        if len(scores) != len(self._entries):
            raise ValidationError(
                message=f"expected {len(self._entries)} scores, got {len(scores)}",
                error_code="VAL_003",
                details={"expected": len(self._entries), "actual": len(scores)},
            )
        return ScoredList(
            (
                ScoredEntry(doc_id=entry.doc_id, score=score, rank=entry.rank)
                for entry, score in zip(self._entries, scores)
            ),
            source=self.source,
            query_id=self.query_id,
        )

    def get(self, doc_id: str) -> Optional[ScoredEntry]:
        return self._index.get(doc_id)

    def score_of(self, doc_id: str) -> Optional[float]:
        entry = self._index.get(doc_id)
        return entry.score if entry is not None else None

    def rank_of(self, doc_id: str) -> Optional[int]:
        entry = self._index.get(doc_id)
        return entry.rank if entry is not None else None

    @property
    def doc_ids(self) -> Tuple[str, ...]:
        return tuple(entry.doc_id for entry in self._entries)

    @property
    def scores(self) -> Tuple[float, ...]:
        return tuple(entry.score for entry in self._entries)

    @overload
    def __getitem__(self, index: int) -> ScoredEntry: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[ScoredEntry, ...]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[ScoredEntry, Tuple[ScoredEntry, ...]]:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScoredEntry]:
        return iter(self._entries)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, ScoredEntry):
            return self._index.get(item.doc_id) == item
        return item in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoredList):
            return NotImplemented
        return (
            self._entries == other._entries
            and self.source == other.source
            and self.query_id == other.query_id
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ScoredList(source={self.source!r}, query_id={self.query_id!r}, "
            f"entries={len(self._entries)})"
        )


class MergedList(Sequence[FusedEntry]):
    """
    Final output of one fusion call: fused entries ranked 1..N.

    Built by the fusion engine from already sorted entries.
    """

    __slots__ = ("_entries", "_index", "query_id")

    def __init__(self, entries: Iterable[FusedEntry] = (), query_id: Optional[str] = None) -> None:
        self._entries: Tuple[FusedEntry, ...] = tuple(entries)
        self._index: Dict[str, FusedEntry] = {entry.doc_id: entry for entry in self._entries}
        self.query_id = query_id

    def get(self, doc_id: str) -> Optional[FusedEntry]:
        return self._index.get(doc_id)

    @property
    def doc_ids(self) -> Tuple[str, ...]:
        return tuple(entry.doc_id for entry in self._entries)

    def to_scored_list(self, source: Optional[str] = None) -> ScoredList:
        """View the merged ranking as a ScoredList, e.g. to fuse it again."""
        return ScoredList(
            (
                ScoredEntry(doc_id=entry.doc_id, score=entry.fused_score, rank=entry.rank)
                for entry in self._entries
            ),
            source=source,
            query_id=self.query_id,
        )

    @overload
    def __getitem__(self, index: int) -> FusedEntry: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[FusedEntry, ...]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[FusedEntry, Tuple[FusedEntry, ...]]:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FusedEntry]:
        return iter(self._entries)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, FusedEntry):
            return self._index.get(item.doc_id) == item
        return item in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MergedList):
            return NotImplemented
        return self._entries == other._entries and self.query_id == other.query_id

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MergedList(query_id={self.query_id!r}, entries={len(self._entries)})"
