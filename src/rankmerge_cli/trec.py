"""
TREC run file reading and writing.

Expected line format (whitespace separated):

    qid Q0 docno rank score run_id

The second column is reserved and ignored. Each file holds one run (one
source); a run covers any number of queries.

License: MIT
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, TextIO

import structlog

from rankmerge_core.exceptions import ValidationError
from rankmerge_core.models import MergedList, ScoredEntry, ScoredList

logger = structlog.get_logger(__name__)

FIELDS = ("qid", "reserved", "docno", "rank", "score", "runid")


class TrecParseError(ValidationError):
    """
    Raised when a TREC run line cannot be parsed.

    Error Codes:
        TREC_001: Missing field, invalid rank or invalid score
    """

    def __init__(self, message: str, line_number: int, error_code: str = "TREC_001", **kwargs):
        details = kwargs.pop("details", {})
        details["line_number"] = line_number
        super().__init__(
            message=f"failed to parse TREC data at line {line_number}: {message}",
            error_code=error_code,
            details=details,
            **kwargs,
        )
        self.line_number = line_number


@dataclass(frozen=True)
class TrecEntry:
    """One line of a TREC run."""

    query_id: str
    doc_id: str
    rank: int
    score: float
    run_id: str


def parse_trec(text: str) -> List[TrecEntry]:
    """
    Parse TREC run data.

    Args:
        text: File contents

    Returns:
        Entries in file order. Blank lines are skipped.

    Raises:
        TrecParseError: On a missing field, a rank that is not a
            non-negative integer, or a score that is not a finite number
    """
    entries: List[TrecEntry] = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        words = line.split()
        if not words:
            continue

        if len(words) < len(FIELDS):
            raise TrecParseError(
                f"unexpected end of line ({FIELDS[len(words)]})", line_number=line_number
            )

        qid, _reserved, docno, raw_rank, raw_score, runid = words[: len(FIELDS)]

        try:
            rank = int(raw_rank)
        except ValueError:
            raise TrecParseError(f"invalid rank `{raw_rank}`", line_number=line_number) from None
        if rank < 0:
            raise TrecParseError(f"invalid rank `{raw_rank}`", line_number=line_number)

        try:
            score = float(raw_score)
        except ValueError:
            raise TrecParseError(f"invalid score `{raw_score}`", line_number=line_number) from None
        if not math.isfinite(score):
            raise TrecParseError(f"invalid score `{raw_score}`", line_number=line_number)

        entries.append(
            TrecEntry(query_id=qid, doc_id=docno, rank=rank, score=score, run_id=runid)
        )

    return entries


def read_trec(path: Path) -> List[TrecEntry]:
    """
    Read and parse a TREC run file.

    Raises:
        TrecParseError: If the file is not valid UTF-8 or a line is malformed
        OSError: If the file cannot be read
    """
    raw = Path(path).read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TrecParseError(
            f"{path} is not valid UTF-8 (byte offset {e.start})",
            line_number=raw.count(b"\n", 0, e.start) + 1,
            details={"path": str(path), "offset": e.start},
            original_exception=e,
        ) from e
    entries = parse_trec(text)
    logger.debug("trec_file_read", path=str(path), entries=len(entries))
    return entries


def group_by_query(
    entries: Iterable[TrecEntry],
    source: Optional[str] = None,
) -> Dict[str, ScoredList]:
    """
    Build one ScoredList per query from a run's entries.

    Args:
        entries: Entries of a single run
        source: Source tag for the lists (default: run id of each query's
            first entry)

    Returns:
        Mapping of query id to ScoredList, in first-seen query order.

    Raises:
        DuplicateDocumentError: If a query lists the same document twice
        InconsistentOrderError: If ranks contradict scores within a query
    """
    grouped: Dict[str, List[TrecEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.query_id, []).append(entry)

    return {
        query_id: ScoredList(
            (ScoredEntry(doc_id=e.doc_id, score=e.score, rank=e.rank) for e in query_entries),
            source=source if source is not None else query_entries[0].run_id,
            query_id=query_id,
        )
        for query_id, query_entries in grouped.items()
    }


def format_trec(query_id: str, merged: MergedList, run_id: str) -> str:
    """
    Format one query's merged list as TREC lines.

    Format: `qid Q0 docno rank score run_id` (separated by spaces)
    """
    return "".join(
        f"{query_id} Q0 {entry.doc_id} {entry.rank} {entry.fused_score:.6f} {run_id}\n"
        for entry in merged
    )


def write_trec(stream: TextIO, results: Mapping[str, MergedList], run_id: str) -> None:
    """Write merged lists for several queries to a text stream."""
    for query_id, merged in results.items():
        stream.write(format_trec(query_id, merged, run_id))
