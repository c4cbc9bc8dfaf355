"""
rankmerge CLI entry point.

Usage:
    rankmerge merge FILE [FILE ...] [--fuser NAME] [-o OUTPUT]
    rankmerge --help
    rankmerge --version
"""

import argparse
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from rankmerge_cli.strategies import available_strategies, resolve_strategy
from rankmerge_cli.trec import group_by_query, read_trec, write_trec
from rankmerge_core import __version__
from rankmerge_core.config import RankMergeSettings, get_config_summary
from rankmerge_core.exceptions import RankMergeError
from rankmerge_core.fusion import FusionEngine
from rankmerge_core.logging_service import LoggingConfig, LoggingService
from rankmerge_core.models import MergedList, ScoredList


def load_runs(files: Sequence[Path]) -> Dict[str, List[ScoredList]]:
    """
    Read run files and collect each query's source lists.

    Each file is one source. A query missing from some files simply has
    fewer lists. Query order is first-seen order over all files.
    """
    queries: Dict[str, List[ScoredList]] = {}
    for path in files:
        for query_id, scored_list in group_by_query(read_trec(path)).items():
            queries.setdefault(query_id, []).append(scored_list)
    return queries


def merge_command(
    files: Sequence[Path],
    fuser: str,
    settings: RankMergeSettings,
    output: Optional[Path] = None,
) -> Dict[str, MergedList]:
    """
    Fuse TREC run files query by query and write the merged run.

    Args:
        files: Input run files, one per source
        fuser: Strategy name
        settings: Effective settings (run id, depth, workers, ...)
        output: Output file (stdout when None)

    Returns:
        Merged list per query.

    Raises:
        RankMergeError: On unknown strategy or invalid input data
        OSError: If a file cannot be read or written
    """
    logger = LoggingService.get_logger("rankmerge_cli")

    strategy = resolve_strategy(fuser, rrf_k=settings.rrf_k)
    queries = load_runs(files)
    logger.info("merge_started", files=len(files), queries=len(queries), fuser=fuser)

    start = time.perf_counter()
    engine = FusionEngine(normalize=settings.normalize)
    results = engine.fuse_batch(
        queries, strategy, depth=settings.depth, max_workers=settings.max_workers
    )
    LoggingService.log_performance(
        operation="fuse_batch",
        duration_ms=(time.perf_counter() - start) * 1000,
        metadata={"queries": len(results)},
        logger_name="rankmerge_cli",
    )

    if output is None:
        write_trec(sys.stdout, results, settings.run_id)
    else:
        with open(output, "w", encoding="utf-8") as stream:
            write_trec(stream, results, settings.run_id)

    logger.info("merge_completed", queries=len(results), output=str(output or "-"))
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rankmerge", description="Search result list processing tool"
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # merge command
    merge_parser = subparsers.add_parser(
        "merge", help="Perform late fusion of search result lists"
    )
    merge_parser.add_argument("files", nargs="+", type=Path, help="Input TREC run files")
    merge_parser.add_argument(
        "-f",
        "--fuser",
        default=None,
        help=f"Fusion strategy: {', '.join(available_strategies())} (default: from settings)",
    )
    merge_parser.add_argument(
        "-o", "--output", type=Path, default=None, help="Output file (default: stdout)"
    )
    merge_parser.add_argument("--run-id", default=None, help="Run tag of the fused output")
    merge_parser.add_argument(
        "--depth", type=int, default=None, help="Keep only the top N results per query"
    )
    merge_parser.add_argument(
        "--workers", type=int, default=None, help="Worker threads for fusing queries"
    )
    merge_parser.add_argument(
        "--rrf-k", type=int, default=None, help="Smoothing constant for the rrf strategy"
    )
    merge_parser.add_argument(
        "--no-normalize",
        action="store_true",
        help="Fuse raw scores instead of min-max normalized scores",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != "merge":
        parser.print_help()
        sys.exit(0)

    try:
        settings = RankMergeSettings()
        overrides = {
            "log_level": args.log_level,
            "run_id": args.run_id,
            "depth": args.depth,
            "max_workers": args.workers,
            "rrf_k": args.rrf_k,
        }
        for name, value in overrides.items():
            if value is not None:
                setattr(settings, name, value)
        if args.no_normalize:
            settings.normalize = False
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    if not LoggingService.is_configured():
        LoggingService.configure_logging(
            config=LoggingConfig(
                level=settings.log_level, format=settings.log_format, output_stream=sys.stderr
            )
        )
    LoggingService.get_logger("rankmerge_cli").debug(
        "settings_loaded", **get_config_summary(settings)
    )

    try:
        merge_command(
            args.files,
            args.fuser or settings.default_strategy,
            settings,
            output=args.output,
        )
    except (RankMergeError, OSError) as e:
        LoggingService.log_error(e, context={"command": "merge"}, logger_name="rankmerge_cli")
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
