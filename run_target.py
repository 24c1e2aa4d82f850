#!/usr/bin/env python3
"""
Replay stored result documents through one or more optimization targets:
result JSON -> best-value tracking -> compliance check -> progress report.

Usage:
    python3 run_target.py --target "Sharpe Ratio" --extremum max --target-value 1.5 results/
    python3 run_target.py --config config_data/targets.yaml results/*.json
    python3 run_target.py --target Drawdown --extremum min results/ --output progress.csv --keep-going
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

import pandas as pd

sys.path.insert(0, str(Path(__file__).parent.parent))

from quant_optimizer.config import (
    LOG_LEVEL,
    LOG_STRUCTURED,
    OBJECTIVE_DEFAULT_EXTREMUM,
    REPLAY_RESULT_GLOB,
    REPLAY_STOP_ON_REACHED,
    RESULTS_DIR,
    validate_config,
)
from quant_optimizer.objectives import ObjectiveError, Target, load_targets
from quant_optimizer.utils.logging import configure_logging

logger = logging.getLogger("quant_optimizer.run_target")

PROGRESS_COLUMNS = ["file", "target", "value_improved", "current", "reached"]


def collect_result_files(paths: Iterable[Path], pattern: str = REPLAY_RESULT_GLOB) -> List[Path]:
    """Expand directories with *pattern*; files are kept as given.  Order is by name."""
    files: List[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.glob(pattern)))
        else:
            files.append(path)
    return files


def replay(
    targets: Sequence[Target],
    files: Sequence[Path],
    stop_on_reached: bool = REPLAY_STOP_ON_REACHED,
) -> pd.DataFrame:
    """Feed every result file to every target and record the progress.

    Returns one row per (file, target) pair.  Replay ends after the first
    file on which any target is reached when *stop_on_reached* is set.
    """
    reached = set()
    for index, target in enumerate(targets):
        target.subscribe(lambda index=index: reached.add(index))

    rows = []
    for path in files:
        document = path.read_bytes()
        for index, target in enumerate(targets):
            improved = target.move_ahead(document)
            target.check_compliance()
            if improved:
                logger.info("%s improved on %s", target, path.name)
            rows.append({
                "file": path.name,
                "target": target.target,
                "value_improved": improved,
                "current": None if target.current is None else str(target.current),
                "reached": index in reached,
            })
        if stop_on_reached and reached:
            logger.info("Target reached on %s; stopping replay", path.name)
            break

    return pd.DataFrame(rows, columns=PROGRESS_COLUMNS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay result documents through optimization targets")
    parser.add_argument("paths", nargs="*", type=Path, help="Result JSON files or directories")
    parser.add_argument("--target", type=str, help="Field path of the statistic to track")
    parser.add_argument(
        "--extremum",
        type=str,
        default=OBJECTIVE_DEFAULT_EXTREMUM,
        help="Optimization direction: max or min",
    )
    parser.add_argument("--target-value", type=str, default=None, help="Threshold to reach")
    parser.add_argument("--config", type=Path, default=None, help="Targets YAML/JSON file")
    parser.add_argument("--output", type=Path, default=None, help="Write progress as CSV")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Replay every file even after a target is reached",
    )
    parser.add_argument("--log-level", type=str, default=LOG_LEVEL)
    parser.add_argument("--plain-logs", action="store_true", help="Plain text instead of JSON logs")
    parser.add_argument("--quiet", action="store_true")
    return parser


def main(argv=None) -> int:
    """Run the command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, structured=LOG_STRUCTURED and not args.plain_logs)

    for issue in validate_config():
        if issue["level"] == "ERROR":
            logger.error(issue["message"])
            return 2

    if bool(args.target) == bool(args.config):
        parser.error("exactly one of --target or --config is required")

    try:
        if args.config:
            targets = load_targets(args.config)
        else:
            targets = [Target(args.target, args.extremum, args.target_value)]
        files = collect_result_files(args.paths or [RESULTS_DIR])
        progress = replay(targets, files, stop_on_reached=not args.keep_going)
    except (ObjectiveError, OSError) as e:
        logger.error("Replay failed: %s", e)
        return 2

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        progress.to_csv(args.output, index=False)

    any_reached = any(target.is_complied for target in targets)
    has_threshold = any(target.target_value is not None for target in targets)

    if not args.quiet:
        print("\n=== TARGET REPLAY SUMMARY ===")
        print(f"  Result files: {len(files)}")
        print(f"  Improvements: {int(progress['value_improved'].sum()) if len(progress) else 0}")
        for target in targets:
            status = "REACHED" if target.is_complied else "open"
            print(f"  {target} [{status}]")
        if args.output:
            print(f"  Progress: {args.output}")

    return 0 if any_reached or not has_threshold else 1


if __name__ == "__main__":
    sys.exit(main())
