# apps/cli/run.py
"""
CLI entry point for wordlebench runs.

This script:
  1) Validates the word lists (prints counts + SHA, ensures answers ⊆ allowed).
  2) Instantiates the requested strategies and configures the harness
     (sample size, baseline, saved summaries).
  3) Runs the harness (parallel, or sequential with --debug) and prints a
     report comparing every strategy with the baseline.
  4) Optionally writes:
       - CSV:  per-trial results + guess/pattern history columns
       - JSON: manifest with config, word list hashes, git commit, summaries

Examples:
  python -m apps.cli.run --strategies common basic --baseline basic --sample 200
  python -m apps.cli.run --strategies ALL --all --save common=common_v011
  python -m apps.cli.run --strategies common --load-baseline common_v011
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from wordlebench import config
from wordlebench.datasets import validate_wordlists, pretty_summary
from wordlebench.errors import WordleError
from wordlebench.harness import Harness, write_csv, write_manifest
from wordlebench.harness.io import git_commit_or_unknown, timestamp_id
from wordlebench.solvers import create_strategy, get_strategy_ids

logger = logging.getLogger("wordlebench.cli")


def _parse_saves(items: List[str]) -> Dict[str, str]:
    """['common=run1', 'basic=b'] -> {'common': 'run1', 'basic': 'b'}"""
    out: Dict[str, str] = {}
    for item in items:
        sid, sep, name = item.partition("=")
        if not sep or not sid or not name:
            raise SystemExit(f"--save expects ID=NAME, got {item!r}")
        out[sid] = name
    return out


def _build_parser() -> argparse.ArgumentParser:
    registered = ", ".join(get_strategy_ids())
    ap = argparse.ArgumentParser(description="wordlebench: evaluate and compare Wordle strategies")
    ap.add_argument("--strategies", nargs="+", required=True,
                    help=f"strategy ids or 'ALL'. Registered: {registered}")
    ap.add_argument("--exclude", nargs="*", default=[],
                    help="strategy ids to skip (only with --strategies ALL)")
    ap.add_argument("--first-word", help="opening word for the 'basic' strategy")
    ap.add_argument("--seed", type=int, default=123, help="seed for sampling and random strategies")

    words = ap.add_mutually_exclusive_group()
    words.add_argument("--sample", type=int, default=config.DEFAULT_SAMPLE,
                       help="number of answers to sample without replacement")
    words.add_argument("--all", action="store_true", help="run on every possible answer")

    ap.add_argument("--workers", type=int, help="worker threads (default: executor default)")
    ap.add_argument("--debug", action="store_true",
                    help="run sequentially and skip (with a logged traceback) trials that raise")

    base = ap.add_mutually_exclusive_group()
    base.add_argument("--baseline", metavar="ID", help="use this run strategy as the baseline")
    base.add_argument("--load-baseline", metavar="NAME", help="use a saved summary as the baseline")
    ap.add_argument("--save", nargs="*", default=[], metavar="ID=NAME",
                    help="save the summary of strategy ID under NAME")
    ap.add_argument("--force", action="store_true", help="overwrite existing saved summaries")
    ap.add_argument("--baseline-dir", default=None,
                    help=f"saved summary directory (default: ${config.BASELINE_DIR_ENV} or ./wordle_baselines)")

    ap.add_argument("--histogram", action="store_true", help="print guess histograms")
    ap.add_argument("--outdir", help="write per-trial CSV and a JSON manifest here")
    ap.add_argument("--progress", choices=["bar", "off"], default="bar",
                    help="show a progress bar while running")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def _strategy_ids(args) -> List[str]:
    registered = get_strategy_ids()
    if len(args.strategies) == 1 and args.strategies[0].lower() == "all":
        return [s for s in registered if s not in set(args.exclude)]
    missing = [s for s in args.strategies if s not in registered]
    if missing:
        raise SystemExit(f"Unknown strategy ids: {missing}. Registered: {registered}")
    return list(args.strategies)


def _make_strategy(sid: str, args):
    if sid == "basic" and args.first_word:
        return create_strategy(sid, first_word=args.first_word)
    if sid == "random_consistent":
        return create_strategy(sid, seed=args.seed)
    return create_strategy(sid)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse CLI args, validate word lists, run the harness and print the report.
    Returns a process exit code.
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    # 1) Validate word lists and print a one-liner summary
    d = config.data_dir()
    rep = validate_wordlists(d / config.ANSWERS_FILE, d / config.ALLOWED_FILE)
    print(pretty_summary(rep))
    if not rep["passed"]:
        print("Word list validation failed; fix the lists before running.", file=sys.stderr)
        return 2

    todo = _strategy_ids(args)
    saves = _parse_saves(args.save)
    unknown = sorted(set(saves) - set(todo))
    if unknown:
        raise SystemExit(f"--save names strategies that are not being run: {unknown}")
    if args.baseline and args.baseline not in todo:
        raise SystemExit(f"--baseline {args.baseline!r} is not among --strategies")

    # 2) Configure the harness
    harness = Harness().seed(args.seed).workers(args.workers).overwrite(args.force)
    harness.baseline_dir(args.baseline_dir)
    if args.progress == "bar":
        harness.verbose()
    if args.all:
        harness.test_all()
    else:
        harness.test_num(args.sample)

    try:
        for sid in todo:
            strategy = _make_strategy(sid, args)
            if sid == args.baseline:
                harness.add_baseline(strategy, save_as=saves.get(sid))
            else:
                harness.add_strategy(strategy, save_as=saves.get(sid))
        if args.load_baseline:
            harness.add_saved_baseline(args.load_baseline)

        # 3) Run
        record = harness.debug_run() if args.debug else harness.run()
    except WordleError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    record.print_report(histogram=args.histogram)

    # 4) Outputs (CSV + manifest)
    if args.outdir:
        run_id = timestamp_id()
        outdir = Path(args.outdir)
        csv_path = write_csv(record.perfs, outdir / f"run_{run_id}.csv")
        manifest = {
            "run_id": run_id,
            "git_commit": git_commit_or_unknown(),
            "config": vars(args),
            "wordlists": rep,
            "summaries": [s.to_dict() for s in record.summaries()],
        }
        manifest_path = write_manifest(manifest, outdir / f"run_{run_id}_manifest.json")
        print(f"Wrote: {csv_path}")
        print(f"Wrote: {manifest_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
