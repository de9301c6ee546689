#!/usr/bin/env python3
"""
Interactive terminal comparison session.

Shows pairs from a candidate pool, asks which one you prefer, and prints the
resulting preference signals, taste axes and leaderboard as JSON:

    python taste_session.py --pool designer --rounds 10 --min-rounds 6
    python taste_session.py --pool my_pool.json --axes my_axes.json --seed 7
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from config_manager import get_engine_config
from taste_engine.elo import ComparisonSession
from taste_engine.logging_config import setup_logging, stop_logging
from taste_engine.models import RatedItem
from taste_engine.pools import (
    SAMPLE_POOLS,
    build_axis_lookup,
    load_axis_lookup,
    load_candidate_pool,
    sample_pool_path,
)

logger = logging.getLogger(__name__)


def resolve_pool_path(pool: str) -> Path:
    """Bundled pool name or path to a JSON pool file."""
    if pool in SAMPLE_POOLS:
        return sample_pool_path(pool)
    return Path(pool)


def describe(item: RatedItem) -> str:
    tags = ", ".join(item.tags) or "no tags"
    return f"{item.id} [{item.cluster}] ({tags})"


def run_session(
    session: ComparisonSession,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[[str], None] = print,
) -> ComparisonSession:
    """Drive a session until it completes, runs out of pairs, or the user quits."""
    while not session.is_complete():
        pair = session.next_pair()
        if pair is None:
            print_fn("No more pairs to compare.")
            break

        a, b = pair
        print_fn(f"\nRound {session.round + 1}/{session.total_rounds}")
        print_fn(f"  1) {describe(a)}")
        print_fn(f"  2) {describe(b)}")

        while True:
            answer = input_fn("Which do you prefer? [1/2, q to stop] ").strip().lower()
            if answer in ("1", "2", "q"):
                break
            print_fn("Please answer 1, 2 or q.")

        if answer == "q":
            logger.info(f"Session stopped by user after {session.round} rounds")
            break
        if answer == "1":
            session.choose(a.id, b.id)
        else:
            session.choose(b.id, a.id)

    return session


def main(argv: Optional[List[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    parser = argparse.ArgumentParser(description="Interactive pairwise taste session")
    parser.add_argument("--pool", default="designer",
                        help=f"Bundled pool ({', '.join(sorted(SAMPLE_POOLS))}) or path to a JSON pool file")
    parser.add_argument("--axes", type=Path,
                        help="JSON file mapping candidate id to axis coordinates")
    parser.add_argument("--rounds", type=int,
                        help="Total round budget (defaults to the configured value)")
    parser.add_argument("--min-rounds", type=int,
                        help="Rounds before the session may finish (defaults to the configured value)")
    parser.add_argument("--seed", type=int,
                        help="Seed for reproducible pair selection")
    parser.add_argument("--output", type=Path,
                        help="Write the JSON report to this file instead of stdout")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug logging")

    args = parser.parse_args(argv)
    setup_logging(debug=args.debug)

    try:
        candidates = load_candidate_pool(resolve_pool_path(args.pool))
        axis_lookup = build_axis_lookup(candidates)
        if args.axes:
            axis_lookup.update(load_axis_lookup(args.axes))

        session = ComparisonSession(
            candidates,
            total_rounds=args.rounds,
            min_rounds=args.min_rounds,
            seed=args.seed,
            config=get_engine_config(),
            axis_lookup=axis_lookup,
        )
    except ValueError as e:
        logger.error(str(e))
        stop_logging()
        return 1

    try:
        run_session(session, input_fn=input_fn)
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed, reporting results so far")

    report = session.results()
    report["rounds"] = session.round
    report_text = json.dumps(report, indent=2, ensure_ascii=False)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(report_text, encoding="utf-8")
        logger.info(f"Saved session report → {args.output}")
    else:
        print(report_text)

    stop_logging()
    return 0


if __name__ == "__main__":
    sys.exit(main())
