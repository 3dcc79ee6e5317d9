#!/usr/bin/env python3
"""
In-play analysis runner, main entry point.

Feeds one or more match-report snapshots (in match order) through a
MatchSession and prints the pre-match, goal-model and live analysis
report after each one.

Usage:
    python main.py report_30.txt report_60.txt          # one session, two snapshots
    python main.py report.txt --averages 1,6 0.9 1.1 1.4
    python main.py report.txt --odds 2.10 3.40 3.60 --json
    cat report.txt | python main.py -                   # read stdin
    python main.py r1.txt r2.txt --csv                  # export dominance series
"""
import argparse
import json
import logging
import math
import sys
from pathlib import Path

from config import DOMINANCE_CSV, LOG_LEVEL
from inplay.errors import EmptyInputError, InvalidInputError
from inplay.odds import fair_odds
from inplay.session import MatchSession
from logging_config import setup_logging

log = logging.getLogger("inplay.main")


def print_header(text, width=70):
    print("\n" + "═" * width)
    print(f"  {text}")
    print("═" * width)


def print_section(text):
    print(f"\n── {text} " + "─" * max(1, 50 - len(text)))


def read_report(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def print_report(session: MatchSession) -> None:
    stats = session.live_stats

    print_section("Live Stats")
    print(f"  {stats}")

    probs = session.odds.probs
    if probs is not None:
        print_section("Pre-match Market")
        fh, fd, fa = fair_odds(probs)
        print(f"  Odds 1X2:   {session.odds.home} / {session.odds.draw} / {session.odds.away}")
        print(f"  Implied:    H {probs.home * 100:.1f}%  D {probs.draw * 100:.1f}%  A {probs.away * 100:.1f}%")
        print(f"  Fair odds:  {fh:.2f} / {fd:.2f} / {fa:.2f}   (margin {probs.margin:.2f}%)")

    pred = session.prediction
    if pred is not None:
        print_section("Goal Model")
        print(f"  xG:         H {pred.expected_goals_home:.2f}  A {pred.expected_goals_away:.2f}")
        print(f"  1X2:        H {pred.prob_home_win * 100:.1f}%  D {pred.prob_draw * 100:.1f}%  "
              f"A {pred.prob_away_win * 100:.1f}%")
        print(f"  Over 2.5:   {pred.prob_over25 * 100:.1f}%   BTTS {pred.prob_btts * 100:.1f}%")
        top = "  ".join(f"{r.score} ({r.probability * 100:.1f}%)" for r in pred.most_probable_results)
        print(f"  Top scores: {top}")

    print_section("Live Performance")
    print(session.advanced_text())

    print_section("Prediction vs Live")
    print(session.comparative_text())


def json_safe(value):
    """Replace non-finite floats with None; JSON has no nan or inf."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(v) for v in value]
    return value


def snapshot_dict(session: MatchSession) -> dict:
    return {
        "odds": session.odds.as_dict(),
        "prediction": session.prediction.as_dict() if session.prediction else None,
        "live_stats": session.live_stats.as_dict(),
        "analysis": session.analysis.as_dict() if session.analysis else None,
        "performance_text": session.advanced_text(),
        "comparison_text": session.comparative_text(),
    }


def run(args) -> int:
    session = MatchSession()
    if args.averages:
        session.set_averages(*args.averages)

    sources = args.reports or ["-"]
    for idx, source in enumerate(sources, start=1):
        try:
            text = read_report(source)
            session.apply_text(text, keep_analysis=not args.reset_each)
        except OSError as e:
            log.error("cannot read %s: %s", source, e)
            return 1
        except EmptyInputError as e:
            log.error("%s: %s", source, e)
            return 2

        if args.odds:
            session.set_odds(*args.odds)

        if session.odds.is_complete:
            try:
                session.calculate_probabilities()
            except InvalidInputError as e:
                log.warning("odds skipped: %s", e.message)

        if args.averages and session.prediction is None:
            try:
                session.generate_prediction()
            except InvalidInputError as e:
                log.warning("prediction skipped: %s", e.message)

        session.update_analysis()

        if args.json:
            doc = json_safe({"source": source, **snapshot_dict(session)})
            print(json.dumps(doc, indent=2, ensure_ascii=False, allow_nan=False))
        else:
            print_header(f"SNAPSHOT {idx}/{len(sources)} — {source} (min {session.live_stats.minute})")
            print_report(session)

    if args.csv is not None:
        path = Path(args.csv) if args.csv else DOMINANCE_CSV
        path.parent.mkdir(parents=True, exist_ok=True)
        session.dominance_frame().to_csv(path, index=False)
        log.info("dominance series → %s (%d points)", path, len(session.history))

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="In-play match analysis from pasted match reports")
    parser.add_argument("reports", nargs="*",
                        help="match report text files in match order ('-' for stdin)")
    parser.add_argument("--odds", nargs=3, type=float, metavar=("HOME", "DRAW", "AWAY"),
                        help="pre-match decimal odds (overrides odds found in the text)")
    parser.add_argument("--averages", nargs=4, metavar=("HGF", "HGC", "AGF", "AGC"),
                        help="historical goals for/against averages, '1,4' or '1.4'")
    parser.add_argument("--reset-each", action="store_true",
                        help="do not carry momentum / peaks between reports")
    parser.add_argument("--csv", nargs="?", const="", default=None, metavar="PATH",
                        help=f"write the dominance series as CSV (default {DOMINANCE_CSV})")
    parser.add_argument("--json", action="store_true", help="print JSON snapshots")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="logging level")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
