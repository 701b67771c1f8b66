"""Count a Senate election for one state from AEC candidate and preference files.

Usage:
    election2016 candidates.csv aec-senate-formalpreferences-TAS.zip TAS
    election2016 candidates.csv prefs.csv ACT 2 --log-level INFO
"""

import argparse
import logging
import sys

from senate import config
from senate.analyze import (
    ElectionError,
    build_state_view,
    count_preferences,
    load_candidate_roll,
)
from senate.models import Candidate, Group


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="election2016",
        description="Count a Senate election for one state")
    parser.add_argument("candidates",
                        help="Candidates CSV: a path, .zip or URL")
    parser.add_argument("preferences",
                        help="Formal preferences CSV: a path, .zip or URL")
    parser.add_argument("state", help="State code, e.g. TAS")
    parser.add_argument("seats", nargs="?", default=None,
                        help=f"Number of seats (default: {config.DEFAULT_SEATS})")
    parser.add_argument("--engine", default=config.DEFAULT_TALLY_ENGINE,
                        help=f"Tally engine (default: {config.DEFAULT_TALLY_ENGINE})")
    parser.add_argument("--marker", default=config.NOMINATION_MARKER,
                        help=f"Nomination type to count (default: {config.NOMINATION_MARKER})")
    parser.add_argument("--log-level", default=config.LOG_LEVEL,
                        help=f"Logging level (default: {config.LOG_LEVEL})")
    return parser


def parse_seats(value: str | None) -> int:
    if value is None:
        return config.DEFAULT_SEATS
    try:
        return int(value)
    except ValueError:
        raise ElectionError(f"Invalid seat count: {value!r}")


def format_candidate(candidate: Candidate) -> str:
    return f"{candidate.other_names} {candidate.surname} ({candidate.party})"


def format_group(group: Group) -> str:
    members = ", ".join(str(cid) for cid in group.candidate_ids)
    return f"  {group.name}: [{members}]"


def run(args: argparse.Namespace) -> int:
    seats = parse_seats(args.seats)

    candidates = load_candidate_roll(args.candidates, args.marker)
    for c in candidates:
        print(f"{c.id}: {format_candidate(c)}")

    view = build_state_view(candidates, args.state)
    print(f"Num groups: {len(view.groups)}")
    print("Groups:")
    for group in view.groups:
        print(format_group(group))

    result = count_preferences(args.preferences, view, seats, args.engine)
    for c in result.elected:
        print(f"Elected: {format_candidate(c)}")

    if result.tied:
        print("Tie for the last place")

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        logging.basicConfig(
            level=args.log_level.upper(),
            format="%(levelname)s %(name)s: %(message)s",
        )
        return run(args)
    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
