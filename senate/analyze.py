"""Orchestrator: load candidates, decode preferences and run a tally engine."""

from dataclasses import dataclass
from typing import Any

from senate import config
from senate.groups import get_group_list, get_state_candidates
from senate.models import Candidate, CandidateId, ElectionResult, Group
from senate.parsers import CandidateFileParser, PreferenceFileParser, SchemaError, select_by_state
from senate.sources import SourceError, open_source
from senate.stream import decode_ballots
from senate.tally import get_all_tally_engines, get_tally_engine

# Import tally engines to register them
from senate.tally import stv  # noqa: F401

LOAD_ERRORS = (SchemaError, SourceError, OSError)


@dataclass
class StateView:
    """Everything the decoder needs to know about one state."""
    state: str
    candidates: list[Candidate]
    candidate_ids: list[CandidateId]
    groups: list[Group]


@dataclass
class ElectionReport:
    """Complete run: the candidate roll, the state's groups and the outcome."""
    candidates: list[Candidate]
    view: StateView
    seats: int
    result: ElectionResult

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "state": self.view.state,
            "seats": self.seats,
            "num_candidates": len(self.view.candidates),
            "groups": [
                {"name": g.name, "candidate_ids": list(g.candidate_ids)}
                for g in self.view.groups
            ],
            "result": self.result.to_dict(),
        }


class ElectionError(Exception):
    """Fatal error while loading election data or counting it."""
    pass


def load_candidate_roll(source: str, marker: str | None = None) -> list[Candidate]:
    """Load every candidate for the contest from a candidates file.

    Raises:
        ElectionError: If the file can't be opened or doesn't fit the schema
    """
    marker = marker or config.NOMINATION_MARKER
    try:
        with open_source(source) as lines:
            return CandidateFileParser(marker).parse(lines)
    except LOAD_ERRORS as e:
        raise ElectionError(f"Failed to load candidates from {source}: {e}") from e


def build_state_view(candidates: list[Candidate], state: str) -> StateView:
    """Select one state's candidates and derive its groups.

    Raises:
        ElectionError: If no candidates are standing in the state
    """
    state_candidates = get_state_candidates(candidates, state)
    if not state_candidates:
        states = sorted({c.state for c in candidates})
        raise ElectionError(
            f"No candidates found for state {state!r}. "
            f"States in the file: {', '.join(states) or 'none'}"
        )
    return StateView(
        state=state,
        candidates=state_candidates,
        candidate_ids=select_by_state(candidates, state),
        groups=get_group_list(candidates, state),
    )


def count_preferences(
    source: str, view: StateView, seats: int, engine_name: str | None = None
) -> ElectionResult:
    """Stream a preferences file through the decoder into a tally engine.

    Raises:
        ElectionError: For a bad seat count, an unknown engine, or a
            preferences file that can't be opened or has the wrong header.
            Individual bad ballots are not errors; the engine sees them as
            values.
    """
    if seats < 1:
        raise ElectionError(f"Seat count must be at least 1, got {seats}")

    engine_name = engine_name or config.DEFAULT_TALLY_ENGINE
    engine = get_tally_engine(engine_name)
    if engine is None:
        available = ", ".join(e.name for e in get_all_tally_engines())
        raise ElectionError(f"Unknown tally engine {engine_name!r}. Available: {available}")

    try:
        with open_source(source) as lines:
            records = PreferenceFileParser().iter_records(lines)
            ballots = decode_ballots(records, view.groups, view.candidate_ids)
            return engine.count(view.candidates, ballots, seats)
    except LOAD_ERRORS as e:
        raise ElectionError(f"Failed to read preferences from {source}: {e}") from e


def run_election(
    candidates_source: str,
    preferences_source: str,
    state: str,
    seats: int | None = None,
    engine_name: str | None = None,
    marker: str | None = None,
) -> ElectionReport:
    """Load, decode and count an election for one state.

    Raises:
        ElectionError: If anything fails at load time
    """
    seats = config.DEFAULT_SEATS if seats is None else seats
    candidates = load_candidate_roll(candidates_source, marker)
    view = build_state_view(candidates, state)
    result = count_preferences(preferences_source, view, seats, engine_name)
    return ElectionReport(candidates=candidates, view=view, seats=seats, result=result)
