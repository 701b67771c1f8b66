"""Core data models for candidates, groups, ballots and election results."""

from dataclasses import dataclass, field
from typing import Any, TypeAlias

CandidateId: TypeAlias = int


@dataclass(frozen=True)
class Candidate:
    """A single Senate nomination.

    Attributes:
        id: Identifier unique across the whole loaded file (not per state),
            assigned in file order among accepted rows
        surname: Family name as printed on the ballot paper
        other_names: Given names
        group_name: Raw ticket label ("A", "B", ..., "UG" for ungrouped)
        party: Party name as printed on the ballot paper
        state: State or territory code, e.g. "NSW"
        ballot_position: Position within the ticket
    """
    id: CandidateId
    surname: str
    other_names: str
    group_name: str
    party: str
    state: str
    ballot_position: int = 0

    @property
    def display_name(self) -> str:
        return f"{self.other_names} {self.surname}"


@dataclass(frozen=True)
class Group:
    """A ticket with its members in lodged order.

    The position of a group within its state's group list is the position of
    its box above the line.
    """
    name: str
    state: str
    candidate_ids: tuple[CandidateId, ...]

    def __post_init__(self):
        if not self.candidate_ids:
            raise ValueError(f"Group {self.name} ({self.state}) has no candidates")


@dataclass(frozen=True)
class PreferenceRow:
    """One record of a formal preferences file."""
    electorate_name: str
    vote_collection_point: str
    vote_collection_point_id: str
    batch_num: str
    paper_num: str
    preferences: str
    line_number: int = 0


@dataclass(frozen=True)
class RecordError:
    """A preferences record that could not be split into its fields."""
    line_number: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.message}"


@dataclass(frozen=True)
class BallotParseError:
    """Why a preference string could not be decoded.

    These are returned as values, never raised, so one bad ballot can't
    interrupt a stream of them. Match on the subclass to tell them apart.
    """

    @property
    def reason(self) -> str:
        return "invalid ballot"


@dataclass(frozen=True)
class NonIntegerPreference(BallotParseError):
    token: str
    position: int

    @property
    def reason(self) -> str:
        return f"preference {self.token!r} at position {self.position} is not an integer"


@dataclass(frozen=True)
class BothSectionsMarked(BallotParseError):

    @property
    def reason(self) -> str:
        return "both above and below the line are marked"


@dataclass(frozen=True)
class NeitherSectionMarked(BallotParseError):

    @property
    def reason(self) -> str:
        return "neither above nor below the line is marked"


@dataclass(frozen=True)
class UnmatchedPreference(BallotParseError):
    position: int

    @property
    def reason(self) -> str:
        return f"preference at position {self.position} has no candidate"


@dataclass(frozen=True)
class UnderlyingRecordError(BallotParseError):
    error: RecordError

    @property
    def reason(self) -> str:
        return f"unreadable record ({self.error})"


DecodeOutcome: TypeAlias = list[CandidateId] | BallotParseError


@dataclass
class ElectionResult:
    """Result from a tally engine.

    Attributes:
        engine_name: Human-readable name of the engine that produced this
        elected: Candidates in the order they were elected
        tied: Whether the last seat was decided between candidates on equal votes
        details: Engine-specific details (quota, informal counts, rounds)
    """
    engine_name: str
    elected: list[Candidate]
    tied: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "engine_name": self.engine_name,
            "elected": [
                {"id": c.id, "name": c.display_name, "party": c.party}
                for c in self.elected
            ],
            "tied": self.tied,
            "details": self.details,
        }
