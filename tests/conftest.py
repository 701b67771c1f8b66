"""Shared test helpers."""

from pathlib import Path
from unittest.mock import patch

import httpx

from senate.models import Candidate, ElectionResult, Group
from senate.parsers.candidates import CANDIDATE_FIELDS


def make_candidate_row(**fields: str) -> dict[str, str]:
    """Build a candidates-file row dict, blank apart from the given fields.

    Defaults to a Senate nomination at ballot position 1.
    """
    row = {name: "" for name in CANDIDATE_FIELDS}
    row.update({"nom_ty": "S", "ballot_position": "1"})
    row.update(fields)
    return row


def make_candidate(id: int, state: str = "ACT", group_name: str = "A",
                   ballot_position: int = 1, surname: str | None = None) -> Candidate:
    return Candidate(
        id=id,
        surname=surname or f"SURNAME{id}",
        other_names=f"Given{id}",
        group_name=group_name,
        party=f"Party {group_name}",
        state=state,
        ballot_position=ballot_position,
    )


def make_groups(table: dict[str, tuple[int, ...]], state: str = "ACT") -> list[Group]:
    """Build groups from {name: candidate_ids}, in the table's order."""
    return [Group(name=name, state=state, candidate_ids=ids) for name, ids in table.items()]


def elected_ids(result: ElectionResult) -> list[int]:
    """Extract the elected candidate ids in order of election."""
    return [c.id for c in result.elected]


FIXTURES_DIR = Path(__file__).parent / "test_parsers" / "fixtures"
CANDIDATES_CSV = FIXTURES_DIR / "candidates.csv"
PREFERENCES_CSV = FIXTURES_DIR / "preferences.csv"


def mock_http(handler):
    """Patch httpx.Client in senate.sources to route requests to handler.

    Args:
        handler: Function taking an httpx.Request and returning an httpx.Response
    """
    real_client = httpx.Client

    def make_client(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    return patch("senate.sources.httpx.Client", side_effect=make_client)
