"""Derive the above-the-line groups for a state from its candidates."""

import logging
from collections.abc import Iterable

from senate.models import Candidate, Group

logger = logging.getLogger(__name__)

UNGROUPED = "UG"


def ticket_sort_key(label: str) -> tuple[int, str]:
    """Ballot paper order for ticket labels: A..Z, then AA, AB, ..."""
    return (len(label), label)


def get_state_candidates(candidates: Iterable[Candidate], state: str) -> list[Candidate]:
    """Candidates standing in a state, in file order."""
    return [c for c in candidates if c.state == state]


def get_group_list(candidates: Iterable[Candidate], state: str) -> list[Group]:
    """Build the state's groups in above-the-line order.

    Ungrouped candidates have no box above the line and appear in no group.
    Members are ordered by ballot position; equal positions keep file order.
    """
    by_ticket: dict[str, list[Candidate]] = {}
    for candidate in candidates:
        if candidate.state != state:
            continue
        if not candidate.group_name or candidate.group_name == UNGROUPED:
            continue
        by_ticket.setdefault(candidate.group_name, []).append(candidate)

    groups = []
    for ticket in sorted(by_ticket, key=ticket_sort_key):
        members = sorted(by_ticket[ticket], key=lambda c: c.ballot_position)
        groups.append(Group(
            name=ticket,
            state=state,
            candidate_ids=tuple(c.id for c in members),
        ))

    logger.info("Found %d groups in %s", len(groups), state)
    return groups
