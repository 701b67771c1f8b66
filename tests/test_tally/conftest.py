"""Shared fixtures for tally engine tests."""

import pytest
from tests.conftest import make_candidate


@pytest.fixture
def five_candidates():
    """Five ACT candidates: A = (0, 1), B = (2, 3), ungrouped 4."""
    return [
        make_candidate(0, group_name="A", ballot_position=1),
        make_candidate(1, group_name="A", ballot_position=2),
        make_candidate(2, group_name="B", ballot_position=1),
        make_candidate(3, group_name="B", ballot_position=2),
        make_candidate(4, group_name="UG", ballot_position=1),
    ]


@pytest.fixture
def two_seat_ballots():
    """Twelve formal ballots for two seats.

    6 x [0, 1], 3 x [2, 3], 1 x [1, 0, 2], 2 x [4]
    Quota = 12 // 3 + 1 = 5.
    Round 1: 0 has 6, elected. Surplus 1 moves to 1 at 1/6 per paper.
    Tallies: 1 = 2, 2 = 3, 3 = 0, 4 = 2. 3 excluded (lowest).
    Then 1 and 4 tie on 2; 4 excluded (higher id), its papers exhaust.
    Last seat between 2 (3) and 1 (2): 2 elected.
    """
    return [[0, 1]] * 6 + [[2, 3]] * 3 + [[1, 0, 2]] + [[4]] * 2
