"""Tests for the Senate STV tally engine."""

from fractions import Fraction

import pytest
from tests.conftest import make_candidate, elected_ids

from senate.models import (
    BothSectionsMarked,
    NeitherSectionMarked,
    NonIntegerPreference,
    RecordError,
    UnderlyingRecordError,
)
from senate.tally.stv import SenateSTVEngine


class TestSenateSTV:
    def setup_method(self):
        self.engine = SenateSTVEngine()

    def test_name(self):
        assert self.engine.name == "Senate STV"

    def test_two_seats(self, five_candidates, two_seat_ballots):
        result = self.engine.count(five_candidates, two_seat_ballots, 2)
        assert elected_ids(result) == [0, 2]
        assert not result.tied

    def test_quota_and_formal_count(self, five_candidates, two_seat_ballots):
        result = self.engine.count(five_candidates, two_seat_ballots, 2)
        assert result.details["quota"] == 5
        assert result.details["formal"] == 12
        assert result.details["informal"] == {}

    def test_rounds(self, five_candidates, two_seat_ballots):
        result = self.engine.count(five_candidates, two_seat_ballots, 2)
        actions = [(r["action"], r["candidate"]) for r in result.details["rounds"]]
        assert actions == [
            ("elected", 0),
            ("excluded", 3),
            ("excluded", 4),
            ("elected", 2),
        ]
        # After the surplus transfer candidate 1 holds 1 + 6 * 1/6
        assert result.details["rounds"][1]["tallies"][1] == 2.0

    def test_elected_are_candidates(self, five_candidates, two_seat_ballots):
        result = self.engine.count(five_candidates, two_seat_ballots, 2)
        assert result.elected == [five_candidates[0], five_candidates[2]]
        assert result.engine_name == "Senate STV"

    def test_single_pass_iterator(self, five_candidates, two_seat_ballots):
        result = self.engine.count(five_candidates, iter(two_seat_ballots), 2)
        assert elected_ids(result) == [0, 2]

    def test_informal_ballots_counted_by_reason(self, five_candidates, two_seat_ballots):
        ballots = two_seat_ballots + [
            BothSectionsMarked(),
            BothSectionsMarked(),
            NeitherSectionMarked(),
            NonIntegerPreference(token="*", position=0),
            UnderlyingRecordError(error=RecordError(line_number=3, message="bad")),
        ]
        result = self.engine.count(five_candidates, ballots, 2)
        assert result.details["informal"] == {
            "BothSectionsMarked": 2,
            "NeitherSectionMarked": 1,
            "NonIntegerPreference": 1,
            "UnderlyingRecordError": 1,
        }
        assert result.details["formal"] == 12
        assert elected_ids(result) == [0, 2]

    def test_ineligible_preferences_dropped(self, five_candidates):
        ballots = [[99, 2], [98]] + [[0]] * 3
        result = self.engine.count(five_candidates, ballots, 1)
        assert result.details["informal"] == {"NoEligiblePreferences": 1}
        assert result.details["formal"] == 4
        assert elected_ids(result) == [0]

    def test_majority_elected_immediately(self, five_candidates):
        ballots = [[2]] * 3 + [[0]]
        result = self.engine.count(five_candidates, ballots, 1)
        assert elected_ids(result) == [2]
        assert result.details["rounds"][0]["action"] == "elected"

    def test_last_seat_tie(self):
        """Two candidates on equal votes for the only seat."""
        candidates = [make_candidate(0), make_candidate(1)]
        result = self.engine.count(candidates, [[0], [1]], 1)
        assert result.tied
        assert elected_ids(result) == [0]

    def test_tie_after_exclusions(self):
        """Three candidates, 2-2-1: the 1 is excluded and exhausts, leaving a tie."""
        candidates = [make_candidate(0), make_candidate(1), make_candidate(2)]
        ballots = [[0], [0], [1], [1], [2]]
        result = self.engine.count(candidates, ballots, 1)
        assert result.tied
        assert elected_ids(result) == [0]

    def test_exclusion_transfers_at_full_value(self):
        """Candidate 2's papers flow to 1, who then beats 0."""
        candidates = [make_candidate(0), make_candidate(1), make_candidate(2)]
        ballots = [[0]] * 3 + [[1]] * 2 + [[2, 1]] * 2
        result = self.engine.count(candidates, ballots, 1)
        assert elected_ids(result) == [1]
        assert not result.tied

    def test_fewer_candidates_than_seats(self, five_candidates):
        result = self.engine.count(five_candidates[:2], [[1, 0]], 3)
        assert elected_ids(result) == [1, 0]

    def test_no_ballots(self):
        candidates = [make_candidate(0), make_candidate(1)]
        result = self.engine.count(candidates, [], 1)
        assert result.details["formal"] == 0
        assert result.tied
        assert len(result.elected) == 1

    def test_invalid_seats(self, five_candidates):
        with pytest.raises(ValueError, match="at least 1"):
            self.engine.count(five_candidates, [], 0)

    def test_surplus_factor_is_exact(self):
        candidates = [make_candidate(0), make_candidate(1), make_candidate(2)]
        # quota = 9 // 3 + 1 = 4; candidate 0 has 7, surplus 3 over 7 papers
        ballots = [[0, 1]] * 7 + [[2]] * 2
        result = self.engine.count(candidates, ballots, 2)
        assert elected_ids(result) == [0, 1]
        tallies = result.details["rounds"][1]["tallies"]
        assert tallies[1] == float(Fraction(3, 7) * 7)
