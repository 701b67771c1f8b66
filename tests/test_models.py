"""Tests for core data models."""

from tests.conftest import make_candidate

from senate.models import (
    BothSectionsMarked,
    ElectionResult,
    NeitherSectionMarked,
    NonIntegerPreference,
    RecordError,
    UnderlyingRecordError,
    UnmatchedPreference,
)


class TestBallotParseErrors:
    def test_variants_are_distinct(self):
        assert BothSectionsMarked() == BothSectionsMarked()
        assert BothSectionsMarked() != NeitherSectionMarked()

    def test_reasons(self):
        assert "both" in BothSectionsMarked().reason
        assert "neither" in NeitherSectionMarked().reason
        assert "'X'" in NonIntegerPreference(token="X", position=2).reason
        assert "position 9" in UnmatchedPreference(position=9).reason

    def test_underlying_record_error_reason(self):
        error = UnderlyingRecordError(error=RecordError(line_number=12, message="Expected 6 fields, found 5"))
        assert error.reason == "unreadable record (line 12: Expected 6 fields, found 5)"

    def test_hashable(self):
        counts = {BothSectionsMarked(): 1, NonIntegerPreference(token="*", position=0): 2}
        assert counts[BothSectionsMarked()] == 1


class TestCandidate:
    def test_display_name(self):
        candidate = make_candidate(3, surname="HOLLOWAY")
        assert candidate.display_name == "Given3 HOLLOWAY"


class TestElectionResult:
    def test_to_dict(self):
        result = ElectionResult(
            engine_name="Senate STV",
            elected=[make_candidate(0, surname="HOLLOWAY")],
            tied=True,
            details={"quota": 5},
        )
        assert result.to_dict() == {
            "engine_name": "Senate STV",
            "elected": [{"id": 0, "name": "Given0 HOLLOWAY", "party": "Party A"}],
            "tied": True,
            "details": {"quota": 5},
        }
