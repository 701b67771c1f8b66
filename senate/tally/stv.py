"""Single transferable vote count for multi-seat Senate elections."""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from fractions import Fraction

from senate.models import (
    BallotParseError,
    Candidate,
    CandidateId,
    DecodeOutcome,
    ElectionResult,
)
from senate.tally import register_tally_engine
from senate.tally.base import TallyEngine

logger = logging.getLogger(__name__)


@dataclass
class _Parcel:
    """Identical ballot papers that travel together."""
    preferences: tuple[CandidateId, ...]
    count: int
    weight: Fraction = Fraction(1)
    position: int = 0

    @property
    def value(self) -> Fraction:
        return self.weight * self.count


@register_tally_engine
class SenateSTVEngine(TallyEngine):
    """Single transferable vote with a Droop quota.

    Each round:
    1. If no more candidates remain than there are vacancies, they are all
       elected, highest tally first.
    2. Otherwise, if the leading candidate has reached the quota they are
       elected, and all of their papers move on to the next continuing
       preference at a reduced value (surplus / tally).
    3. Otherwise the candidate with the lowest tally is excluded and their
       papers move on at their current value.

    Ballots that failed to decode are informal and aren't counted. Papers
    with no continuing preference left are exhausted.

    Tiebreakers:
    - Electing: the lower candidate id goes first.
    - Excluding: the higher candidate id (later on the ballot paper) goes.
    - If the last seat is decided between candidates on equal tallies, the
      result is flagged as tied.

    Tallies are exact fractions, so the count is fully deterministic.
    """

    @property
    def name(self) -> str:
        return "Senate STV"

    @property
    def description(self) -> str:
        return "Droop quota, fractional surplus transfers, exclude lowest"

    def count(
        self,
        candidates: Sequence[Candidate],
        ballots: Iterable[DecodeOutcome],
        seats: int,
    ) -> ElectionResult:
        if seats < 1:
            raise ValueError(f"Seat count must be at least 1, got {seats}")

        by_id = {c.id: c for c in candidates}
        parcels, informal = self._collect_parcels(ballots, by_id)
        formal = sum(p.count for p in parcels)
        quota = formal // (seats + 1) + 1

        logger.info(
            "Counting %d formal ballots (%d informal) for %d seats, quota %d",
            formal, sum(informal.values()), seats, quota,
        )
        if informal:
            logger.info("Informal ballots by reason: %s", dict(informal))

        continuing: dict[CandidateId, None] = dict.fromkeys(by_id)
        piles: dict[CandidateId, list[_Parcel]] = {cid: [] for cid in by_id}
        for parcel in parcels:
            self._allocate(parcel, piles, continuing)

        elected: list[CandidateId] = []
        rounds: list[dict] = []
        tied = False

        while len(elected) < seats and continuing:
            tallies = {cid: self._tally(piles[cid]) for cid in continuing}
            ranked = sorted(continuing, key=lambda cid: (-tallies[cid], cid))
            vacancies = seats - len(elected)

            if len(ranked) <= vacancies:
                for cid in ranked:
                    elected.append(cid)
                    rounds.append(self._round_info(len(rounds) + 1, "elected", cid, tallies))
                break

            leader = ranked[0]
            runner_up = ranked[1]

            if tallies[leader] >= quota:
                if vacancies == 1 and tallies[runner_up] == tallies[leader]:
                    tied = True
                elected.append(leader)
                rounds.append(self._round_info(len(rounds) + 1, "elected", leader, tallies))
                del continuing[leader]
                self._transfer_surplus(
                    piles.pop(leader), tallies[leader] - quota, tallies[leader],
                    piles, continuing,
                )
                continue

            if vacancies == 1 and len(ranked) == 2:
                # Last seat between the last two: higher tally wins
                tied = tallies[leader] == tallies[runner_up]
                elected.append(leader)
                rounds.append(self._round_info(len(rounds) + 1, "elected", leader, tallies))
                break

            lowest = tallies[ranked[-1]]
            excluded = max(cid for cid in ranked if tallies[cid] == lowest)
            rounds.append(self._round_info(len(rounds) + 1, "excluded", excluded, tallies))
            del continuing[excluded]
            for parcel in piles.pop(excluded):
                parcel.position += 1
                self._allocate(parcel, piles, continuing)

        if tied:
            logger.info("Last seat was decided on equal tallies")

        return ElectionResult(
            engine_name=self.name,
            elected=[by_id[cid] for cid in elected],
            tied=tied,
            details={
                "quota": quota,
                "formal": formal,
                "informal": dict(informal),
                "rounds": rounds,
            },
        )

    @staticmethod
    def _collect_parcels(
        ballots: Iterable[DecodeOutcome], by_id: dict[CandidateId, Candidate]
    ) -> tuple[list[_Parcel], Counter]:
        """Walk the ballot stream once, grouping identical formal ballots."""
        counts: Counter = Counter()
        informal: Counter = Counter()

        for outcome in ballots:
            if isinstance(outcome, BallotParseError):
                informal[type(outcome).__name__] += 1
                continue
            preferences = tuple(cid for cid in outcome if cid in by_id)
            if not preferences:
                informal["NoEligiblePreferences"] += 1
                continue
            counts[preferences] += 1

        parcels = [_Parcel(preferences=prefs, count=n) for prefs, n in counts.items()]
        return parcels, informal

    @staticmethod
    def _allocate(
        parcel: _Parcel,
        piles: dict[CandidateId, list[_Parcel]],
        continuing: dict[CandidateId, None],
    ) -> None:
        """Give a parcel to its next continuing preference, or exhaust it."""
        prefs = parcel.preferences
        while parcel.position < len(prefs):
            cid = prefs[parcel.position]
            if cid in continuing:
                piles[cid].append(parcel)
                return
            parcel.position += 1

    def _transfer_surplus(
        self,
        pile: list[_Parcel],
        surplus: Fraction,
        total: Fraction,
        piles: dict[CandidateId, list[_Parcel]],
        continuing: dict[CandidateId, None],
    ) -> None:
        if surplus <= 0:
            return
        factor = surplus / total
        for parcel in pile:
            parcel.weight *= factor
            parcel.position += 1
            self._allocate(parcel, piles, continuing)

    @staticmethod
    def _tally(pile: list[_Parcel]) -> Fraction:
        return sum((parcel.value for parcel in pile), Fraction(0))

    @staticmethod
    def _round_info(
        round_num: int, action: str, candidate: CandidateId, tallies: dict[CandidateId, Fraction]
    ) -> dict:
        logger.debug("Round %d: %s candidate %d", round_num, action, candidate)
        return {
            "round": round_num,
            "action": action,
            "candidate": candidate,
            "tallies": {cid: float(t) for cid, t in tallies.items()},
        }
