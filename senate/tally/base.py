"""Abstract base class for tally engines."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from senate.models import Candidate, DecodeOutcome, ElectionResult


class TallyEngine(ABC):
    """Abstract base class for tally engines.

    An engine takes the eligible candidates for a state, the stream of
    decoded ballots and the number of vacancies, and decides who is
    elected. What to do with ballots that failed to decode is up to the
    engine. Engines are registered via the @register_tally_engine decorator
    in senate/tally/__init__.py.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this engine."""
        pass

    @property
    def description(self) -> str:
        """Optional description of how this engine counts."""
        return ""

    @abstractmethod
    def count(
        self,
        candidates: Sequence[Candidate],
        ballots: Iterable[DecodeOutcome],
        seats: int,
    ) -> ElectionResult:
        """Count the ballots and fill the seats.

        Args:
            candidates: Eligible candidates for the state
            ballots: Decode outcomes, one per ballot paper. May be a
                single-pass iterator, so engines must only walk it once.
            seats: Number of vacancies

        Returns:
            ElectionResult with the elected candidates in order of election
        """
        pass
