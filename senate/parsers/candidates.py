"""Parser for the AEC "all candidates" CSV file."""

import logging
from collections.abc import Iterable

from senate.models import Candidate, CandidateId, RecordError
from senate.parsers.base import CsvRecordReader, SchemaError

logger = logging.getLogger(__name__)

SENATE_MARKER = "S"

CANDIDATE_FIELDS = (
    "txn_nm",
    "nom_ty",
    "state_ab",
    "div_nm",
    "ticket",
    "ballot_position",
    "surname",
    "ge_nm",
    "party_ballot_nm",
    "occupation",
    "address_1",
    "address_2",
    "postcode",
    "suburb",
    "address_state_ab",
    "contact_work_ph",
    "contact_home_ph",
    "postal_address_1",
    "postal_address_2",
    "postal_suburb",
    "postal_postcode",
    "contact_fax",
    "postal_state_ab",
    "contact_mobile_no",
    "contact_email",
)


class CandidateFileParser(CsvRecordReader):
    """Parser for the AEC candidate nominations file.

    The file has one row per nomination, for both houses. Only rows whose
    nomination type matches the marker are kept ("S" for the Senate).

    Expected columns (by position):
        txn_nm, nom_ty, state_ab, div_nm, ticket, ballot_position, surname,
        ge_nm, party_ballot_nm, followed by occupation and contact details
        which are read but not used.
    """

    FIELDS = CANDIDATE_FIELDS

    def __init__(self, marker: str = SENATE_MARKER):
        self.marker = marker

    def parse(self, lines: Iterable[str]) -> list[Candidate]:
        """Parse the whole file into candidates.

        Raises:
            SchemaError: If the header or any row doesn't fit the layout
        """
        return load_candidates(self._checked_rows(lines), self.marker)

    def _checked_rows(self, lines: Iterable[str]):
        for line_number, row in self.iter_rows(lines):
            if isinstance(row, RecordError):
                raise SchemaError(f"Candidate file {row}")
            yield row


def load_candidates(rows: Iterable[dict[str, str]], marker: str = SENATE_MARKER) -> list[Candidate]:
    """Build candidates from rows, keeping only nominations for one contest.

    Ids count the accepted rows in order, starting at 0, across all states.
    Rows for other contests are skipped without using up an id.

    Args:
        rows: Field dicts keyed by the CANDIDATE_FIELDS names
        marker: Nomination type to keep

    Raises:
        SchemaError: If any row is missing a field or has a non-integer
            ballot position. Nothing is returned in that case.
    """
    candidates = []
    skipped = 0
    for row_num, row in enumerate(rows, start=1):
        try:
            nomination_type = row["nom_ty"]
            if nomination_type != marker:
                skipped += 1
                continue
            candidate = Candidate(
                id=len(candidates),
                surname=row["surname"],
                other_names=row["ge_nm"],
                group_name=row["ticket"],
                party=row["party_ballot_nm"],
                state=row["state_ab"],
                ballot_position=int(row["ballot_position"]),
            )
        except KeyError as e:
            raise SchemaError(f"Candidate row {row_num} is missing field {e}") from e
        except ValueError as e:
            raise SchemaError(
                f"Candidate row {row_num} has a non-integer ballot position: "
                f"{row['ballot_position']!r}"
            ) from e
        candidates.append(candidate)

    logger.info("Loaded %d candidates (skipped %d other nominations)", len(candidates), skipped)
    return candidates


def select_by_state(candidates: Iterable[Candidate], state: str) -> list[CandidateId]:
    """Ids of the candidates standing in a state, in their original order."""
    return [c.id for c in candidates if c.state == state]
