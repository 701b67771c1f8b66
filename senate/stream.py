"""Lazily decode a stream of preference records."""

from collections.abc import Iterable, Iterator, Sequence

from senate.decoder import decode
from senate.models import (
    CandidateId,
    DecodeOutcome,
    Group,
    PreferenceRow,
    RecordError,
    UnderlyingRecordError,
)


def decode_ballots(
    records: Iterable[PreferenceRow | RecordError],
    groups: Sequence[Group],
    candidate_ids: Sequence[CandidateId],
) -> Iterator[DecodeOutcome]:
    """Decode each record as it is pulled, one outcome per record.

    Records the reader couldn't split become UnderlyingRecordError without
    being decoded. Nothing is buffered and the result can only be consumed
    once, like the file it reads from.
    """
    for record in records:
        if isinstance(record, RecordError):
            yield UnderlyingRecordError(error=record)
        else:
            yield decode(record.preferences, groups, candidate_ids)
