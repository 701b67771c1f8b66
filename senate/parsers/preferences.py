"""Parser for AEC formal preferences CSV files."""

import logging
from collections.abc import Iterable, Iterator

from senate.models import PreferenceRow, RecordError
from senate.parsers.base import CsvRecordReader

logger = logging.getLogger(__name__)

PREFERENCE_FIELDS = (
    "electorate_name",
    "vote_collection_point",
    "vote_collection_point_id",
    "batch_num",
    "paper_num",
    "preferences",
)


class PreferenceFileParser(CsvRecordReader):
    """Parser for the AEC formal preferences file for one state.

    Each row is one ballot paper. The last column holds the preferences as a
    quoted, comma-separated string: one slot per group above the line, then
    one per candidate below the line, blank where unmarked.

    The files run to millions of rows, so records are produced lazily.
    """

    FIELDS = PREFERENCE_FIELDS

    def iter_records(self, lines: Iterable[str]) -> Iterator[PreferenceRow | RecordError]:
        """Yield one PreferenceRow or RecordError per data row, in file order.

        Raises:
            SchemaError: If the header is missing or the wrong width. This is
                raised on first iteration.
        """
        for line_number, row in self.iter_rows(lines):
            if isinstance(row, RecordError):
                logger.debug("Unreadable preferences record: %s", row)
                yield row
            else:
                yield PreferenceRow(line_number=line_number, **row)
