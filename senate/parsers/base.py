"""Base class for fixed-schema election CSV readers."""

import csv
from collections.abc import Iterable, Iterator

from senate.models import RecordError


class SchemaError(ValueError):
    """Raised when a file does not have the expected fixed layout.

    This is fatal for the whole load: unlike a bad ballot, there is nothing
    sensible to do with a candidate file whose columns don't line up.
    """
    pass


class CsvRecordReader:
    """Reads a CSV file with a known, fixed set of columns.

    Fields are matched by position, not by header name, since the header
    spellings vary between releases of the same file. Subclasses set FIELDS
    and decide what a bad row means for them: the candidate reader fails
    the load, the preferences reader passes the error along as a value.
    """

    FIELDS: tuple[str, ...] = ()

    def iter_rows(self, lines: Iterable[str]) -> Iterator[tuple[int, dict[str, str] | RecordError]]:
        """Yield (line_number, row) for each data row.

        Each row is either a dict keyed by FIELDS or a RecordError
        describing why it couldn't be split or decoded.

        Raises:
            SchemaError: If the file is empty or its header is the wrong width
        """
        reader = csv.reader(lines)
        try:
            header = next(reader)
        except StopIteration:
            raise SchemaError("File is empty (expected a header row)")
        except csv.Error as e:
            raise SchemaError(f"Could not read header row: {e}") from e

        if len(header) != len(self.FIELDS):
            raise SchemaError(
                f"Expected {len(self.FIELDS)} columns, found {len(header)} "
                f"in header: {header}"
            )

        first = True
        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                yield reader.line_num, RecordError(reader.line_num, f"Malformed CSV: {e}")
                continue

            if not row:
                continue
            # AEC files put a row of dashes under the header
            if first and self._is_separator(row):
                first = False
                continue
            first = False

            if self._has_invalid_text(row):
                yield reader.line_num, RecordError(reader.line_num, "Invalid UTF-8 text")
                continue

            if len(row) != len(self.FIELDS):
                yield reader.line_num, RecordError(
                    reader.line_num,
                    f"Expected {len(self.FIELDS)} fields, found {len(row)}",
                )
                continue

            yield reader.line_num, dict(zip(self.FIELDS, row))

    @staticmethod
    def _has_invalid_text(row: list[str]) -> bool:
        # Sources decode with surrogateescape, so bad bytes survive as lone surrogates
        try:
            "".join(row).encode("utf-8")
        except UnicodeEncodeError:
            return True
        return False

    @staticmethod
    def _is_separator(row: list[str]) -> bool:
        return all(cell and set(cell) == {"-"} for cell in row)
