"""Readers for AEC candidate and formal preference files."""

from .base import CsvRecordReader, SchemaError
from .candidates import CandidateFileParser, load_candidates, select_by_state
from .preferences import PreferenceFileParser

__all__ = [
    "CandidateFileParser",
    "CsvRecordReader",
    "PreferenceFileParser",
    "SchemaError",
    "load_candidates",
    "select_by_state",
]
