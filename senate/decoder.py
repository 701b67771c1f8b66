"""Decode a voter's raw preference string into an ordered list of candidates."""

import re
from collections.abc import Sequence

from senate.models import (
    BothSectionsMarked,
    CandidateId,
    DecodeOutcome,
    Group,
    NeitherSectionMarked,
    NonIntegerPreference,
    UnmatchedPreference,
)

# Plain decimal, no whitespace or minus sign
PREFERENCE_PATTERN = re.compile(r"\+?[0-9]+")

# Preferences are unsigned 32-bit numbers on the paper file
MAX_PREFERENCE = 2**32 - 1


def split_preferences(pref_string: str, num_groups: int) -> tuple[list[str], list[str]]:
    """Split a preference string into above-the-line and below-the-line tokens."""
    tokens = pref_string.split(",")
    return tokens[:num_groups], tokens[num_groups:]


def is_marked(tokens: Sequence[str]) -> bool:
    """A section is marked if any of its tokens is non-empty."""
    return any(token != "" for token in tokens)


def decode(
    pref_string: str, groups: Sequence[Group], candidate_ids: Sequence[CandidateId]
) -> DecodeOutcome:
    """Decode one ballot's preferences.

    The first len(groups) tokens are the boxes above the line, in group
    order. The rest line up with candidate_ids, in ballot paper order. A
    ballot must be marked on exactly one side of the line.

    Duplicate preference numbers are not rejected: the later token wins.
    Numbers need not start at 1 or be contiguous; only their order matters.
    A number too big for MAX_PREFERENCE is not a number at all.

    Args:
        pref_string: Comma-separated preference numbers, blank where unmarked
        groups: The state's groups, in above-the-line order
        candidate_ids: The state's candidates, in below-the-line order

    Returns:
        The candidates in preference order, or a BallotParseError explaining
        why the ballot couldn't be read.
    """
    above, below = split_preferences(pref_string, len(groups))

    above_marked = is_marked(above)
    below_marked = is_marked(below)

    if above_marked and below_marked:
        return BothSectionsMarked()
    if above_marked:
        return _above_the_line(above, groups)
    if below_marked:
        return _below_the_line(below, candidate_ids, offset=len(groups))
    return NeitherSectionMarked()


def _parse_preference(token: str, position: int) -> int | NonIntegerPreference:
    if PREFERENCE_PATTERN.fullmatch(token):
        preference = int(token)
        if preference <= MAX_PREFERENCE:
            return preference
    return NonIntegerPreference(token=token, position=position)


def _above_the_line(tokens: list[str], groups: Sequence[Group]) -> DecodeOutcome:
    """Expand numbered group boxes into each group's full ticket."""
    by_preference: dict[int, tuple[CandidateId, ...]] = {}

    for group_idx, token in enumerate(tokens):
        if not token:
            continue
        preference = _parse_preference(token, group_idx)
        if isinstance(preference, NonIntegerPreference):
            return preference
        by_preference[preference] = groups[group_idx].candidate_ids

    ballot: list[CandidateId] = []
    for preference in sorted(by_preference):
        ballot.extend(by_preference[preference])
    return ballot


def _below_the_line(
    tokens: list[str], candidate_ids: Sequence[CandidateId], offset: int
) -> DecodeOutcome:
    """Order individually numbered candidates."""
    by_preference: dict[int, CandidateId] = {}

    for idx, token in enumerate(tokens):
        if not token:
            continue
        preference = _parse_preference(token, offset + idx)
        if isinstance(preference, NonIntegerPreference):
            return preference
        if idx >= len(candidate_ids):
            return UnmatchedPreference(position=offset + idx)
        by_preference[preference] = candidate_ids[idx]

    return [by_preference[preference] for preference in sorted(by_preference)]
