"""Fuzzy candidate matching and ranking.

A candidate matches when every character of the typed token appears in its
name in order (case-insensitive). Prefix matches all share the best score;
other matches are scored by how contiguous the matched characters are and
whether they start words.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from sass_hints.scanner.types import Symbol

# Every prefix match outranks every scattered match
PREFIX_SCORE = 1000.0

_CONSECUTIVE_BONUS = 3.0
_BOUNDARY_BONUS = 2.0
_GAP_PENALTY = 0.1
_WORD_SEPARATORS = "-_"


def _merge_ranges(indices: list[int]) -> tuple[tuple[int, int], ...]:
    ranges: list[tuple[int, int]] = []
    for index in indices:
        if ranges and ranges[-1][1] == index:
            ranges[-1] = (ranges[-1][0], index + 1)
        else:
            ranges.append((index, index + 1))
    return tuple(ranges)


def _is_boundary(name: str, index: int) -> bool:
    return index == 0 or name[index - 1] in _WORD_SEPARATORS


def _is_subsequence(query: str, text: str, start: int) -> bool:
    position = start
    for ch in query:
        position = text.find(ch, position)
        if position < 0:
            return False
        position += 1
    return True


def match_name(name: str, token: str | None) -> tuple[float, tuple[tuple[int, int], ...]] | None:
    """Match a typed token against a candidate name.

    Args:
        name: Candidate name.
        token: Typed text; None or empty matches everything.

    Returns:
        (score, ranges) where higher scores are better and ranges are
        half-open spans of ``name`` to highlight, or None if no match.

    """
    if not token:
        return 0.0, ()

    lowered = name.lower()
    query = token.lower()
    if lowered.startswith(query):
        return PREFIX_SCORE, ((0, len(query)),)

    indices: list[int] = []
    score = 0.0
    position = 0
    for i, ch in enumerate(query):
        found = lowered.find(ch, position)
        if found < 0:
            return None
        consecutive = bool(indices) and found == indices[-1] + 1
        if not consecutive:
            # Prefer the start of a later word over a mid-word hit
            boundary_at = found
            while boundary_at >= 0 and not _is_boundary(lowered, boundary_at):
                boundary_at = lowered.find(ch, boundary_at + 1)
            if boundary_at >= 0 and _is_subsequence(query[i + 1 :], lowered, boundary_at + 1):
                found = boundary_at
        if indices and found == indices[-1] + 1:
            score += _CONSECUTIVE_BONUS
        if _is_boundary(lowered, found):
            score += _BOUNDARY_BONUS
        score += 1.0 - _GAP_PENALTY * (found - position)
        indices.append(found)
        position = found + 1

    return score, _merge_ranges(indices)


def rank(pool: Iterable[Symbol], token: str | None, limit: int | None = None) -> list[Symbol]:
    """Filter, score and sort candidates.

    Sort order: match score descending, priority descending, name ascending.
    The limit is applied after sorting.

    Args:
        pool: Candidate symbols. Not modified.
        token: Typed text to match.
        limit: Maximum number of results, or None for all.

    Returns:
        Copies of the matching symbols with match_score and match_ranges set.

    """
    matched: list[Symbol] = []
    for symbol in pool:
        result = match_name(symbol.name, token)
        if result is None:
            continue
        score, ranges = result
        matched.append(replace(symbol, match_score=score, match_ranges=ranges))

    matched.sort(key=lambda s: (-(s.match_score or 0.0), -s.priority, s.name.lower(), s.name))
    if limit is not None:
        return matched[:limit]
    return matched
