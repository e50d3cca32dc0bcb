"""Whole-document snapshots with per-character attribution."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from scribeline.core.logging import get_logger
from scribeline.history.authors import LOCAL_AUTHOR, Author, author_from_history

logger = get_logger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Document content plus the author responsible for each character."""

    content: str
    attribution: tuple[Author, ...] = ()

    def __len__(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class HistoryRange:
    """Authorship range as delivered by the external history service."""

    author_id: str
    author_type: str
    start_offset: float
    end_offset: float

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HistoryRange":
        return cls(
            author_id=str(data.get("author_id") or ""),
            author_type=str(data.get("author_type") or "human"),
            start_offset=data.get("start_offset", 0),
            end_offset=data.get("end_offset", 0),
        )


def create_snapshot(content: str, author: Author) -> Snapshot:
    return Snapshot(content, (author,) * len(content))


def empty_snapshot() -> Snapshot:
    return create_snapshot("", LOCAL_AUTHOR)


def normalized_attribution(snapshot: Snapshot) -> tuple[Author, ...]:
    """Attribution with exactly one author per character.

    Missing positions fall back to the local user; surplus entries are cut.
    """

    attribution = tuple(snapshot.attribution)
    length = len(snapshot.content)
    if len(attribution) == length:
        return attribution
    if len(attribution) > length:
        return attribution[:length]
    return attribution + (LOCAL_AUTHOR,) * (length - len(attribution))


def common_affixes(before: str, after: str) -> tuple[int, int]:
    """Return the shared prefix and suffix lengths of two strings.

    The suffix never overlaps the prefix in either string.
    """

    limit = min(len(before), len(after))
    prefix = 0
    while prefix < limit and before[prefix] == after[prefix]:
        prefix += 1

    suffix_limit = min(len(before) - prefix, len(after) - prefix)
    suffix = 0
    while suffix < suffix_limit and before[-1 - suffix] == after[-1 - suffix]:
        suffix += 1
    return prefix, suffix


def derive_snapshot(previous: Snapshot, next_content: str, author: Author) -> Snapshot:
    """Compute the snapshot that follows ``previous`` once ``next_content`` lands.

    Attribution of the common prefix and suffix is carried over; everything in
    between is credited to ``author``. This is a prefix/suffix bracket, not a
    minimal edit script, so it stays linear on every keystroke.
    """

    attribution = normalized_attribution(previous)
    if next_content == previous.content:
        return Snapshot(previous.content, attribution)

    prefix, suffix = common_affixes(previous.content, next_content)
    middle = len(next_content) - prefix - suffix
    tail = attribution[len(attribution) - suffix:] if suffix else ()
    return Snapshot(next_content, attribution[:prefix] + (author,) * middle + tail)


def _clamp_offset(value: Any, length: int) -> int:
    if isinstance(value, int):
        return max(0, min(length, value))
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if math.isnan(number):
        return 0
    if math.isinf(number):
        return length if number > 0 else 0
    return max(0, min(length, math.floor(number)))


def snapshot_from_history_ranges(
    content: str,
    ranges: Iterable[HistoryRange | Mapping[str, Any]],
    fallback: Author = LOCAL_AUTHOR,
) -> Snapshot:
    """Seed attribution for text that predates the in-memory session.

    Offsets are clamped into the content, empty ranges are skipped and any
    position no range covers is credited to ``fallback``. Later ranges win.
    """

    length = len(content)
    attribution: list[Author] = [fallback] * length
    dropped = 0
    for record in ranges:
        if not isinstance(record, HistoryRange):
            record = HistoryRange.from_mapping(record)
        start = _clamp_offset(record.start_offset, length)
        end = max(start, _clamp_offset(record.end_offset, length))
        if end <= start:
            dropped += 1
            continue
        author = author_from_history(record.author_id, record.author_type)
        attribution[start:end] = [author] * (end - start)

    if dropped:
        logger.debug("Dropped %d empty or out-of-range history ranges", dropped)
    return Snapshot(content, tuple(attribution))

