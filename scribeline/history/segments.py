"""Run-length views over snapshots for the history renderer."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Literal

from scribeline.history.authors import Author, name_to_color
from scribeline.history.snapshots import Snapshot, common_affixes, normalized_attribution

DiffKind = Literal["unchanged", "removed", "added"]


@dataclass(frozen=True)
class AuthorshipSegment:
    author: Author
    text: str


@dataclass(frozen=True)
class AuthorshipRange:
    """Half-open character range credited to one author name."""

    start: int
    end: int
    author_name: str


@dataclass(frozen=True)
class DiffSegment:
    kind: DiffKind
    text: str


@dataclass(frozen=True)
class LegendEntry:
    name: str
    color: str


@dataclass(frozen=True)
class Contribution:
    author: Author
    char_count: int
    percent: int


def _author_runs(snapshot: Snapshot) -> list[tuple[int, int, Author]]:
    attribution = normalized_attribution(snapshot)
    if not snapshot.content:
        return []

    runs: list[tuple[int, int, Author]] = []
    start = 0
    current = attribution[0]
    for index in range(1, len(attribution)):
        author = attribution[index]
        if author.id == current.id:
            continue
        runs.append((start, index, current))
        start = index
        current = author
    runs.append((start, len(attribution), current))
    return runs


def build_authorship_segments(snapshot: Snapshot) -> list[AuthorshipSegment]:
    """Collapse a snapshot into maximal same-author runs of text."""

    return [
        AuthorshipSegment(author, snapshot.content[start:end])
        for start, end, author in _author_runs(snapshot)
    ]


def build_authorship_ranges(snapshot: Snapshot) -> list[AuthorshipRange]:
    """Same runs as :func:`build_authorship_segments`, as offsets for in-place decoration."""

    return [AuthorshipRange(start, end, author.name) for start, end, author in _author_runs(snapshot)]


def build_diff_segments(content_a: str, content_b: str) -> list[DiffSegment]:
    """Three-way diff between two contents.

    ``removed`` holds the middle of ``content_a`` and ``added`` the middle of
    ``content_b``; the shared prefix and suffix come out as ``unchanged``.
    """

    if not content_a and not content_b:
        return []
    if content_a == content_b:
        return [DiffSegment("unchanged", content_b)]

    prefix, suffix = common_affixes(content_a, content_b)
    pieces: list[tuple[DiffKind, str]] = [
        ("unchanged", content_a[:prefix]),
        ("removed", content_a[prefix:len(content_a) - suffix]),
        ("added", content_b[prefix:len(content_b) - suffix]),
        ("unchanged", content_b[len(content_b) - suffix:] if suffix else ""),
    ]
    return [DiffSegment(kind, text) for kind, text in pieces if text]


def normalize_authorship_ranges(
    ranges: Iterable[AuthorshipRange], content_length: int
) -> list[AuthorshipRange]:
    """Clamp ranges into the content, drop blank or empty ones and sort by start."""

    normalized: list[AuthorshipRange] = []
    for item in ranges:
        if not item.author_name or not item.author_name.strip():
            continue
        start = max(0, min(content_length, math.floor(item.start)))
        end = max(0, min(content_length, math.floor(item.end)))
        if end <= start:
            continue
        normalized.append(AuthorshipRange(start, end, item.author_name))
    normalized.sort(key=lambda item: item.start)
    return normalized


def authorship_legend(ranges: Iterable[AuthorshipRange]) -> list[LegendEntry]:
    """Unique author names in first-appearance order, with their colours."""

    seen: set[str] = set()
    legend: list[LegendEntry] = []
    for item in ranges:
        if item.author_name in seen:
            continue
        seen.add(item.author_name)
        legend.append(LegendEntry(item.author_name, name_to_color(item.author_name)))
    return legend


def contributor_breakdown(snapshot: Snapshot) -> list[Contribution]:
    """Characters contributed per author, ordered by first appearance."""

    counts: dict[str, int] = {}
    authors: dict[str, Author] = {}
    for author in normalized_attribution(snapshot):
        if author.id not in counts:
            authors[author.id] = author
            counts[author.id] = 0
        counts[author.id] += 1

    total = sum(counts.values())
    return [
        Contribution(authors[author_id], count, math.floor(count * 100 / total + 0.5) if total else 0)
        for author_id, count in counts.items()
    ]
