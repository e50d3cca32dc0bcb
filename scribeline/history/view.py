"""What the history panel draws for the snapshot currently being viewed."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from scribeline.history.segments import (
    AuthorshipRange,
    AuthorshipSegment,
    DiffSegment,
    LegendEntry,
    authorship_legend,
    build_authorship_ranges,
    build_authorship_segments,
    build_diff_segments,
    normalize_authorship_ranges,
)
from scribeline.history.timeline import DocumentTimeline, clamp_timeline_value


class HistoryViewMode(Enum):
    AUTHORSHIP = "authorship"
    DIFF = "diff"

    @property
    def label(self) -> str:
        return "Colored authorship" if self is HistoryViewMode.AUTHORSHIP else "Diff from current"


def parse_view_mode(value: object) -> HistoryViewMode:
    if isinstance(value, HistoryViewMode):
        return value
    return HistoryViewMode.DIFF if value == HistoryViewMode.DIFF.value else HistoryViewMode.AUTHORSHIP


def version_label(index: int, length: int) -> str:
    """Human readable scrub position, e.g. ``Version 3/10``."""

    maximum = max(0, length - 1)
    return f"Version {clamp_timeline_value(index, maximum) + 1}/{maximum + 1}"


@dataclass
class TimelineViewState:
    mode: HistoryViewMode
    index: int
    length: int
    position_label: str
    authorship_segments: list[AuthorshipSegment] = field(default_factory=list)
    authorship_ranges: list[AuthorshipRange] = field(default_factory=list)
    legend: list[LegendEntry] = field(default_factory=list)
    diff_segments: list[DiffSegment] = field(default_factory=list)


def build_view_state(timeline: DocumentTimeline, mode: HistoryViewMode | str = HistoryViewMode.AUTHORSHIP) -> TimelineViewState:
    mode = parse_view_mode(mode)
    current = timeline.current_entry()
    state = TimelineViewState(
        mode=mode,
        index=timeline.index,
        length=len(timeline),
        position_label=version_label(timeline.index, len(timeline)),
    )
    if mode is HistoryViewMode.DIFF:
        state.diff_segments = build_diff_segments(timeline.latest_entry().content, current.content)
    else:
        state.authorship_segments = build_authorship_segments(current)
        state.authorship_ranges = normalize_authorship_ranges(build_authorship_ranges(current), len(current.content))
        state.legend = authorship_legend(state.authorship_ranges)
    return state
