"""Document history and authorship attribution."""
from scribeline.history.authors import (
    LOCAL_AUTHOR,
    UNKNOWN_REMOTE_AUTHOR,
    Author,
    author_from_history,
    author_from_peer,
    name_to_color,
)
from scribeline.history.segments import (
    AuthorshipRange,
    AuthorshipSegment,
    DiffSegment,
    build_authorship_ranges,
    build_authorship_segments,
    build_diff_segments,
)
from scribeline.history.snapshots import (
    HistoryRange,
    Snapshot,
    create_snapshot,
    derive_snapshot,
    snapshot_from_history_ranges,
)
from scribeline.history.timeline import DocumentTimeline

__all__ = [
    "LOCAL_AUTHOR",
    "UNKNOWN_REMOTE_AUTHOR",
    "Author",
    "AuthorshipRange",
    "AuthorshipSegment",
    "DiffSegment",
    "DocumentTimeline",
    "HistoryRange",
    "Snapshot",
    "author_from_history",
    "author_from_peer",
    "build_authorship_ranges",
    "build_authorship_segments",
    "build_diff_segments",
    "create_snapshot",
    "derive_snapshot",
    "name_to_color",
    "snapshot_from_history_ranges",
]
