"""Capacity-bounded document timeline with scrub support.

One :class:`DocumentTimeline` belongs to one open document. Every committed
edit appends a derived snapshot; scrubbing moves the viewed index and pushes
the historical content into the live editor without recording a commit.
"""
from __future__ import annotations

import math
from typing import Protocol

from PySide6.QtCore import QObject, Signal

from scribeline.core.config import DEFAULT_HISTORY_CAPACITY
from scribeline.core.logging import get_logger
from scribeline.history.authors import LOCAL_AUTHOR, Author
from scribeline.history.snapshots import Snapshot, create_snapshot, derive_snapshot, empty_snapshot

logger = get_logger(__name__)


def clamp_timeline_value(value: float, maximum: float) -> int:
    """Clamp a slider position into ``[0, maximum]``; non-finite input maps to 0."""

    try:
        upper = max(0, maximum if isinstance(maximum, int) else math.floor(float(maximum)))
    except (TypeError, ValueError, OverflowError):
        upper = 0
    if isinstance(value, int):
        return min(upper, max(0, value))
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(number):
        return 0
    return min(upper, max(0, math.floor(number)))


class LiveEditor(Protocol):
    """The slice of ``QPlainTextEdit`` the timeline writes snapshots into."""

    def toPlainText(self) -> str:  # noqa: N802 - Qt style API
        ...

    def setPlainText(self, text: str) -> None:  # noqa: N802 - Qt style API
        ...


class DocumentTimeline(QObject):
    entries_changed = Signal(int)
    index_changed = Signal(int)

    def __init__(
        self,
        initial_content: str | None = None,
        author: Author = LOCAL_AUTHOR,
        capacity: int = DEFAULT_HISTORY_CAPACITY,
        editor: LiveEditor | None = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        if capacity < 1:
            raise ValueError(f"timeline capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._entries: list[Snapshot] = []
        self._index = 0
        self._editor = editor
        self._applying_snapshot = False
        if initial_content is not None:
            self._entries.append(create_snapshot(initial_content, author))

    # State ---------------------------------------------------------------
    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> tuple[Snapshot, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def applying_snapshot(self) -> bool:
        """True only while :meth:`scrub` is writing into the live editor."""

        return self._applying_snapshot

    @property
    def is_at_tip(self) -> bool:
        return not self._entries or self._index == len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)

    def attach_editor(self, editor: LiveEditor | None) -> None:
        self._editor = editor

    def current_entry(self) -> Snapshot:
        if not self._entries:
            return empty_snapshot()
        return self._entries[self._index]

    def latest_entry(self) -> Snapshot:
        if not self._entries:
            return empty_snapshot()
        return self._entries[-1]

    # Mutation ------------------------------------------------------------
    def reset(self, content: str, author: Author = LOCAL_AUTHOR) -> None:
        """Drop all history and start again from ``content``."""

        self.seed(create_snapshot(content, author))

    def seed(self, snapshot: Snapshot) -> None:
        self._entries = [snapshot]
        self._set_index(0)
        self.entries_changed.emit(len(self._entries))

    def commit(self, next_content: str, author: Author) -> Snapshot:
        """Record a content change and return the view to the live tip."""

        if not self._entries:
            self._entries.append(create_snapshot(next_content, author))
            self._set_index(0)
            self.entries_changed.emit(len(self._entries))
            return self._entries[-1]

        tip = self._entries[-1]
        derived = derive_snapshot(tip, next_content, author)
        if derived.content != tip.content:
            self._entries.append(derived)
            overflow = len(self._entries) - self._capacity
            if overflow > 0:
                del self._entries[:overflow]
                logger.debug("Evicted %d oldest snapshot(s) at capacity %d", overflow, self._capacity)
            self.entries_changed.emit(len(self._entries))
            logger.debug("Committed snapshot %d by %s", len(self._entries), author.id)
        self._set_index(len(self._entries) - 1)
        return self._entries[-1]

    def scrub(self, target_index: int) -> Snapshot:
        """View a historical snapshot in the live editor without committing it."""

        if not self._entries:
            return empty_snapshot()

        index = clamp_timeline_value(target_index, len(self._entries) - 1)
        self._set_index(index)
        snapshot = self._entries[index]

        editor = self._editor
        if editor is not None and editor.toPlainText() != snapshot.content:
            self._applying_snapshot = True
            try:
                editor.setPlainText(snapshot.content)
            finally:
                self._applying_snapshot = False
            logger.debug("Scrubbed live editor to snapshot %d/%d", index + 1, len(self._entries))
        return snapshot

    def _set_index(self, index: int) -> None:
        changed = index != self._index
        self._index = index
        if changed:
            self.index_changed.emit(index)
