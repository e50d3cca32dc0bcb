"""Per-document session wiring editor notifications into the timeline."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from PySide6.QtCore import QObject, Signal

from scribeline.collab.presence import PresenceRoster
from scribeline.core.config import DEFAULT_HISTORY_CAPACITY, ConfigManager
from scribeline.core.logging import get_logger
from scribeline.history.authors import LOCAL_AUTHOR, UNKNOWN_REMOTE_AUTHOR, Author, author_from_peer
from scribeline.history.snapshots import HistoryRange, Snapshot, snapshot_from_history_ranges
from scribeline.history.timeline import DocumentTimeline
from scribeline.history.view import HistoryViewMode, TimelineViewState, build_view_state, parse_view_mode

logger = get_logger(__name__)


class DocumentSession(QObject):
    """Owns the timeline of one open document.

    Created when the document view opens and dropped when it closes; the
    rendering layer receives it by reference.
    """

    session_changed = Signal(int, int)
    view_mode_changed = Signal(str)

    def __init__(
        self,
        initial_content: str = "",
        roster: PresenceRoster | None = None,
        capacity: int = DEFAULT_HISTORY_CAPACITY,
        view_mode: HistoryViewMode | str = HistoryViewMode.AUTHORSHIP,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.roster = roster or PresenceRoster()
        self.timeline = DocumentTimeline(initial_content, LOCAL_AUTHOR, capacity=capacity)
        self.view_mode = parse_view_mode(view_mode)
        self.editor = None
        self._applying_remote = False
        self.timeline.entries_changed.connect(self._notify_session)
        self.timeline.index_changed.connect(self._notify_session)

    @classmethod
    def from_config(cls, config: ConfigManager, initial_content: str = "", roster: PresenceRoster | None = None) -> "DocumentSession":
        return cls(
            initial_content,
            roster=roster,
            capacity=config.history_capacity(),
            view_mode=config.default_view_mode(),
        )

    # Inbound notifications ----------------------------------------------
    def author_for_change(self, is_remote_origin: bool) -> Author:
        if not is_remote_origin:
            return LOCAL_AUTHOR
        peer = self.roster.primary_peer()
        return author_from_peer(peer) if peer else UNKNOWN_REMOTE_AUTHOR

    def handle_content_changed(self, next_content: str, is_remote_origin: bool = False) -> None:
        if self.timeline.applying_snapshot:
            return
        self.timeline.commit(next_content, self.author_for_change(is_remote_origin))

    def seed_from_history(
        self, content: str, ranges: Iterable[HistoryRange | Mapping[str, Any]]
    ) -> Snapshot:
        snapshot = snapshot_from_history_ranges(content, ranges)
        self.timeline.seed(snapshot)
        logger.debug("Seeded timeline with %d characters of remote history", len(content))
        return snapshot

    # Live editor ---------------------------------------------------------
    def bind_editor(self, editor) -> None:
        """Track a ``QPlainTextEdit``-like editor and record its edits."""

        self.editor = editor
        self.timeline.attach_editor(editor)
        editor.textChanged.connect(self._on_editor_text_changed)

    def apply_remote_text(self, text: str) -> None:
        """Write text received from a collaborator into the bound editor."""

        if self.editor is None:
            self.handle_content_changed(text, True)
            return
        self._applying_remote = True
        try:
            self.editor.setPlainText(text)
        finally:
            self._applying_remote = False

    def _on_editor_text_changed(self) -> None:
        self.handle_content_changed(self.editor.toPlainText(), self._applying_remote)

    # Rendering -----------------------------------------------------------
    def scrub(self, index: int) -> Snapshot:
        return self.timeline.scrub(index)

    def set_view_mode(self, mode: HistoryViewMode | str) -> None:
        mode = parse_view_mode(mode)
        if mode is not self.view_mode:
            self.view_mode = mode
            self.view_mode_changed.emit(mode.value)

    def view_state(self) -> TimelineViewState:
        return build_view_state(self.timeline, self.view_mode)

    def _notify_session(self, *_args) -> None:
        self.session_changed.emit(self.timeline.index, len(self.timeline))
