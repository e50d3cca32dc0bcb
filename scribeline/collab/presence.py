"""Peer roster fed by the external presence service."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from PySide6.QtCore import QObject, Signal

from scribeline.history.authors import AuthorType, normalize_author_type


@dataclass(frozen=True)
class Peer:
    name: str
    type: AuthorType = "human"
    cursor: int | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Peer":
        cursor = data.get("cursor")
        return cls(
            name=str(data.get("name", "")),
            type=normalize_author_type(data.get("type")),
            cursor=cursor if isinstance(cursor, int) else None,
        )


class PresenceRoster(QObject):
    presence_changed = Signal(list)

    def __init__(self, peers: Iterable[Peer] | None = None, parent=None) -> None:
        super().__init__(parent)
        self._peers: list[Peer] = list(peers or [])

    @property
    def peers(self) -> list[Peer]:
        return list(self._peers)

    def primary_peer(self) -> Peer | None:
        """The peer remote edits are credited to when the origin is unknown."""

        return self._peers[0] if self._peers else None

    def update_peers(self, peers: Iterable[Peer | Mapping[str, Any]]) -> None:
        self._peers = [peer if isinstance(peer, Peer) else Peer.from_mapping(peer) for peer in peers]
        self._notify_presence()

    def upsert_peer(self, peer: Peer) -> None:
        for position, existing in enumerate(self._peers):
            if existing.name == peer.name:
                self._peers[position] = peer
                break
        else:
            self._peers.append(peer)
        self._notify_presence()

    def remove_peer(self, name: str) -> None:
        remaining = [peer for peer in self._peers if peer.name != name]
        if len(remaining) != len(self._peers):
            self._peers = remaining
            self._notify_presence()

    def participants(self) -> list[str]:
        return [peer.name for peer in self._peers]

    def _notify_presence(self) -> None:
        self.presence_changed.emit(self.participants())
