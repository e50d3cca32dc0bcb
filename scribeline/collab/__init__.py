"""Collaboration inputs for the history engine."""
from scribeline.collab.presence import Peer, PresenceRoster
from scribeline.collab.session_manager import DocumentSession

__all__ = ["DocumentSession", "Peer", "PresenceRoster"]
