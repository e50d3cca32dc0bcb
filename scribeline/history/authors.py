"""Author identities for per-character attribution.

Authors are value objects compared by ``id``. Their colour is derived from the
display name alone, so the same collaborator renders with the same colour in
every session and on every machine.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

AuthorType = Literal["human", "agent"]

LOCAL_AUTHOR_ID = "local-user"
LOCAL_AUTHOR_NAME = "You"
UNKNOWN_REMOTE_AUTHOR_ID = "remote-collaborator"
UNKNOWN_REMOTE_AUTHOR_NAME = "Collaborator"
UNKNOWN_HISTORY_AUTHOR_ID = "unknown-author"

# Twelve hues spread across the colour wheel; shared with remote cursors.
AUTHOR_PALETTE: tuple[str, ...] = (
    "#e06c75",  # red
    "#e5c07b",  # yellow
    "#98c379",  # green
    "#56b6c2",  # cyan
    "#61afef",  # blue
    "#c678dd",  # purple
    "#d19a66",  # orange
    "#be5046",  # rust
    "#7ec699",  # mint
    "#e06ca0",  # pink
    "#5fb3b3",  # teal
    "#c8ae9d",  # tan
)

_SLUG_SEPARATOR = re.compile(r"[^a-z0-9]+")


def name_to_color(name: str) -> str:
    """Map a display name onto the palette with a stable 32-bit string hash."""

    data = name.encode("utf-16-le")
    value = 0
    for offset in range(0, len(data), 2):
        unit = data[offset] | (data[offset + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return AUTHOR_PALETTE[abs(value) % len(AUTHOR_PALETTE)]


def slugify(name: str) -> str:
    return _SLUG_SEPARATOR.sub("-", name.lower())


def normalize_author_type(value: object) -> AuthorType:
    return "agent" if value == "agent" else "human"


@dataclass(frozen=True)
class Author:
    id: str
    name: str = field(compare=False)
    type: AuthorType = field(default="human", compare=False)
    color: str = field(default="", compare=False)

    @classmethod
    def named(cls, author_id: str, name: str, author_type: AuthorType = "human") -> "Author":
        return cls(author_id, name, normalize_author_type(author_type), name_to_color(name))


LOCAL_AUTHOR = Author.named(LOCAL_AUTHOR_ID, LOCAL_AUTHOR_NAME)
UNKNOWN_REMOTE_AUTHOR = Author.named(UNKNOWN_REMOTE_AUTHOR_ID, UNKNOWN_REMOTE_AUTHOR_NAME)


def author_from_peer(peer) -> Author:
    """Build an author for a presence-roster entry.

    ``peer`` needs ``name`` and ``type`` attributes (see
    :class:`scribeline.collab.presence.Peer`).
    """

    name = str(peer.name)
    slug = slugify(name) or "remote"
    return Author.named(f"peer:{slug}", name, normalize_author_type(peer.type))


def author_from_history(author_id: str, author_type: str) -> Author:
    """Build an author for a range record returned by the history service."""

    normalized_id = (author_id or "").strip() or UNKNOWN_HISTORY_AUTHOR_ID
    name = LOCAL_AUTHOR_NAME if normalized_id == LOCAL_AUTHOR_ID else normalized_id
    return Author.named(normalized_id, name, normalize_author_type(author_type))
