"""
Presence status as a tagged value.

Storage keeps presence as ``(is_online, last_seen)``; everything above the
model boundary works with ``Online`` or ``OfflineSince`` instead of testing
a nullable timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Online:
    pass


@dataclass(frozen=True)
class OfflineSince:
    """Offline; ``since`` is None for a user who has never been online."""

    since: Optional[datetime] = None


Presence = Union[Online, OfflineSince]


def presence_from_columns(is_online: bool, last_seen: Optional[datetime]) -> Presence:
    if is_online:
        return Online()
    return OfflineSince(last_seen)


def presence_to_columns(presence: Presence) -> Tuple[bool, Optional[datetime]]:
    if isinstance(presence, Online):
        return True, None
    if isinstance(presence, OfflineSince):
        return False, presence.since
    raise TypeError(f"Unknown presence value: {presence!r}")
