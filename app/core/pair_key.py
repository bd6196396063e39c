"""Canonical key for a two-user conversation."""

from __future__ import annotations

from typing import Tuple


def canonical_pair(user_id: int, other_user_id: int) -> Tuple[int, int]:
    """
    Order a pair of user ids so (x, y) and (y, x) map to the same key.

    The conversations table stores the result as (participant_a,
    participant_b) under a unique constraint.
    """
    if user_id == other_user_id:
        raise ValueError("A conversation pair needs two distinct users")
    if user_id < other_user_id:
        return user_id, other_user_id
    return other_user_id, user_id
