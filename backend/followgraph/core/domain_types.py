"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps UUID — raw request strings become UserId only via core/validation.py
    - Edge views are frozen: the core never mutates a record it was handed
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class EdgeSide(str, Enum):
    """The two adjacency lists an edge lives in."""
    FOLLOWINGS = "followings"   # outgoing, owned by the follower
    FOLLOWERS = "followers"     # incoming, owned by the followee


class EdgeUpdateFailure(str, Enum):
    """Why a conditional adjacency-list write matched no record."""
    USER_NOT_FOUND = "user_not_found"
    EDGE_ALREADY_PRESENT = "edge_already_present"
    EDGE_NOT_PRESENT = "edge_not_present"


# ─── Views ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class PeerView:
    """Lightweight user projection used wherever a user is listed."""
    id: UUID
    username: str


@dataclass(frozen=True)
class EnrichedUser:
    """A user with both adjacency lists resolved to peer views."""
    id: UUID
    username: str
    followers: list[PeerView] = field(default_factory=list)
    followings: list[PeerView] = field(default_factory=list)


@dataclass(frozen=True)
class DailyCount:
    """Number of follower edges created on one UTC calendar date."""
    date: str   # YYYY-MM-DD
    count: int


@dataclass(frozen=True)
class HalfEdge:
    """One side of an edge whose mirror entry is missing."""
    follower_id: UUID
    followee_id: UUID
    since: datetime
    present_side: EdgeSide
