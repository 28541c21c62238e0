"""User Schemas — request bodies and response views for the users API.

Invariants:
    - Wire format is camelCase (userId, followId, followersDetails, ...)
    - Request ids are accepted as raw values: format checked by core/validation.py
      so malformed ids surface as INVALID_IDENTIFIER, not a schema error
    - Response models are built from core views via from_attributes

Design Decisions:
    - alias_generator=to_camel + populate_by_name: snake_case in Python, camelCase on
      the wire, both accepted on input
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from followgraph.core.domain_types import EdgeSide


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


# ─── Requests ────────────────────────────────────────────────────

class UserCreate(CamelModel):
    """Account creation — length rule enforced in core."""
    username: str = Field(max_length=100)


class FollowRequest(CamelModel):
    user_id: Any = None
    follow_id: Any = None


class UnfollowRequest(CamelModel):
    user_id: Any = None
    unfollow_id: Any = None


# ─── Responses ───────────────────────────────────────────────────

class PeerResponse(CamelModel):
    """Lightweight user view used inside listings."""
    id: UUID
    username: str


class UserResponse(CamelModel):
    """A freshly created user; adjacency lists start empty."""
    id: UUID
    username: str
    followers: list[PeerResponse] = []
    followings: list[PeerResponse] = []
    created_at: datetime


class EnrichedUserResponse(CamelModel):
    """A user with followers/followings resolved to peer views."""
    id: UUID
    username: str
    followers_details: list[PeerResponse] = Field(
        default_factory=list,
        validation_alias="followers", serialization_alias="followersDetails",
    )
    followings_details: list[PeerResponse] = Field(
        default_factory=list,
        validation_alias="followings", serialization_alias="followingsDetails",
    )


class DailyCountResponse(CamelModel):
    date: str
    count: int


class HalfEdgeResponse(CamelModel):
    follower_id: UUID
    followee_id: UUID
    since: datetime
    present_side: EdgeSide


class RepairSummaryResponse(CamelModel):
    found: int
    completed: int
    dropped: int
    skipped: int
    dry_run: bool
    half_edges: list[HalfEdgeResponse] = []
