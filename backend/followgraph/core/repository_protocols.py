"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store IO accessed through UserRepository
    - Conditional writes return False when their precondition did not hold;
      they never raise for an absent record or an existing/missing edge
    - Each conditional write is committed on its own (no cross-record transaction)

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any fake
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE their results are never async themselves —
      the services orchestrate the async calls around the pure logic
"""

from datetime import datetime
from typing import Iterable, Protocol
from uuid import UUID

from followgraph.core.domain_types import EnrichedUser, HalfEdge, PeerView, UserId


class UserRecord(Protocol):
    """Structural contract for a persisted user returned by the repository."""
    id: UUID
    username: str
    created_at: datetime


class UserRepository(Protocol):
    """Contract for user and adjacency-list persistence — implemented by shell."""

    # findUnique
    async def find_by_id(self, user_id: UserId) -> UserRecord | None: ...
    async def find_by_username(self, username: str) -> UserRecord | None: ...

    async def create(self, username: str) -> UserRecord:
        """Insert a user; raises DuplicateUsernameError on unique violation."""
        ...

    # conditionalUpdate
    async def add_following(
        self, user_id: UserId, followee_id: UserId, since: datetime,
    ) -> bool: ...
    async def add_follower(
        self, user_id: UserId, follower_id: UserId, since: datetime,
    ) -> bool: ...
    async def remove_following(self, user_id: UserId, followee_id: UserId) -> bool: ...
    async def remove_follower(self, user_id: UserId, follower_id: UserId) -> bool: ...

    # aggregate / findMany
    async def list_with_peers(self) -> list[EnrichedUser]: ...
    async def follower_timestamps(self, user_id: UserId) -> list[datetime]: ...
    async def follower_ids(self, user_id: UserId) -> list[UUID]: ...
    async def find_peers(self, user_ids: Iterable[UUID]) -> list[PeerView]: ...

    async def find_half_edges(self) -> list[HalfEdge]: ...
