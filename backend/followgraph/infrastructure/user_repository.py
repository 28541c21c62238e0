"""User Repository — SQLAlchemy implementation of core.repository_protocols.UserRepository.

Invariants:
    - Every conditional write is a single statement whose WHERE clause carries the
      precondition (owner exists, edge absent/present); rowcount 0 = condition failed
    - Every conditional write commits immediately and independently
    - A unique-key race on insert is reported as "condition failed", never raised
    - Peer joins are inner joins: ids without a user record are dropped from views

Design Decisions:
    - INSERT ... SELECT FROM users WHERE id = :owner AND NOT EXISTS (edge):
      existence and idempotency checked by the database in the write itself
      (ADR: no read-then-write window inside a step)
    - Core Table statements (Following.__table__) for the conditional writes:
      plain rowcount semantics, no ORM identity-map synchronization needed
"""

import logging
from datetime import datetime
from typing import Iterable
from uuid import UUID

from sqlalchemy import DateTime, delete, exists, insert, literal, select
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from followgraph.core.domain_types import (
    EdgeSide, EnrichedUser, HalfEdge, PeerView, UserId,
)
from followgraph.core.errors import DuplicateUsernameError, ErrorContext
from followgraph.models.follow_edges import Follower, Following
from followgraph.models.user import User

logger = logging.getLogger(__name__)

_followings = Following.__table__
_followers = Follower.__table__


class SqlUserRepository:
    """User and adjacency-list persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Users ──────────────────────────────────────────────────

    async def find_by_id(self, user_id: UserId) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()

    async def create(self, username: str) -> User:
        """Insert a user. The unique index on username is the authoritative guard."""
        user = User(username=username)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(
                f"Username race lost at insert: {username!r}",
                extra={"operation": "create_user"},
            )
            raise DuplicateUsernameError(
                username, ErrorContext(operation="create_user"),
            )
        return user

    # ─── Conditional writes ─────────────────────────────────────

    async def add_following(
        self, user_id: UserId, followee_id: UserId, since: datetime,
    ) -> bool:
        """Push followee_id into user_id's followings unless already there."""
        edge_exists = exists().where(
            _followings.c.user_id == user_id,
            _followings.c.followee_id == followee_id,
        )
        stmt = insert(_followings).from_select(
            ["user_id", "followee_id", "since"],
            select(
                User.id,
                literal(followee_id, PG_UUID(as_uuid=True)),
                literal(since, DateTime(timezone=True)),
            ).where(User.id == user_id, ~edge_exists),
        )
        return await self._conditional_write(stmt, "add_following")

    async def add_follower(
        self, user_id: UserId, follower_id: UserId, since: datetime,
    ) -> bool:
        """Push follower_id into user_id's followers unless already there."""
        edge_exists = exists().where(
            _followers.c.user_id == user_id,
            _followers.c.follower_id == follower_id,
        )
        stmt = insert(_followers).from_select(
            ["user_id", "follower_id", "since"],
            select(
                User.id,
                literal(follower_id, PG_UUID(as_uuid=True)),
                literal(since, DateTime(timezone=True)),
            ).where(User.id == user_id, ~edge_exists),
        )
        return await self._conditional_write(stmt, "add_follower")

    async def remove_following(self, user_id: UserId, followee_id: UserId) -> bool:
        """Pull followee_id from user_id's followings if present."""
        stmt = delete(_followings).where(
            _followings.c.user_id == user_id,
            _followings.c.followee_id == followee_id,
        )
        return await self._conditional_write(stmt, "remove_following")

    async def remove_follower(self, user_id: UserId, follower_id: UserId) -> bool:
        """Pull follower_id from user_id's followers if present."""
        stmt = delete(_followers).where(
            _followers.c.user_id == user_id,
            _followers.c.follower_id == follower_id,
        )
        return await self._conditional_write(stmt, "remove_follower")

    async def _conditional_write(self, stmt, operation: str) -> bool:
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except IntegrityError:
            # A concurrent identical write won the primary-key race.
            await self.db.rollback()
            logger.info(
                f"Conditional write lost a uniqueness race ({operation})",
                extra={"operation": operation},
            )
            return False
        return result.rowcount > 0

    # ─── Reads ──────────────────────────────────────────────────

    async def list_with_peers(self) -> list[EnrichedUser]:
        """All users in store order, both adjacency lists joined to usernames."""
        users = (await self.db.execute(
            select(User.id, User.username).order_by(User.created_at, User.id),
        )).all()

        follower_rows = await self.db.execute(
            select(Follower.user_id, User.id, User.username)
            .select_from(Follower)
            .join(User, User.id == Follower.follower_id)
            .order_by(Follower.since, Follower.follower_id),
        )
        followers: dict[UUID, list[PeerView]] = {}
        for owner_id, peer_id, peer_name in follower_rows:
            followers.setdefault(owner_id, []).append(PeerView(peer_id, peer_name))

        following_rows = await self.db.execute(
            select(Following.user_id, User.id, User.username)
            .select_from(Following)
            .join(User, User.id == Following.followee_id)
            .order_by(Following.since, Following.followee_id),
        )
        followings: dict[UUID, list[PeerView]] = {}
        for owner_id, peer_id, peer_name in following_rows:
            followings.setdefault(owner_id, []).append(PeerView(peer_id, peer_name))

        return [
            EnrichedUser(
                id=uid,
                username=name,
                followers=followers.get(uid, []),
                followings=followings.get(uid, []),
            )
            for uid, name in users
        ]

    async def follower_timestamps(self, user_id: UserId) -> list[datetime]:
        result = await self.db.execute(
            select(Follower.since).where(Follower.user_id == user_id),
        )
        return list(result.scalars().all())

    async def follower_ids(self, user_id: UserId) -> list[UUID]:
        result = await self.db.execute(
            select(Follower.follower_id)
            .where(Follower.user_id == user_id)
            .order_by(Follower.since, Follower.follower_id),
        )
        return list(result.scalars().all())

    async def find_peers(self, user_ids: Iterable[UUID]) -> list[PeerView]:
        """Resolve ids to peer views, preserving input order; unknown ids dropped."""
        ids = list(user_ids)
        if not ids:
            return []
        result = await self.db.execute(
            select(User.id, User.username).where(User.id.in_(ids)),
        )
        by_id = {uid: PeerView(uid, name) for uid, name in result}
        return [by_id[uid] for uid in ids if uid in by_id]

    async def find_half_edges(self) -> list[HalfEdge]:
        """Adjacency entries whose mirrored entry on the other user is missing."""
        outgoing_only = await self.db.execute(
            select(Following.user_id, Following.followee_id, Following.since)
            .where(~exists().where(
                Follower.user_id == Following.followee_id,
                Follower.follower_id == Following.user_id,
            ))
            .order_by(Following.since),
        )
        incoming_only = await self.db.execute(
            select(Follower.follower_id, Follower.user_id, Follower.since)
            .where(~exists().where(
                Following.user_id == Follower.follower_id,
                Following.followee_id == Follower.user_id,
            ))
            .order_by(Follower.since),
        )
        return [
            HalfEdge(follower, followee, since, EdgeSide.FOLLOWINGS)
            for follower, followee, since in outgoing_only
        ] + [
            HalfEdge(follower, followee, since, EdgeSide.FOLLOWERS)
            for follower, followee, since in incoming_only
        ]
