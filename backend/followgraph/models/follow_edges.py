"""Adjacency-list ORM — the two halves of every follow edge.

Invariants:
    - Following row (user_id, followee_id): user_id follows followee_id (outgoing list)
    - Follower row (user_id, follower_id): follower_id follows user_id (incoming list)
    - Composite primary key = at most one row per pair per list (edge uniqueness)
    - An edge is consistent iff Following(a, b) and Follower(b, a) both exist

Design Decisions:
    - Two tables instead of one edge table: each side is written by its own
      conditional statement, so a failed second step is observable as a half-edge
      and can be repaired (ADR: mirror invariant is maintained, not assumed)
    - FK only on the owning user_id (cascade delete); the peer column is
      unconstrained so Step 1 of a follow does not depend on the peer's record
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from followgraph.db.base import Base


class Following(Base):
    """Outgoing edge: owner user_id follows followee_id."""
    __tablename__ = "followings"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    followee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, index=True,
    )
    since: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


class Follower(Base):
    """Incoming edge: follower_id follows owner user_id."""
    __tablename__ = "followers"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    follower_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, index=True,
    )
    since: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
