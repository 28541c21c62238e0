"""User ORM — the node entity of the follow graph.

Invariants:
    - id is UUID primary key, assigned on insert, never changed
    - username is unique (store-level guard) and at least 3 chars (checked in core)
    - created_at orders the full user listing

Design Decisions:
    - No relationship() to the edge tables: adjacency lists are always read through
      explicit repository queries (ADR: no implicit lazy loads in async sessions)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from followgraph.db.base import Base


class User(Base):
    """A user account — one node of the follow graph."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
