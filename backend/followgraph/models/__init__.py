"""ORM Models — SQLAlchemy declarative models for users and their adjacency lists.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; each adjacency list row is owned by one user

Design Decisions:
    - One file per entity for locality
    - All models imported here so their tables are registered on Base.metadata
      before create_all or Alembic autogenerate reads it
"""

from followgraph.models.user import User  # noqa: F401
from followgraph.models.follow_edges import Following, Follower  # noqa: F401
