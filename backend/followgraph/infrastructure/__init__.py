"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Every SQLAlchemy call lives here; core/ and services/ never build queries
    - Store failures mapped to core/errors.py types

Design Decisions:
    - Repository implementation next to the session manager it relies on
"""
