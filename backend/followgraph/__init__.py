"""Follow Graph — directed follow relationships between users, with graph queries."""

__version__ = "1.0.0"
