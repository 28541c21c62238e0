"""User Accounts — account creation with username rules.

Invariants:
    - Username length checked before any store access
    - Pre-check on username is a fast path only; the unique index decides races

Design Decisions:
    - Repository raises DuplicateUsernameError for the race case so both paths
      surface the same error kind to the caller
"""

import logging

from followgraph.core.errors import DuplicateUsernameError, ErrorContext
from followgraph.core.repository_protocols import UserRecord, UserRepository
from followgraph.core.validation import check_username

logger = logging.getLogger(__name__)


class UserAccountService:
    """Creates user nodes."""

    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def create_user(self, username: str) -> UserRecord:
        check_username(username)
        if await self.repo.find_by_username(username) is not None:
            raise DuplicateUsernameError(
                username, ErrorContext(operation="create_user"),
            )
        user = await self.repo.create(username)
        logger.info(
            f"User created: {username}",
            extra={"user_id": str(user.id), "operation": "create_user"},
        )
        return user
