"""Edge Mutation — follow/unfollow as two ordered, independently committed writes.

Invariants:
    - Identifiers parsed and checked distinct before any write
    - Step 1 (follower's followings) committed before Step 2 (followee's followers)
    - Step 2 is never attempted when Step 1 fails
    - Step 2 failing after Step 1 is never rolled back; half_edge=True only when
      the pair is left with exactly one side present (repaired by
      services/edge_repair.py)
    - Both steps of one follow share one `since` timestamp

Design Decisions:
    - A failed conditional write is classified with one follow-up read of the
      owning user, so callers get 404 (user missing) vs 409 (edge state) under
      the same error code
    - Step 2 failure reason decides half_edge: follow Step 2 finding the mirror
      entry already present (a concurrent follow or repair wrote it) or unfollow
      Step 2 finding it already gone leaves both sides in agreement
"""

import logging
from datetime import datetime, timezone

from followgraph.core.domain_types import EdgeUpdateFailure, UserId
from followgraph.core.errors import (
    EdgeUpdateError,
    ErrorContext,
    FollowersUpdateError,
    FollowingUpdateError,
    UnfollowersUpdateError,
    UnfollowingUpdateError,
)
from followgraph.core.repository_protocols import UserRepository
from followgraph.core.validation import parse_distinct_pair

logger = logging.getLogger(__name__)


class EdgeMutationService:
    """Creates and removes directed follow edges."""

    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def follow(self, user_id: object, follow_id: object) -> None:
        follower, followee = parse_distinct_pair(
            user_id, follow_id, "userId", "followId",
        )
        since = datetime.now(timezone.utc)

        if not await self.repo.add_following(follower, followee, since):
            reason = await self._classify(
                follower, EdgeUpdateFailure.EDGE_ALREADY_PRESENT,
            )
            raise self._failure(
                FollowingUpdateError, reason, "follow", follower, followee,
            )

        if not await self.repo.add_follower(followee, follower, since):
            reason = await self._classify(
                followee, EdgeUpdateFailure.EDGE_ALREADY_PRESENT,
            )
            raise self._failure(
                FollowersUpdateError, reason, "follow", follower, followee,
                half_edge=reason == EdgeUpdateFailure.USER_NOT_FOUND,
            )

        logger.info(
            "Follow edge created",
            extra={
                "user_id": str(follower), "target_id": str(followee),
                "operation": "follow",
            },
        )

    async def unfollow(self, user_id: object, unfollow_id: object) -> None:
        follower, followee = parse_distinct_pair(
            user_id, unfollow_id, "userId", "unfollowId",
        )

        if not await self.repo.remove_following(follower, followee):
            reason = await self._classify(
                follower, EdgeUpdateFailure.EDGE_NOT_PRESENT,
            )
            raise self._failure(
                UnfollowingUpdateError, reason, "unfollow", follower, followee,
            )

        if not await self.repo.remove_follower(followee, follower):
            reason = await self._classify(
                followee, EdgeUpdateFailure.EDGE_NOT_PRESENT,
            )
            # Step 1 removed the outgoing entry and no incoming entry matched:
            # neither side holds the edge any more.
            raise self._failure(
                UnfollowersUpdateError, reason, "unfollow", follower, followee,
            )

        logger.info(
            "Follow edge removed",
            extra={
                "user_id": str(follower), "target_id": str(followee),
                "operation": "unfollow",
            },
        )

    async def _classify(
        self, owner: UserId, edge_reason: EdgeUpdateFailure,
    ) -> EdgeUpdateFailure:
        """Explain why a conditional write on owner's list matched nothing."""
        if await self.repo.find_by_id(owner) is None:
            return EdgeUpdateFailure.USER_NOT_FOUND
        return edge_reason

    @staticmethod
    def _failure(
        error_cls: type[EdgeUpdateError],
        reason: EdgeUpdateFailure,
        operation: str,
        follower: UserId,
        followee: UserId,
        half_edge: bool = False,
    ) -> EdgeUpdateError:
        context = ErrorContext(
            user_id=str(follower), target_id=str(followee), operation=operation,
            debug_info={"half_edge": half_edge},
        )
        log = logger.warning if half_edge else logger.info
        log(
            f"{operation} rejected: {error_cls.CODE} ({reason.value})"
            + (", half-edge left for repair" if half_edge else ""),
            extra={
                "user_id": str(follower), "target_id": str(followee),
                "operation": operation, "error_code": error_cls.CODE,
                "reason": reason.value, "half_edge": half_edge or None,
            },
        )
        return error_cls(reason, half_edge=half_edge, context=context)
