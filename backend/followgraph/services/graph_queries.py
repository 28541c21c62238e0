"""Graph Queries — read-only aggregations over the follow graph.

Invariants:
    - No writes
    - daily_follower_counts: unknown user = no followers = [] (not an error)
    - mutual_followers: both users must exist (ResourceNotFoundError otherwise)
    - mutual_followers(a, b) and mutual_followers(b, a) contain the same users

Design Decisions:
    - Grouping and intersection done in core/graph_stats.py on loaded ids/timestamps:
      UTC bucketing identical on PostgreSQL and SQLite
"""

from followgraph.core.domain_types import DailyCount, EnrichedUser, PeerView
from followgraph.core.errors import ErrorContext, ResourceNotFoundError
from followgraph.core.graph_stats import group_daily_counts, intersect_ids
from followgraph.core.repository_protocols import UserRepository
from followgraph.core.validation import parse_distinct_pair, parse_identifier


class GraphQueryService:
    """Follower listings, daily trends and mutual followers."""

    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def list_all_users(self) -> list[EnrichedUser]:
        return await self.repo.list_with_peers()

    async def daily_follower_counts(self, user_id: object) -> list[DailyCount]:
        """Follower edges per UTC date for one user, ascending by date."""
        uid = parse_identifier(user_id, "userId")
        return group_daily_counts(await self.repo.follower_timestamps(uid))

    async def mutual_followers(
        self, user_id1: object, user_id2: object,
    ) -> list[PeerView]:
        """Users who follow both user_id1 and user_id2."""
        first, second = parse_distinct_pair(
            user_id1, user_id2, "userId1", "userId2",
        )
        for uid in (first, second):
            if await self.repo.find_by_id(uid) is None:
                raise ResourceNotFoundError(
                    "User", str(uid),
                    ErrorContext(operation="mutual_followers", user_id=str(uid)),
                )
        common = intersect_ids(
            await self.repo.follower_ids(first),
            await self.repo.follower_ids(second),
        )
        return await self.repo.find_peers(common)
