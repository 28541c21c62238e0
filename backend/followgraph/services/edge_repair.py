"""Edge Repair — reconciliation pass restoring the mirror invariant.

Invariants:
    - The followings side is authoritative: it is written first by follow and
      removed first by unfollow, so it always records the caller's last intent
    - Outgoing-only half-edge → re-run follow Step 2 with the original `since`
    - Incoming-only half-edge → re-run unfollow Step 2
    - Uses the same conditional writes as the mutation engine: re-running the
      pass, or running it alongside live follows, never creates a duplicate edge
    - dry_run performs no writes

Design Decisions:
    - Outgoing-only edges whose followee record does not exist cannot be completed;
      the outgoing entry is dropped instead (there is no node to mirror into)
"""

import logging
from dataclasses import dataclass, field

from followgraph.core.domain_types import EdgeSide, HalfEdge, UserId
from followgraph.core.repository_protocols import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class RepairSummary:
    """Outcome of one repair pass."""
    found: int = 0
    completed: int = 0
    dropped: int = 0
    skipped: int = 0
    dry_run: bool = False
    half_edges: list[HalfEdge] = field(default_factory=list)


class EdgeRepairService:
    """Detects and fixes half-edges left by a failed second step."""

    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def find_half_edges(self) -> list[HalfEdge]:
        return await self.repo.find_half_edges()

    async def repair_half_edges(self, dry_run: bool = False) -> RepairSummary:
        half_edges = await self.repo.find_half_edges()
        summary = RepairSummary(
            found=len(half_edges), dry_run=dry_run, half_edges=half_edges,
        )
        if dry_run:
            return summary

        for edge in half_edges:
            outcome = await self._repair(edge)
            if outcome == "completed":
                summary.completed += 1
            elif outcome == "dropped":
                summary.dropped += 1
            else:
                summary.skipped += 1

        logger.info(
            f"Edge repair pass: found={summary.found} completed={summary.completed} "
            f"dropped={summary.dropped} skipped={summary.skipped}",
            extra={"operation": "repair_half_edges"},
        )
        return summary

    async def _repair(self, edge: HalfEdge) -> str | None:
        """Apply one fix; None when the half-edge resolved itself concurrently."""
        follower = UserId(edge.follower_id)
        followee = UserId(edge.followee_id)

        if edge.present_side == EdgeSide.FOLLOWERS:
            if await self.repo.remove_follower(followee, follower):
                return "dropped"
            return None

        if await self.repo.add_follower(followee, follower, edge.since):
            return "completed"
        if await self.repo.find_by_id(followee) is None:
            if await self.repo.remove_following(follower, followee):
                return "dropped"
        return None
