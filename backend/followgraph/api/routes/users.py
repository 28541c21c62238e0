"""Users Routes — account creation, follow/unfollow, and graph queries.

Invariants:
    - One endpoint per core operation; each delegates to exactly one service call
    - Raw ids from body/path are passed through untouched: format errors are
      raised by core validation as INVALID_IDENTIFIER
    - All success bodies built by success_response()

Design Decisions:
    - Paths mirror the public contract: /create, /follow, /unfollow, /all,
      /{userId}/followers/daily, /mutual-followers/{userId1}/{userId2}
    - /repair-edges exposes the reconciliation pass for operators
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status

from followgraph.api.dependencies import (
    get_account_service,
    get_mutation_service,
    get_query_service,
    get_repair_service,
)
from followgraph.api.responses import UserMessages, success_response
from followgraph.core.errors import ErrorContext, UnsupportedParameterError
from followgraph.schemas.user import (
    DailyCountResponse,
    EnrichedUserResponse,
    FollowRequest,
    PeerResponse,
    RepairSummaryResponse,
    UnfollowRequest,
    UserCreate,
    UserResponse,
)
from followgraph.services.edge_mutation import EdgeMutationService
from followgraph.services.edge_repair import EdgeRepairService
from followgraph.services.graph_queries import GraphQueryService
from followgraph.services.user_accounts import UserAccountService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    accounts: UserAccountService = Depends(get_account_service),
):
    """Create a user with empty follower/following lists."""
    user = await accounts.create_user(body.username)
    return success_response(
        status.HTTP_201_CREATED, UserMessages.CREATED,
        UserResponse.model_validate(user),
    )


@router.get("/all")
async def list_all_users(
    queries: GraphQueryService = Depends(get_query_service),
):
    """List every user with follower and following details."""
    users = await queries.list_all_users()
    return success_response(
        status.HTTP_200_OK, UserMessages.ALL_USERS,
        [EnrichedUserResponse.model_validate(u) for u in users],
    )


@router.post("/follow")
async def follow_user(
    body: FollowRequest,
    mutations: EdgeMutationService = Depends(get_mutation_service),
):
    await mutations.follow(body.user_id, body.follow_id)
    return success_response(status.HTTP_200_OK, UserMessages.FOLLOWED)


@router.post("/unfollow")
async def unfollow_user(
    body: UnfollowRequest,
    mutations: EdgeMutationService = Depends(get_mutation_service),
):
    await mutations.unfollow(body.user_id, body.unfollow_id)
    return success_response(status.HTTP_200_OK, UserMessages.UNFOLLOWED)


@router.get("/{user_id}/followers/daily")
async def daily_follower_counts(
    user_id: str,
    queries: GraphQueryService = Depends(get_query_service),
):
    """Follower counts per UTC day, oldest first."""
    counts = await queries.daily_follower_counts(user_id)
    return success_response(
        status.HTTP_200_OK, UserMessages.DAILY_FOLLOWERS,
        [DailyCountResponse.model_validate(c) for c in counts],
    )


@router.get("/mutual-followers/{user_id1}/{user_id2}")
async def mutual_followers(
    user_id1: str,
    user_id2: str,
    queries: GraphQueryService = Depends(get_query_service),
):
    """Users following both user_id1 and user_id2."""
    peers = await queries.mutual_followers(user_id1, user_id2)
    return success_response(
        status.HTTP_200_OK, UserMessages.MUTUAL_FOLLOWERS,
        [PeerResponse.model_validate(p) for p in peers],
    )


REPAIR_QUERY_PARAMS = frozenset({"dryRun"})


@router.post("/repair-edges")
async def repair_edges(
    request: Request,
    dry_run: bool = Query(False, alias="dryRun"),
    repair: EdgeRepairService = Depends(get_repair_service),
):
    """Detect half-edges and restore the mirror invariant (dryRun=true: report only).

    Unknown query parameters are rejected before anything runs: a misspelled
    dryRun must not fall through to a writing pass.
    """
    unknown = sorted(set(request.query_params) - REPAIR_QUERY_PARAMS)
    if unknown:
        raise UnsupportedParameterError(
            unknown, ErrorContext(operation="repair_half_edges"),
        )
    summary = await repair.repair_half_edges(dry_run=dry_run)
    return success_response(
        status.HTTP_200_OK, UserMessages.EDGES_REPAIRED,
        RepairSummaryResponse.model_validate(summary),
    )
