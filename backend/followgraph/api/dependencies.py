"""Route Dependencies — build request-scoped services over the request's DB session.

Invariants:
    - One SqlUserRepository per request, bound to the session from get_db
    - Services receive the repository only (never the raw session)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from followgraph.infrastructure.database import get_db
from followgraph.infrastructure.user_repository import SqlUserRepository
from followgraph.services.edge_mutation import EdgeMutationService
from followgraph.services.edge_repair import EdgeRepairService
from followgraph.services.graph_queries import GraphQueryService
from followgraph.services.user_accounts import UserAccountService


def get_user_repository(db: AsyncSession = Depends(get_db)) -> SqlUserRepository:
    return SqlUserRepository(db)


def get_account_service(
    repo: SqlUserRepository = Depends(get_user_repository),
) -> UserAccountService:
    return UserAccountService(repo)


def get_mutation_service(
    repo: SqlUserRepository = Depends(get_user_repository),
) -> EdgeMutationService:
    return EdgeMutationService(repo)


def get_query_service(
    repo: SqlUserRepository = Depends(get_user_repository),
) -> GraphQueryService:
    return GraphQueryService(repo)


def get_repair_service(
    repo: SqlUserRepository = Depends(get_user_repository),
) -> EdgeRepairService:
    return EdgeRepairService(repo)
