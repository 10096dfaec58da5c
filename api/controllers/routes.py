from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from api.routes import RouteDefinition
from database import get_db
from repositories.api_route import ApiRouteRepository
from schemas import ApiRouteListResponse

router = APIRouter(prefix="/api/routes", tags=["Routes"])

ROUTES = [
    RouteDefinition("otr-routes", "/", "GET", "method",
                    "Liste des routes de l'API", "GET /api/routes"),
]


def get_api_route_repository(session: AsyncSession = Depends(get_db)) -> ApiRouteRepository:
    return ApiRouteRepository(session)


@router.get("/", response_model=ApiRouteListResponse)
async def read_routes(
    method: Optional[str] = None,
    repository: ApiRouteRepository = Depends(get_api_route_repository)
):
    if method:
        routes = await repository.find_all_by_method(method)
    else:
        routes = await repository.find_all()
    return {"success": True, "data": routes}
