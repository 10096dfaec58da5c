"""
Route metadata.

Each controller declares its routes as a list of ``RouteDefinition``; the
lifespan records them in the ``api_routes`` table at startup so clients can
discover the API.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional
from sqlalchemy.ext.asyncio import AsyncSession

import config
from models import ApiRoute
from repositories.api_route import ApiRouteRepository

logger = logging.getLogger(__name__)


@dataclass
class RouteDefinition:
    alias: str
    route: str
    method: str
    parameters: str = ""
    description: Optional[str] = None
    comment: Optional[str] = None

    def full_path(self, type: Optional[str] = None) -> str:
        if type:
            return f"{config.API_URL}/{type}{self.route}"
        return f"{config.API_URL}{self.route}"


async def register_routes(session: AsyncSession, routes: Iterable[RouteDefinition],
                          type: Optional[str] = None) -> int:
    """Record the routes, prefixed with API_URL and ``type``; returns how many were recorded."""
    repository = ApiRouteRepository(session)
    count = 0
    for definition in routes:
        await repository.add_route(ApiRoute(
            alias=definition.alias,
            route=definition.full_path(type),
            method=definition.method.upper(),
            parameters=definition.parameters,
            description=definition.description,
            comment=definition.comment,
        ))
        count += 1
    logger.info("Registered %d routes for %s", count, type or "api")
    return count
