from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
from models import ApiRoute
from repositories.base import BaseRepository


class ApiRouteRepository(BaseRepository[ApiRoute]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ApiRoute)

    async def add_route(self, route: ApiRoute) -> ApiRoute:
        """Insert the route, or refresh the stored one with the same alias."""
        try:
            result = await self.session.execute(
                select(self.model).where(self.model.alias == route.alias)
            )
        except SQLAlchemyError as e:
            raise await self._fail("add_route", e)

        existing = result.scalar_one_or_none()
        if existing is None:
            return await self.save(route)

        existing.route = route.route
        existing.method = route.method
        existing.parameters = route.parameters
        existing.description = route.description
        existing.comment = route.comment
        return await self.save(existing)

    async def find_all_by_method(self, method: str) -> list[ApiRoute]:
        return await self.find_by(method=method.upper())
