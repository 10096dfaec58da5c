from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from models import Serveur
from repositories.base import BaseRepository


class ServeurRepository(BaseRepository[Serveur]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Serveur)

    async def find_by_container(self, container: str) -> Optional[Serveur]:
        """Server bound to a container reference, if any."""
        serveurs = await self.find_by(container=container)
        return serveurs[0] if serveurs else None
