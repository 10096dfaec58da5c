import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from models import ServeurParameters
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ServeurParametersRepository(BaseRepository[ServeurParameters]):
    """Single-row table pointing at the primary and secondary started servers."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, ServeurParameters)

    async def get_serveurs_id(self) -> Optional[ServeurParameters]:
        return await self.find_first()

    async def update_actif_serveur(self, serveur_id: int) -> bool:
        """Make ``serveur_id`` the primary started server.

        The former primary moves to the secondary slot. The row is created
        on first use.
        """
        params = await self.get_serveurs_id()
        if params is None:
            await self.save(ServeurParameters(id_serv_primaire=serveur_id))
            logger.info("Server %s started as primary (parameters row created)", serveur_id)
            return True

        if params.id_serv_primaire == serveur_id:
            return True

        secondary = params.id_serv_primaire
        if secondary is None:
            secondary = params.id_serv_secondaire
        if secondary == serveur_id:
            secondary = None

        updated = await self.update(
            params.id,
            id_serv_primaire=serveur_id,
            id_serv_secondaire=secondary,
        )
        logger.info("Server %s started as primary, secondary is now %s", serveur_id, secondary)
        return updated

    async def clear_serveur(self, serveur_id: int) -> bool:
        """Remove ``serveur_id`` from whichever slot holds it."""
        params = await self.get_serveurs_id()
        if params is None:
            return False

        values = {}
        if params.id_serv_primaire == serveur_id:
            values["id_serv_primaire"] = None
        if params.id_serv_secondaire == serveur_id:
            values["id_serv_secondaire"] = None
        if not values:
            return False
        return await self.update(params.id, **values)
