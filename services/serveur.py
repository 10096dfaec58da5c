import logging
from typing import List, Optional
from errors import ConflictError, ExternalServiceError
from models import Serveur
from repositories.serveur import ServeurRepository
from repositories.serveur_parameters import ServeurParametersRepository
from services.players import PlayersClient
from services.installer import InstallerClient
from schemas import InstallationRequest, container_name

logger = logging.getLogger(__name__)


class ServeurService:
    """Server operations on top of the repositories and companion services."""

    def __init__(
        self,
        repository: ServeurRepository,
        parameters_repository: ServeurParametersRepository,
        players_client: PlayersClient,
        installer_client: InstallerClient,
    ):
        self.repository = repository
        self.parameters_repository = parameters_repository
        self.players_client = players_client
        self.installer_client = installer_client

    async def get_all(self) -> List[Serveur]:
        return await self.repository.find_all()

    async def get_by_id(self, serveur_id: int) -> Optional[Serveur]:
        return await self.repository.find_by_id(serveur_id)

    async def get_serveurs_actif_global(self) -> List[Serveur]:
        """Servers that are both active and global."""
        serveurs = await self.repository.find_all()
        return [s for s in serveurs if s.active and s.is_global]

    async def get_serveurs_actif_global_by_game(self, game: str) -> List[Serveur]:
        """Active and global servers whose game matches, ignoring case."""
        wanted = game.lower()
        serveurs = await self.get_serveurs_actif_global()
        return [s for s in serveurs if s.game.lower() == wanted]

    async def get_started_serveurs_info(self) -> Optional[List[Serveur]]:
        """Primary and secondary started servers with their live player counts.

        None when the parameters row or either server is missing.
        """
        params = await self.parameters_repository.get_serveurs_id()
        if params is None:
            return None
        if params.id_serv_primaire is None or params.id_serv_secondaire is None:
            return None

        primaire = await self.get_by_id(params.id_serv_primaire)
        secondaire = await self.get_by_id(params.id_serv_secondaire)
        if primaire is None or secondaire is None:
            return None

        for serveur in (primaire, secondaire):
            serveur.players_online = await self.players_client.get_players_count(serveur)
        return [primaire, secondaire]

    async def create(self, data: dict) -> Serveur:
        """Persist a new server; the id is always assigned by the store."""
        data = {k: v for k, v in data.items() if k != "id"}
        serveur = await self.repository.save(Serveur(**data))
        logger.info("Created server %s (%s)", serveur.id, serveur.name)
        return serveur

    async def delete(self, serveur_id: int) -> bool:
        deleted = await self.repository.delete(serveur_id)
        if deleted:
            await self.parameters_repository.clear_serveur(serveur_id)
            logger.info("Deleted server %s", serveur_id)
        return deleted

    # ---------------- Lifecycle: start / stop / installation ----------------

    async def start(self, serveur: Serveur) -> bool:
        """Mark the server active and make it the primary started server."""
        if not await self.repository.update(serveur.id, active=True):
            return False
        started = await self.parameters_repository.update_actif_serveur(serveur.id)
        if started:
            serveur.active = True
            logger.info("Started server %s", serveur.id)
        return started

    async def stop(self, serveur: Serveur) -> bool:
        """Mark the server inactive and drop it from the started slots."""
        if not await self.repository.update(serveur.id, active=False):
            return False
        await self.parameters_repository.clear_serveur(serveur.id)
        serveur.active = False
        logger.info("Stopped server %s", serveur.id)
        return True

    async def install(self, request: InstallationRequest) -> Serveur:
        """Record the server to be installed and hand the request to the installer.

        Raises ConflictError when another server already uses the container.
        If the installer fails, the recorded server is deleted again.
        """
        container = container_name(request.nom_serveur)
        if await self.repository.find_by_container(container) is not None:
            raise ConflictError(f"container {container!r} already in use")

        serveur = await self.create({
            "container": container,
            "name": request.nom_serveur,
            "game": "Minecraft",
            "version": request.version,
            "modpack": request.modpack_name,
            "modpack_url": request.modpack_url,
            "embed_color": request.embed_color,
            "type": request.serveur_loader,
            "description": f"Installation requested by {request.discord_id}",
            "active": False,
            "is_global": False,
        })
        try:
            await self.installer_client.install({**request.model_dump(), "id": serveur.id})
        except ExternalServiceError:
            # Release the container so the installation can be retried.
            await self.repository.delete(serveur.id)
            logger.warning("Installation of %s failed; server %s removed", container, serveur.id)
            raise
        return serveur
