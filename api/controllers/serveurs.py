from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

"""
Controller for game servers.
Listing and lookup are public; creation, deletion and the lifecycle actions
(start, stop, installation) require the API token.
"""

from api.auth import verify_token
from api.routes import RouteDefinition
from database import get_db
from errors import ConflictError
from repositories.serveur import ServeurRepository
from repositories.serveur_parameters import ServeurParametersRepository
from services.installer import InstallerClient
from services.players import PlayersClient
from services.serveur import ServeurService
from schemas import (
    ServeurCreate,
    ServeurIdRequest,
    InstallationRequest,
    ServeurResponse,
    ServeurListResponse,
    DeleteResponse,
)

router = APIRouter(prefix="/api/serveurs", tags=["Serveurs"])

ROUTES = [
    RouteDefinition("otr-serveurs", "/", "GET", "actif_global jeu",
                    "Affichage de tous les serveurs", "GET /api/serveurs"),
    RouteDefinition("otr-serveurs-infos", "/infos/:id", "GET", "id",
                    "Affichage d'un serveur par son ID", "GET /api/serveurs/infos/:id"),
    RouteDefinition("otr-serveurs-primaire-secondaire", "/primaire-secondaire", "GET", "",
                    "Affichage des serveurs primaire et secondaire", "GET /api/serveurs/primaire-secondaire"),
    RouteDefinition("otr-serveurs-creer", "/", "POST",
                    "nom jeu version modpack modpack_url nom_monde embed_color contenaire description actif global type image",
                    "Création d'un serveur", "POST /api/serveurs Nécessite un token d'authentification"),
    RouteDefinition("otr-serveurs-supprimer", "/", "DELETE", "id",
                    "Suppression d'un serveur", "DELETE /api/serveurs Nécessite un token d'authentification"),
    RouteDefinition("otr-serveurs-start", "/start/", "POST", "id",
                    "Lancement du serveur", "POST /api/serveurs/start/ Nécessite un token d'authentification"),
    RouteDefinition("otr-serveurs-stop", "/stop/", "POST", "id",
                    "Arrêt du serveur", "POST /api/serveurs/stop/ Nécessite un token d'authentification"),
    RouteDefinition("otr-serveurs-installation", "/installation/", "POST",
                    "discord_id nom_serveur version modpack_name embed_color serveur_loader modpack_url serveur_pack_url",
                    "Installation du serveur", "POST /api/serveurs/installation/ Nécessite un token d'authentification"),
]


def get_serveur_repository(session: AsyncSession = Depends(get_db)) -> ServeurRepository:
    return ServeurRepository(session)

def get_parameters_repository(session: AsyncSession = Depends(get_db)) -> ServeurParametersRepository:
    return ServeurParametersRepository(session)

def get_players_client() -> PlayersClient:
    return PlayersClient()

def get_installer_client() -> InstallerClient:
    return InstallerClient()

def get_serveur_service(
    repository: ServeurRepository = Depends(get_serveur_repository),
    parameters_repository: ServeurParametersRepository = Depends(get_parameters_repository),
    players_client: PlayersClient = Depends(get_players_client),
    installer_client: InstallerClient = Depends(get_installer_client),
) -> ServeurService:
    return ServeurService(repository, parameters_repository, players_client, installer_client)


async def get_serveur_or_404(serveur_id: int, service: ServeurService):
    serveur = await service.get_by_id(serveur_id)
    if serveur is None:
        raise HTTPException(status_code=404, detail="Serveur not found")
    return serveur


@router.get("/", response_model=ServeurListResponse)
async def read_serveurs(
    actif_global: bool = False,
    jeu: Optional[str] = None,
    service: ServeurService = Depends(get_serveur_service)
):
    if jeu is not None:
        serveurs = await service.get_serveurs_actif_global_by_game(jeu)
    elif actif_global:
        serveurs = await service.get_serveurs_actif_global()
    else:
        serveurs = await service.get_all()
    return {"success": True, "data": serveurs}

@router.get("/infos/{serveur_id}", response_model=ServeurResponse)
async def read_serveur(
    serveur_id: int,
    service: ServeurService = Depends(get_serveur_service)
):
    serveur = await get_serveur_or_404(serveur_id, service)
    return {"success": True, "data": serveur}

@router.get("/primaire-secondaire", response_model=ServeurListResponse)
async def read_serveurs_primaire_secondaire(
    service: ServeurService = Depends(get_serveur_service)
):
    """
    Primary and secondary started servers, with their live player counts.
    """
    serveurs = await service.get_started_serveurs_info()
    if serveurs is None:
        raise HTTPException(status_code=404, detail="Primary and secondary servers not configured")
    return {"success": True, "data": serveurs}

@router.post("/", response_model=ServeurResponse, status_code=201, dependencies=[Depends(verify_token)])
async def create_serveur(
    payload: ServeurCreate,
    service: ServeurService = Depends(get_serveur_service)
):
    serveur = await service.create(payload.model_dump())
    return {"success": True, "data": serveur}

@router.delete("/", response_model=DeleteResponse, dependencies=[Depends(verify_token)])
async def delete_serveur(
    payload: ServeurIdRequest,
    service: ServeurService = Depends(get_serveur_service)
):
    deleted = await service.delete(payload.id)
    return {"success": True, "data": deleted}

# ---------------- Lifecycle: start / stop / installation ----------------

@router.post("/start/", response_model=ServeurResponse, dependencies=[Depends(verify_token)])
async def start_serveur(
    payload: ServeurIdRequest,
    service: ServeurService = Depends(get_serveur_service)
):
    serveur = await get_serveur_or_404(payload.id, service)
    started = await service.start(serveur)
    return {"success": started, "data": serveur}

@router.post("/stop/", response_model=ServeurResponse, dependencies=[Depends(verify_token)])
async def stop_serveur(
    payload: ServeurIdRequest,
    service: ServeurService = Depends(get_serveur_service)
):
    serveur = await get_serveur_or_404(payload.id, service)
    stopped = await service.stop(serveur)
    return {"success": stopped, "data": serveur}

@router.post("/installation/", response_model=ServeurResponse, status_code=201, dependencies=[Depends(verify_token)])
async def install_serveur(
    payload: InstallationRequest,
    service: ServeurService = Depends(get_serveur_service)
):
    try:
        serveur = await service.install(payload)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"success": True, "data": serveur}
