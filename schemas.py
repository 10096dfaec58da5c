import re
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


def container_name(nom_serveur: str) -> str:
    """Container reference derived from a server name: lowercase, dash-separated."""
    slug = re.sub(r"[^a-z0-9]+", "-", nom_serveur.lower())
    return slug.strip("-")


class ServeurBase(BaseModel):
    """
    Server fields as exchanged over the API.

    The JSON keys are the stored column names (``nom``, ``jeu``, ``actif``,
    ``global``...); Python code uses the English attribute names.
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    name: str = Field("", alias="nom")
    game: str = Field("", alias="jeu")
    version: str = ""
    modpack: str = ""
    modpack_url: str = ""
    world_name: str = Field("", alias="nom_monde")
    embed_color: str = "#000000"
    container: str = Field("", alias="contenaire")
    description: str = ""
    active: bool = Field(False, alias="actif")
    is_global: bool = Field(False, alias="global")
    type: str = ""
    image: str = ""


class ServeurCreate(ServeurBase):
    """Creation payload; unknown keys (including ``id``) are ignored."""
    pass


class Serveur(ServeurBase):
    id: int
    players_online: Optional[int] = None


class ServeurIdRequest(BaseModel):
    id: int


class InstallationRequest(BaseModel):
    discord_id: str
    nom_serveur: str
    version: str
    modpack_name: str = ""
    embed_color: str = "#000000"
    serveur_loader: str = ""
    modpack_url: str = ""
    serveur_pack_url: str = ""

    @field_validator("nom_serveur")
    @classmethod
    def nom_serveur_names_a_container(cls, value: str) -> str:
        # The container reference is derived from the name and cannot be empty.
        if not container_name(value):
            raise ValueError("nom_serveur must contain at least one ASCII letter or digit")
        return value


class ServeurResponse(BaseModel):
    success: bool = True
    data: Serveur


class ServeurListResponse(BaseModel):
    success: bool = True
    data: List[Serveur]


class DeleteResponse(BaseModel):
    success: bool = True
    data: bool


class ApiRoute(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    alias: str
    route: str
    method: str
    parameters: str
    description: Optional[str] = None
    comment: Optional[str] = None


class ApiRouteListResponse(BaseModel):
    success: bool = True
    data: List[ApiRoute]
