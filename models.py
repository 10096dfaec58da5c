from typing import Optional
from sqlalchemy import String, Integer, Boolean, Text
from sqlalchemy.orm import Mapped, mapped_column
from database import Base


class Serveur(Base):
    """A game-server instance. Attribute names are English, columns keep the stored names."""

    __tablename__ = "serveurs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column("nom", String(255), default="")
    game: Mapped[str] = mapped_column("jeu", String(255), default="")
    version: Mapped[str] = mapped_column(String(64), default="")
    modpack: Mapped[str] = mapped_column(String(255), default="")
    modpack_url: Mapped[str] = mapped_column(String(512), default="")
    world_name: Mapped[str] = mapped_column("nom_monde", String(255), default="")
    embed_color: Mapped[str] = mapped_column(String(16), default="#000000")
    container: Mapped[str] = mapped_column("contenaire", String(255), default="")
    description: Mapped[str] = mapped_column(Text, default="")
    active: Mapped[bool] = mapped_column("actif", Boolean, default=False)
    is_global: Mapped[bool] = mapped_column("global", Boolean, default=False)
    type: Mapped[str] = mapped_column(String(64), default="")
    image: Mapped[str] = mapped_column(String(512), default="")

    # Transient: filled from the player-count service, never persisted.
    players_online = None

    def __init__(self, **kwargs):
        # Column defaults only apply at flush; fill them in memory as well.
        for prop in self.__mapper__.column_attrs:
            column = prop.columns[0]
            if prop.key not in kwargs and column.default is not None:
                kwargs[prop.key] = column.default.arg
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<Serveur id={self.id} nom={self.name!r} jeu={self.game!r}>"


class ServeurParameters(Base):
    """Designates which servers are currently started (primary and secondary)."""

    __tablename__ = "serveurs_parameters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_serv_primaire: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    id_serv_secondaire: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


class ApiRoute(Base):
    __tablename__ = "api_routes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    alias: Mapped[str] = mapped_column(String(128), unique=True)
    route: Mapped[str] = mapped_column(String(255))
    method: Mapped[str] = mapped_column(String(16))
    parameters: Mapped[str] = mapped_column(String(512), default="")
    description: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
