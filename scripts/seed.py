import asyncio
import json
import logging
import os
import sys

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import AsyncSessionLocal, engine, Base
from models import ServeurParameters
from repositories.serveur import ServeurRepository
from repositories.serveur_parameters import ServeurParametersRepository
from services.installer import InstallerClient
from services.players import PlayersClient
from services.serveur import ServeurService

logger = logging.getLogger("seed")

SAMPLE_SERVEURS = [
    {
        "name": "Survie",
        "game": "Minecraft",
        "version": "1.20.1",
        "modpack": "Vanilla",
        "world_name": "survie",
        "embed_color": "#2ecc71",
        "container": "mc-survie",
        "description": "Serveur survie principal",
        "active": True,
        "is_global": True,
        "type": "vanilla",
    },
    {
        "name": "All The Mods",
        "game": "Minecraft",
        "version": "1.19.2",
        "modpack": "All The Mods 8",
        "modpack_url": "https://www.curseforge.com/minecraft/modpacks/all-the-mods-8",
        "world_name": "atm8",
        "embed_color": "#e67e22",
        "container": "mc-atm8",
        "description": "Serveur moddé",
        "active": True,
        "is_global": True,
        "type": "forge",
    },
    {
        "name": "Palworld",
        "game": "Palworld",
        "version": "0.3",
        "container": "palworld",
        "active": False,
        "is_global": True,
    },
]


# Reads an optional JSON file of servers, falling back to the samples above
def load_serveurs(path=None):
    if not path:
        return SAMPLE_SERVEURS
    with open(path, "r") as f:
        return json.load(f)


async def seed_data(path=None):
    # 1. Recreate tables to ensure a clean slate
    # WARNING: This wipes existing data!
    async with engine.begin() as conn:
        logger.info("Dropping existing tables...")
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("Creating new tables...")
        await conn.run_sync(Base.metadata.create_all)

    # 2. Start a DB session to insert data
    async with AsyncSessionLocal() as session:
        service = ServeurService(
            ServeurRepository(session),
            ServeurParametersRepository(session),
            PlayersClient(),
            InstallerClient(),
        )
        created = [await service.create(data) for data in load_serveurs(path)]
        logger.info("Seeded %d servers", len(created))

        # The first two servers are the started ones
        if len(created) >= 2:
            await service.parameters_repository.save(ServeurParameters(
                id_serv_primaire=created[0].id,
                id_serv_secondaire=created[1].id,
            ))
            logger.info("Primary %s, secondary %s", created[0].id, created[1].id)

    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed_data(sys.argv[1] if len(sys.argv) > 1 else None))
