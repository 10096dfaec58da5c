import logging
from typing import Optional
import httpx

import config
from models import Serveur

logger = logging.getLogger(__name__)


class PlayersClient:
    """Reads the live player count of a server from the companion status service.

    The service answers ``GET {base_url}/{container}`` with either
    ``{"players_online": n}`` or ``{"players": {"online": n}}``.
    """

    def __init__(self, base_url: str = config.PLAYERS_API_URL, timeout: float = config.HTTP_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def get_players_count(self, serveur: Serveur) -> Optional[int]:
        if not self.base_url or not serveur.container:
            return None

        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                         transport=self.transport) as client:
                response = await client.get(f"/{serveur.container}")
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            # An unreachable status service should not fail the listing.
            logger.warning("Player count unavailable for %s: %s", serveur.container, e)
            return None

        if not isinstance(payload, dict):
            logger.warning("Unexpected status payload for %s: %r", serveur.container, payload)
            return None

        count = payload.get("players_online")
        if count is None:
            players = payload.get("players")
            count = players.get("online") if isinstance(players, dict) else None
        try:
            return int(count) if count is not None else None
        except (TypeError, ValueError):
            logger.warning("Unexpected player count for %s: %r", serveur.container, count)
            return None
