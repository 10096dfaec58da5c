import logging
from typing import Optional
import httpx

import config
from errors import ExternalServiceError

logger = logging.getLogger(__name__)


class InstallerClient:
    """Forwards installation requests to the installer service, when one is configured."""

    def __init__(self, base_url: str = config.INSTALLER_API_URL, timeout: float = config.HTTP_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    async def install(self, payload: dict) -> bool:
        """POST the payload; False when no installer is configured."""
        if not self.enabled:
            logger.info("No installer configured; %s recorded only", payload.get("nom_serveur"))
            return False

        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                         transport=self.transport) as client:
                response = await client.post("/install", json=payload)
        except httpx.HTTPError as e:
            logger.exception("Installer unreachable")
            raise ExternalServiceError("installer", str(e))

        if response.is_error:
            logger.error("Installer answered %s: %s", response.status_code, response.text)
            raise ExternalServiceError("installer", f"HTTP {response.status_code}")
        return True
