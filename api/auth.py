import logging
import secrets
from typing import Optional
from fastapi import Header, HTTPException

import config

logger = logging.getLogger(__name__)


async def verify_token(authorization: Optional[str] = Header(None)):
    """Guard for mutating routes: the Authorization header must carry API_TOKEN.

    Both the raw token and ``Bearer <token>`` are accepted.
    """
    if not authorization or not config.API_TOKEN:
        raise HTTPException(status_code=401, detail="Authentication required")

    token = authorization
    scheme, _, credentials = authorization.partition(" ")
    if credentials and scheme.lower() == "bearer":
        token = credentials

    if not secrets.compare_digest(token.strip().encode(), config.API_TOKEN.encode()):
        logger.warning("Rejected request with invalid token")
        raise HTTPException(status_code=401, detail="Invalid token")
