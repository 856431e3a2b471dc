import logging

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

logger = logging.getLogger(__name__)


def _storage_uri() -> str:
    uri = settings.RATE_LIMIT_STORAGE_URI or "memory://"
    if uri == "memory://":
        logger.info("Rate limiter using in-memory storage")
    return uri


limiter = Limiter(key_func=get_remote_address, storage_uri=_storage_uri())
