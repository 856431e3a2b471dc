import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from app.core.config import settings

logger = logging.getLogger(__name__)

_initialized = False


def scrub_event(event: dict, hint: dict) -> dict:
    """Drop query strings from reported requests.

    Dashboard search text is typically a customer email or name.
    """
    request = event.get("request")
    if isinstance(request, dict) and request.get("query_string"):
        request["query_string"] = "[filtered]"
    return event


def init_monitoring() -> None:
    global _initialized
    if _initialized:
        return
    _initialized = True
    if not settings.SENTRY_DSN:
        logger.debug("Sentry disabled (no SENTRY_DSN)")
        return
    try:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[FastApiIntegration()],
            traces_sample_rate=0.1,
            profiles_sample_rate=0.0,
            send_default_pii=False,
            before_send=scrub_event,
            environment=settings.ENV,
            release=f"invoice-insights@{settings.ENV}",
        )
        logger.info("Sentry initialized")
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to init Sentry: %s", exc)
