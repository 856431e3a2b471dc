import logging
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import DataStoreUnavailableError, InvoiceInsightsException

logger = logging.getLogger("app.errors")


def register_error_handlers(app):
    @app.exception_handler(InvoiceInsightsException)
    async def application_error(request: Request, exc: InvoiceInsightsException):
        logger.info("Request failed code=%s path=%s: %s", exc.code, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def data_store_error(request: Request, exc: SQLAlchemyError):
        correlation_id = uuid.uuid4().hex
        logger.exception("Data store error cid=%s path=%s method=%s", correlation_id, request.url.path, request.method)
        error = DataStoreUnavailableError(correlation_id)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):  # noqa: BLE001
        correlation_id = uuid.uuid4().hex
        logger.exception("Unhandled error cid=%s path=%s method=%s", correlation_id, request.url.path, request.method)
        return JSONResponse(status_code=500, content={"detail": "Internal server error", "cid": correlation_id})

    return app
