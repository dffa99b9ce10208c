"""Entry point for the NAS bridge gateway."""

import time
import uuid

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from gateway.config import API_PREFIX, GATEWAY_HOST, GATEWAY_PORT, ShareSettings
from gateway.dependencies import get_file_service
from gateway.exceptions import (
    GatewayException,
    InvalidInputError,
    InvalidPathError,
    InvalidRangeError,
    ShareEntryExistsError,
    ShareNotFoundError,
)
from gateway.routes import file_router, legacy_router
from gateway.schemas.common import ErrorResponse
from gateway.services.file_service import FileService
from gateway.services.path_resolver import PathResolver
from gateway.share.smb_client import SmbShareClient

logger = setup_logging('nas-bridge')

app = FastAPI(
    title="NAS Bridge",
    description="HTTP gateway exposing an SMB file share as a REST API",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Build the share client and file service from the environment.
    """
    logger.info("NAS bridge starting up...")

    settings = ShareSettings.from_env()
    logger.info(f"Share settings loaded: {settings!r}")

    share_client = SmbShareClient(settings)
    try:
        await share_client.connect()
        logger.info("SMB session established")
    except GatewayException as e:
        logger.error(f"Initial SMB session failed, requests will reconnect: {e}", exc_info=True)

    app.state.share_client = share_client
    app.state.file_service = FileService(share_client, PathResolver(settings.base_url))


@app.on_event("shutdown")
async def shutdown_event():
    """
    Release the share session on application shutdown.
    """
    logger.info("NAS bridge shutting down...")

    share_client = getattr(app.state, "share_client", None)
    if share_client:
        await share_client.close()


def _error_response(request: Request, status_code: int, detail: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=detail, code=code).model_dump(),
        headers={"X-Request-ID": getattr(request.state, 'request_id', 'unknown')},
    )


@app.exception_handler(ShareNotFoundError)
async def share_not_found_handler(request: Request, exc: ShareNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Share path not found: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(request, status.HTTP_404_NOT_FOUND, str(exc), "NOT_FOUND")


@app.exception_handler(InvalidRangeError)
async def invalid_range_handler(request: Request, exc: InvalidRangeError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid range: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(request, status.HTTP_400_BAD_REQUEST, str(exc), "INVALID_RANGE")


@app.exception_handler(InvalidPathError)
async def invalid_path_handler(request: Request, exc: InvalidPathError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid path: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(request, status.HTTP_400_BAD_REQUEST, str(exc), "INVALID_PATH")


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid input: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(request, status.HTTP_400_BAD_REQUEST, str(exc), "INVALID_INPUT")


@app.exception_handler(ShareEntryExistsError)
async def share_entry_exists_handler(request: Request, exc: ShareEntryExistsError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Share entry exists: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(request, status.HTTP_409_CONFLICT, str(exc), "ALREADY_EXISTS")


@app.exception_handler(GatewayException)
async def gateway_exception_handler(request: Request, exc: GatewayException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Gateway exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=exc
    )
    return _error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "INTERNAL_ERROR"
    )


app.include_router(file_router, prefix=API_PREFIX)
app.include_router(legacy_router, prefix=API_PREFIX)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "NAS Bridge API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Liveness probe; returns 200 while the process is serving.
    """
    return {"status": "healthy", "service": "nas-bridge"}


@app.get("/ready")
async def ready_check(file_service: FileService = Depends(get_file_service)):
    """
    Readiness probe; verifies the share base location is reachable.
    """
    share_ok = await file_service.ping()
    status_code = status.HTTP_200_OK if share_ok else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "ready": share_ok,
            "share": "ok" if share_ok else "unreachable"
        }
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "gateway.main:app",
        host=GATEWAY_HOST,
        port=GATEWAY_PORT,
    )


if __name__ == "__main__":
    main()
