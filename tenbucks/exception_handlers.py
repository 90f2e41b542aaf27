import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from tenbucks import exceptions

logger = logging.getLogger(__name__)


async def club_exception_handler(request: Request, exc: exceptions.ClubError):
    status_code = status.HTTP_400_BAD_REQUEST

    if isinstance(exc, exceptions.EntityNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND

    elif isinstance(exc, exceptions.EntityAlreadyExistsError):
        status_code = status.HTTP_409_CONFLICT

    elif isinstance(exc, exceptions.PersistenceError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message},
    )


async def lock_timeout_handler(request: Request, exc: TimeoutError):
    logger.error(f"{request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "The club is busy, try again."},
    )
