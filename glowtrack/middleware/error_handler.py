from fastapi import Request, status, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": error, "detail": detail}
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Dernier filet pour les erreurs non gérées par les routes

    Les erreurs métier (produit introuvable, doublon) ont leurs propres
    handlers dans main.py ; ici on ne traite que base de données et imprévus.
    """
    path = request.url.path

    if isinstance(exc, HTTPException):
        if exc.status_code >= 500:
            logger.error(f"{path}: HTTP {exc.status_code} {exc.detail}", exc_info=True)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    if isinstance(exc, IntegrityError):
        # NOT NULL, UNIQUE, CHECK... : la requête viole une contrainte du schéma
        logger.warning(f"{path}: constraint violation: {exc.orig}")
        return _error_response(
            status.HTTP_409_CONFLICT,
            "constraint_violation",
            "The request violates a database constraint.",
        )

    if isinstance(exc, SQLAlchemyError):
        logger.critical(f"{path}: database error: {exc}", exc_info=True)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "database_error",
            "A database operation failed.",
        )

    logger.error(f"{path}: unhandled {type(exc).__name__}: {exc}", exc_info=True)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred on the server.",
    )
