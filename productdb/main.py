import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from productdb.api import admin, user
from productdb.core.config import settings
from productdb.core.errors import (
    ConflictError,
    NotFoundError,
    ProductDBError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Stream handler for the service loggers at the configured level."""
    root_logger = logging.getLogger("productdb")
    root_logger.setLevel(settings.log_level.upper())
    if root_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)


configure_logging()

app = FastAPI(title="Product DB API")

_STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


@app.exception_handler(ProductDBError)
async def product_db_error_handler(request: Request, exc: ProductDBError):
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(f"[API] {request.method} {request.url.path} -> {status_code}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.info(f"[API] {request.method} {request.url.path} -> 400: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": f"Invalid input: {errors}"},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"[API] {request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "app": "ProductDB",
        "db_url_present": bool(settings.database_url),
    }


app.include_router(admin.router)
app.include_router(user.router)
