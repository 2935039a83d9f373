from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from glowtrack.core.config import settings
from glowtrack.core.database import engine, Base
from glowtrack.middleware.error_handler import global_exception_handler
from glowtrack.middleware.logging import configure_logging
from glowtrack.tasks.scheduler import start_scheduler, stop_scheduler, get_scheduler_status
from glowtrack.utils.exceptions import ProductNotFoundError, ProductAlreadyExistsError
from glowtrack.api.v1 import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Starting application...")

    Base.metadata.create_all(bind=engine)

    start_scheduler()

    yield

    logger.info("Shutting down application...")
    stop_scheduler()


app = FastAPI(title=settings.APP_NAME, version=settings.VERSION, lifespan=lifespan)


origins = settings.ALLOWED_ORIGINS

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type"],
)


app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(ProductNotFoundError)
async def product_not_found_handler(request: Request, exc: ProductNotFoundError):
    return JSONResponse(
        status_code=404,
        content={
            "error": "product_not_found",
            "message": f"Product {exc.product_id} not found",
            "product_id": exc.product_id,
        },
    )


@app.exception_handler(ProductAlreadyExistsError)
async def product_exists_handler(request: Request, exc: ProductAlreadyExistsError):
    return JSONResponse(
        status_code=409,
        content={
            "error": "product_already_exists",
            "message": f"Product {exc.product_id} already exists",
            "product_id": exc.product_id,
        },
    )


app.add_exception_handler(Exception, global_exception_handler)


@app.get("/")
async def root():
    return {"message": settings.APP_NAME, "version": settings.VERSION, "docs": "/docs"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/scheduler")
async def scheduler_status():
    return get_scheduler_status()
