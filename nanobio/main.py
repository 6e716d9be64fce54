"""FastAPI application for the Nanobio progress API."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nanobio.config import configure_logging, get_settings
from nanobio.core import container
from nanobio.database import create_all, dispose_engine, get_engine, initialize_database
from nanobio.domain.common.exceptions import DomainError
from nanobio.exceptions import NanobioError
from nanobio.infrastructure.catalog.routers import modules, quizzes
from nanobio.infrastructure.learning.routers import flashcard_sessions, quiz_sessions
from nanobio.infrastructure.progress.routers import dashboard
from nanobio.infrastructure.progression.routers import profile, progression
from nanobio.infrastructure.store import PostgrestRecordStore

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.ENVIRONMENT)
    if settings.STORE_BACKEND == "sql":
        initialize_database(settings)
        if settings.DATABASE_URL.startswith("sqlite"):
            # Postgres schemas are managed by Alembic
            await create_all(get_engine())
    logger.info(
        "application_started", environment=settings.ENVIRONMENT, store=settings.STORE_BACKEND
    )
    yield
    await container.learning_sessions().close()
    if settings.STORE_BACKEND == "postgrest":
        store = container.store()
        if isinstance(store, PostgrestRecordStore):
            await store.close()
    await dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NanobioError)
async def nanobio_error_handler(request: Request, exc: NanobioError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.warning("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


api_router = APIRouter()


@api_router.get("/")
async def api_root() -> dict[str, str]:
    return {
        "message": f"{settings.PROJECT_NAME} v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }


api_router.include_router(modules.router)
api_router.include_router(quizzes.router)
api_router.include_router(dashboard.router)
api_router.include_router(profile.router)
api_router.include_router(progression.router)
api_router.include_router(quiz_sessions.router)
api_router.include_router(flashcard_sessions.router)
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
