"""FastAPI application entry point and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette import status

from flashdeck.config import configure_logging, get_settings
from flashdeck.database import Database
from flashdeck.domain.common.exceptions import DomainError
from flashdeck.exceptions import FlashdeckError
from flashdeck.infrastructure.common.schemas import HealthResponse
from flashdeck.infrastructure.decks.routers import actions, cards, decks, pages

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database on startup and dispose of it on shutdown."""
    configure_logging(settings.ENVIRONMENT)
    database = Database(settings)
    if settings.DATABASE_URL.startswith("sqlite"):
        database.create_tables()
    app.state.database = database
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION} ({settings.ENVIRONMENT})")
    yield
    database.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Flashcard decks with ownership-scoped storage and study sessions",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Invalidated-Paths"],
)


@app.exception_handler(FlashdeckError)
async def flashdeck_error_handler(request: Request, exc: FlashdeckError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


api_router = APIRouter(prefix=settings.API_V1_PREFIX)


@api_router.get("/")
def api_root() -> dict[str, str]:
    """API version information."""
    return {"name": settings.PROJECT_NAME, "version": settings.VERSION}


api_router.include_router(decks.router)
api_router.include_router(cards.router)
api_router.include_router(actions.router)

app.include_router(api_router)
app.include_router(pages.router)


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(status="healthy")
