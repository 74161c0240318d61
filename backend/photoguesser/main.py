from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import Settings, get_settings
from .dependencies import get_store
from .logging_util import setup_logging
from .models.game import ConfigResponse, ScaleOption
from .routers import game, photos
from .services.scoring import SCORE_PROFILES

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events for the application."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    yield
    # Shutdown: release display handles of the loaded photos
    get_store().close()


# Create FastAPI application
app = FastAPI(
    title="PhotoGuesser",
    description="Guess where your own photos were taken",
    version="1.0.0",
    lifespan=lifespan
)

# The front end is served from the same machine
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost", "http://127.0.0.1"],
    allow_origin_regex=r"http://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(photos.router, prefix="/api")
app.include_router(game.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to PhotoGuesser API",
        "docs": "/docs",
        "health": "ok"
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/api/config", response_model=ConfigResponse)
async def get_config(settings: Settings = Depends(get_settings)):
    """Setup screen options and map readiness."""
    return ConfigResponse(
        map_enabled=settings.map_enabled,
        map_api_key=settings.GOOGLE_MAPS_API_KEY,
        default_order=settings.DEFAULT_ROUND_ORDER,
        default_scale=settings.DEFAULT_SCORE_SCALE,
        scales=[
            ScaleOption(
                value=scale,
                label=profile.label,
                description=profile.description,
                scale_km=profile.scale_km,
                falloff=profile.falloff
            )
            for scale, profile in SCORE_PROFILES.items()
        ]
    )


def run() -> None:
    """Serve the API on the configured local address."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
