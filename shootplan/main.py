from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import structlog

from shootplan.config import get_settings
from shootplan.api.routes import schedules
from shootplan.db.client import get_supabase_client
from shootplan.scheduling.config import get_scheduler_config

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: invalid scheduler constants abort here
    scheduler_config = get_scheduler_config()
    settings = get_settings()
    logger.info(
        "Starting Shoot Plan...",
        daily_cap_minutes=scheduler_config.daily_cap_minutes,
        shooting_ratio=scheduler_config.shooting_ratio,
        registry=settings.location_registry_url or "location names",
    )
    if settings.cache_enabled:
        get_supabase_client()
        logger.info("Supabase client initialized")
    yield
    # Shutdown
    logger.info("Shutting down Shoot Plan...")


app = FastAPI(
    title="Shoot Plan",
    description="Shooting-schedule optimizer for film production",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(schedules.router)


@app.get("/")
async def root():
    return {"message": "Shoot Plan API", "version": "0.1.0"}


@app.get("/health")
async def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("shootplan.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
