# correspondence_tracker/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from correspondence_tracker.core.config import settings
from correspondence_tracker.core.db import init_db
from correspondence_tracker.utils.logger import setup_app_logging, get_logger
# Local application imports - Routes
from correspondence_tracker.users.router import router as user_routes
from correspondence_tracker.departments.router import router as department_routes
from correspondence_tracker.correspondence.router import router as correspondence_routes
from correspondence_tracker.comments.router import router as comment_routes
from correspondence_tracker.activity_log.router import router as activity_log_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create tables on start-up when running against SQLite
    """
    if settings.is_sqlite:
        init_db()
    yield


# Create the FastAPI app
app = FastAPI(
    title=f"{settings.app_name} - {settings.environment}",
    description="Correspondence tracking API",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure logging
setup_app_logging(
    app,
    log_level=settings.log_level,
    use_json=settings.log_json or settings.environment.lower() == "production",
    log_file=settings.log_file,
    app_name=settings.app_name,
    environment=settings.environment,
)
logger = get_logger(__name__)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(user_routes)
app.include_router(department_routes)
app.include_router(correspondence_routes)
app.include_router(comment_routes)
app.include_router(activity_log_routes)


# Root API to check if the server is up
@app.get("/", tags=["Base"])
async def health_check():
    """
    Root API to check if the server is up
    """
    logger.info("Calling root API for testing")
    return {"status": "ok"}
