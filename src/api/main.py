"""FastAPI application entry point."""

import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add src to path
# main.py is at /app/src/api/main.py
# src is at /app/src, so we go up 2 levels
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from adapter.jwt.token_issuer import JwtTokenIssuer
from adapter.mongodb.connection import MongoConnection
from adapter.mongodb.indexes import ensure_all_indexes
from api.exception_handlers import setup_exception_handlers
from api.routes import health, tasks, users
from services.password_hasher import PasswordHasher
from utils.config import get_settings
from utils.logging import setup_structured_logging

SERVICE_NAME = "TaskTrack API"

# Fails fast on a missing JWT_SECRET_KEY
settings = get_settings()

setup_structured_logging(level=settings.log_level, service=SERVICE_NAME)

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open MongoDB, ensure indexes, close on shutdown."""
    mongo = MongoConnection(settings.mongo_url, settings.database_name)
    app.state.mongo = mongo

    if mongo.open():
        try:
            indexes_ok = ensure_all_indexes(mongo.database)
        except RuntimeError:
            logger.critical("Unique email index missing, aborting startup")
            mongo.close()
            raise
        if indexes_ok:
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, requests needing the database will get 503")

    yield  # App runs here

    mongo.close()


app = FastAPI(
    title=SERVICE_NAME,
    description="Task management API with JWT authentication",
    version=VERSION,
    lifespan=lifespan,
)

app.state.settings = settings
app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
app.state.token_issuer = JwtTokenIssuer(
    settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    expires_in=timedelta(days=settings.jwt_expiration_days),
)

# Credentials cannot be combined with a wildcard origin
if settings.cors_origins == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in settings.cors_origins.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

app.include_router(users.router)
app.include_router(tasks.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        access_log=False  # structured app logs cover requests
    )
