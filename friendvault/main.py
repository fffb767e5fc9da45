import logging
import sys
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from friendvault.config import settings
from friendvault.database import engine
from friendvault.models import Base

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

# Initialize Sentry
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.2 if settings.ENVIRONMENT == "production" else 1.0,
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: verify DB connection and create tables
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        if settings.CREATE_TABLES:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready")

    yield

    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="FriendVault API",
    version="0.1.0",
    lifespan=lifespan,
)

# Middleware
from friendvault.middleware.request_logging import RequestLoggingMiddleware  # noqa: E402

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

from friendvault.middleware.error_handler import register_error_handlers  # noqa: E402

register_error_handlers(app)

# Routers
from friendvault.routers.secrets import router as secrets_router  # noqa: E402
from friendvault.routers.social import router as social_router  # noqa: E402
from friendvault.routers.users import router as users_router  # noqa: E402

app.include_router(users_router)
app.include_router(secrets_router)
app.include_router(social_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/")
async def root():
    return "Hello from FriendVault!"
