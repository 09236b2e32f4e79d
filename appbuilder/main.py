# appbuilder/main.py
"""
App Builder Backend - requirement extraction service
"""
import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

# Rate limiting
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from dotenv import load_dotenv
load_dotenv()

from appbuilder.core.config import settings
from appbuilder.core.logging import log, log_section
from appbuilder.db.job_store import MemoryJobStore, MongoJobStore
from appbuilder.orchestration.job_lifecycle import JobLifecycle
from appbuilder.orchestration.orchestrator import ExtractionOrchestrator

# Print environment status
print("🔑 Environment check:")
print(f"  GEMINI_API_KEY loaded: {settings.llm.is_configured}")
print(f"  Model: {settings.llm.gemini_model}")
print(f"  USE_DB: {settings.db.use_db}")


def build_lifecycle() -> JobLifecycle:
    """In-memory lifecycle; the lifespan swaps in MongoDB when enabled."""
    return JobLifecycle(MemoryJobStore(), ExtractionOrchestrator(settings.llm))


# ---------------------------------------------------------------------------
# LIFESPAN
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    log_section("STARTUP", "🚀 App Builder starting...")

    from appbuilder.db import connect_db, disconnect_db
    if settings.db.use_db and await connect_db():
        app.state.lifecycle.store = MongoJobStore()
        log("STARTUP", "Job store: MongoDB")
    else:
        log("STARTUP", "Job store: in-memory")

    yield

    print("🔌 Shutting down...")
    await app.state.lifecycle.drain()
    await disconnect_db()


# ---------------------------------------------------------------------------
# APP INITIALIZATION
# ---------------------------------------------------------------------------

app = FastAPI(
    title="App Builder",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.lifecycle = build_lifecycle()

# Monitoring
from appbuilder.lib.monitoring import register_monitoring
register_monitoring(app)

# CORS: comma-separated origins in CORS_ORIGINS
cors_origins = settings.cors_origins.split(",") if settings.cors_origins != "*" else ["*"]

if cors_origins == ["*"] and not settings.debug:
    print("⚠️ [CORS] Warning: Using allow_origins=['*'] - consider setting CORS_ORIGINS in production")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate Limiting - per client IP, RATE_LIMIT env var (e.g., "50/minute")
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
print(f"🛡️ [SECURITY] Rate limiting enabled: {settings.rate_limit}")


# ---------------------------------------------------------------------------
# API ROUTES
# ---------------------------------------------------------------------------

from appbuilder.api import health, requirements

app.include_router(health.router)
app.include_router(requirements.router)


# ---------------------------------------------------------------------------
# RUN
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "appbuilder.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        reload_dirs=["appbuilder"],
    )
