# appbuilder/api/health.py
"""
Health check endpoints.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Request

from appbuilder.db import get_connection_error, is_connected

router = APIRouter(tags=["Health"])


@router.get("/healthz")
async def healthz():
    """Liveness probe."""
    return {"ok": True, "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/api/health")
async def api_health(request: Request):
    """Readiness details: job store backend and live generator presence."""
    lifecycle = request.app.state.lifecycle
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "jobStore": "mongodb" if is_connected() else "memory",
        "dbError": get_connection_error(),
        "liveGenerator": lifecycle.orchestrator.is_configured,
    }
