# tests/conftest.py
"""
Shared pytest fixtures for App Builder tests.

Provides:
- Sample descriptions and generator payloads
- Lifecycle over an in-memory store with the mock-only orchestrator
- Async HTTP client bound to the FastAPI app
"""
import copy
import os
from typing import Any, Dict

import pytest
from httpx import AsyncClient, ASGITransport

# Keep the limiter out of the way of the API tests
os.environ.setdefault("RATE_LIMIT", "10000/minute")

from appbuilder.core.config import LLMSettings
from appbuilder.db.job_store import MemoryJobStore
from appbuilder.orchestration.job_lifecycle import JobLifecycle
from appbuilder.orchestration.orchestrator import ExtractionOrchestrator


# ═══════════════════════════════════════════════════════
# FIXTURES - Descriptions
# ═══════════════════════════════════════════════════════

@pytest.fixture
def course_description():
    return "I want an app to manage student courses and grades. Teachers add courses, students enroll."


@pytest.fixture
def inventory_description():
    return "Track inventory of products, sales and suppliers"


@pytest.fixture
def generic_description():
    return "A simple tool to keep notes"


# ═══════════════════════════════════════════════════════
# FIXTURES - Generator payloads
# ═══════════════════════════════════════════════════════

VALID_LIVE_SPEC: Dict[str, Any] = {
    "appName": "Clinic Scheduler",
    "entities": [
        {"name": "Patient", "fields": [{"name": "Name", "type": "text", "required": True}]},
        {"name": "Appointment", "fields": [{"name": "Date", "type": "date", "required": True}]},
    ],
    "roles": ["Doctor", "Receptionist"],
    "features": ["Book appointment", "View schedule"],
    "rolePermissions": [
        {
            "role": "Doctor",
            "canCreate": ["Appointment"],
            "canView": ["Patient", "Appointment"],
            "canEdit": ["Appointment"],
        },
        {
            "role": "Receptionist",
            "canCreate": ["Patient", "Appointment"],
            "canView": ["Patient", "Appointment"],
            "canEdit": ["Patient"],
        },
    ],
}


@pytest.fixture
def valid_live_spec():
    """Generator output in list-of-records form that survives the pipeline."""
    return copy.deepcopy(VALID_LIVE_SPEC)


@pytest.fixture
def manager_employee_spec():
    """Normalized spec where nobody can edit and Manager has no entry."""
    return {
        "appName": "Shop",
        "entities": [{"name": "Product", "fields": []}, {"name": "Sale", "fields": []}],
        "roles": ["Manager", "Employee"],
        "features": [],
        "rolePermissions": {
            "Employee": {"canCreate": [], "canView": ["Product"], "canEdit": []},
        },
    }


# ═══════════════════════════════════════════════════════
# FIXTURES - Lifecycle / API
# ═══════════════════════════════════════════════════════

@pytest.fixture
def mock_orchestrator():
    """Orchestrator with no live generator: every extraction uses the mock."""
    return ExtractionOrchestrator(LLMSettings(gemini_api_key=None))


@pytest.fixture
def memory_store():
    return MemoryJobStore()


@pytest.fixture
async def lifecycle(memory_store, mock_orchestrator):
    lc = JobLifecycle(memory_store, mock_orchestrator)
    yield lc
    await lc.drain()


@pytest.fixture
async def async_client(lifecycle):
    """Async HTTP client for testing FastAPI endpoints against a fresh lifecycle."""
    from appbuilder.main import app

    previous = app.state.lifecycle
    app.state.lifecycle = lifecycle
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as client:
        yield client
    app.state.lifecycle = previous
