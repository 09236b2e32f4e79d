# appbuilder/db/__init__.py
"""
Database module.
"""
from typing import Optional

from appbuilder.core.config import settings
from appbuilder.core.logging import log

# Motor client instance
_client = None
_db = None
_connection_error: Optional[str] = None


async def connect_db() -> bool:
    """
    Connect to MongoDB and initialize Beanie.

    If MongoDB is not available, stores the error for later retrieval
    rather than silently failing. Returns True when connected.
    """
    global _client, _db, _connection_error
    try:
        from motor.motor_asyncio import AsyncIOMotorClient
        from beanie import init_beanie
        from appbuilder.models import RequirementJobDocument

        _client = AsyncIOMotorClient(
            settings.db.mongodb_url,
            serverSelectionTimeoutMS=settings.db.server_selection_timeout_ms,
        )
        try:
            _db = _client.get_default_database()
        except Exception:
            _db = _client[settings.db.database_name]

        # Fails fast if MongoDB is not running
        await _client.admin.command("ping")
        log("DB", "✅ Connected to MongoDB")

        await init_beanie(database=_db, document_models=[RequirementJobDocument])
        log("DB", "✅ Beanie ODM Initialized")
        _connection_error = None
        return True
    except Exception as e:
        error_msg = str(e)
        log("DB", f"⚠️ MongoDB not available: {error_msg}")
        log("DB", "ℹ️ Jobs will be kept in memory for this process.")
        _client = None
        _db = None
        _connection_error = error_msg
        return False


async def disconnect_db():
    """Disconnect from MongoDB."""
    global _client, _db
    if _client:
        _client.close()
        _client = None
        _db = None
        log("DB", "Disconnected from MongoDB")


def is_connected() -> bool:
    """Check if database is connected."""
    return _db is not None


def get_connection_error() -> Optional[str]:
    """Get connection error message if connection failed."""
    return _connection_error
