# appbuilder/core/config.py
"""
Application configuration - single source of truth for all settings.
"""
import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


# Value shipped in .env.example; treated the same as a missing key
PLACEHOLDER_API_KEY = "your_gemini_api_key_here"


@dataclass
class LLMSettings:
    """Live generator (Google Gemini) configuration."""
    gemini_api_key: Optional[str] = field(default_factory=lambda: os.getenv("GEMINI_API_KEY"))
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash-exp"))
    timeout_seconds: float = field(default_factory=lambda: float(os.getenv("GEMINI_TIMEOUT", "60")))
    temperature: float = 0.2
    max_tokens: int = 8000

    @property
    def is_configured(self) -> bool:
        """True when a usable API key is present."""
        key = (self.gemini_api_key or "").strip()
        return bool(key) and key != PLACEHOLDER_API_KEY


@dataclass
class JobSettings:
    """Job lifecycle and polling configuration."""
    poll_interval_seconds: float = field(default_factory=lambda: float(os.getenv("POLL_INTERVAL_SECONDS", "1.0")))
    poll_max_attempts: int = field(default_factory=lambda: int(os.getenv("POLL_MAX_ATTEMPTS", "30")))
    recent_jobs_limit: int = field(default_factory=lambda: int(os.getenv("RECENT_JOBS_LIMIT", "50")))


@dataclass
class DatabaseSettings:
    """MongoDB configuration. Jobs stay in memory unless USE_DB is on."""
    use_db: bool = field(default_factory=lambda: os.getenv("USE_DB", "false").lower() == "true")
    mongodb_url: str = field(default_factory=lambda: os.getenv("MONGODB_URL", "mongodb://localhost:27017"))
    database_name: str = field(default_factory=lambda: os.getenv("MONGODB_DB", "appbuilder"))
    server_selection_timeout_ms: int = 5000


@dataclass
class Settings:
    """Main application settings."""
    llm: LLMSettings = field(default_factory=LLMSettings)
    jobs: JobSettings = field(default_factory=JobSettings)
    db: DatabaseSettings = field(default_factory=DatabaseSettings)
    port: int = field(default_factory=lambda: int(os.getenv("PORT", 5000)))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    cors_origins: str = field(default_factory=lambda: os.getenv("CORS_ORIGINS", "*"))
    rate_limit: str = field(default_factory=lambda: os.getenv("RATE_LIMIT", "100/minute"))


# Singleton instance
settings = Settings()
