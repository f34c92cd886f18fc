"""Application settings with environment validation."""

import os
from typing import List


DEFAULT_CORS_DOMAINS = "claudeusercontent.com,biblefunland.com,anointedworshipcenter.com,localhost"


class Settings:
    """Application settings with environment validation."""

    def __init__(self) -> None:
        self.environment = os.getenv("ENV", "development")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.port = int(os.getenv("PORT", "3000"))

        # Storage
        self.storage_backend = self._parse_backend(os.getenv("STORAGE_BACKEND", "memory"))
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./awc.db")
        self.sql_debug = self._parse_bool(os.getenv("SQL_DEBUG", "false"))
        self.seed_demo_data = self._parse_bool(os.getenv("SEED_DEMO_DATA", "true"))

        # Security
        self.cors_allowed_domains = self._parse_list(
            os.getenv("CORS_ALLOWED_DOMAINS", DEFAULT_CORS_DOMAINS)
        )
        self.rate_limit_enabled = self._parse_bool(
            os.getenv("RATE_LIMIT_ENABLED", "true")
        )
        self.rate_limit_per_minute = int(os.getenv("RATE_LIMIT_PER_MINUTE", "120"))
        self.comment_rate_limit = int(os.getenv("COMMENT_RATE_LIMIT", "5"))
        self.comment_rate_window_seconds = int(
            os.getenv("COMMENT_RATE_WINDOW_SECONDS", "900")
        )
        self.request_timeout_seconds = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

        # Content rules
        self.submission_timezone = os.getenv("SUBMISSION_TIMEZONE", "UTC")
        self.testimony_max_length = int(os.getenv("TESTIMONY_MAX_LENGTH", "2000"))
        self.comment_max_length = int(os.getenv("COMMENT_MAX_LENGTH", "1000"))

        # Static site
        self.public_dir = os.getenv(
            "PUBLIC_DIR",
            os.path.join(os.path.dirname(__file__), "..", "..", "public"),
        )

    def _parse_list(self, v: str) -> List[str]:
        return [item.strip() for item in v.split(",") if item.strip()]

    def _parse_bool(self, v: str) -> bool:
        return v.lower() in ("true", "1", "yes", "on")

    def _parse_backend(self, v: str) -> str:
        backend = v.strip().lower()
        if backend in ("sql", "sqlite", "db"):
            backend = "database"
        if backend not in ("memory", "database"):
            raise ValueError(f"STORAGE_BACKEND must be 'memory' or 'database', got {v!r}")
        return backend

    @property
    def is_production(self) -> bool:  # convenience flag
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:  # convenience flag
        return self.environment.lower() == "development"

    @property
    def is_test(self) -> bool:
        return self.environment.lower() == "test"


settings = Settings()
