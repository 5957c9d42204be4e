"""
Configuration settings for the Users Backend
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List


@dataclass
class Settings:
    """Environment-driven service configuration"""

    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", ""))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    cors_allow_origin: str = field(default_factory=lambda: os.getenv("CORS_ALLOW_ORIGIN", "*"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if not self.database_url:
            errors.append("DATABASE_URL environment variable is required")
        if not 0 < self.port < 65536:
            errors.append(f"PORT must be between 1 and 65535, got {self.port}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"LOG_LEVEL is not a known logging level: {self.log_level}")

        return errors


def get_settings() -> Settings:
    """Get validated settings from the environment"""
    settings = Settings()
    errors = settings.validate()

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return settings
