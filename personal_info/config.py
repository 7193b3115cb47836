"""Centralized configuration loading.

Loads environment variables once and provides a typed Settings object
for the rest of the codebase. The API and static asset URLs are fixed per
deployment; substitute them through the environment or a .env file.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv


# Load .env once at import time
load_dotenv()


@dataclass
class Settings:
    # REST API root (collection lives at <api_url>/personal-information)
    api_url: str = os.getenv("PI_API_URL", "http://localhost:8000/api")

    # Static assets; uploaded photos are served from <base_url>storage/
    base_url: str = os.getenv("PI_BASE_URL", "http://localhost:8000/")

    # HTTP
    request_timeout: float = float(os.getenv("PI_REQUEST_TIMEOUT", "10"))

    # Logging
    log_level: str = os.getenv("PI_LOG_LEVEL", "INFO")

    @property
    def storage_url(self) -> str:
        base = self.base_url if self.base_url.endswith("/") else self.base_url + "/"
        return f"{base}storage/"


def get_settings() -> Settings:
    """Return a new Settings instance (cheap dataclass construction)."""
    return Settings()
