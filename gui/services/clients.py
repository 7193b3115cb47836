"""Client factories for the GUI layer."""

from __future__ import annotations

from typing import Optional

from personal_info.api_client import PersonalInfoClient
from personal_info.config import Settings


def get_api_client(settings: Optional[Settings] = None) -> PersonalInfoClient:
    """Return a personal information API client."""

    return PersonalInfoClient(settings=settings)
