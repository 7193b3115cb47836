"""
Personal Information Admin - record management client

Search, add, edit and delete personal information records held by a
remote REST API.
"""

__version__ = "1.0.0"

# Only import the REST client by default; the GUI core lives in `gui`.
from .api_client import PersonalInfoClient, StagedImage

__all__ = [
    "PersonalInfoClient",
    "StagedImage",
]
