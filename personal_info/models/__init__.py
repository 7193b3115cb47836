"""Data schemas and validation."""
from .schemas import PersonalInfoSchema, PersonalInfoFields, RecordListResponse

__all__ = [
    "PersonalInfoSchema",
    "PersonalInfoFields",
    "RecordListResponse",
]
