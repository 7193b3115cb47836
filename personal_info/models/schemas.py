"""Pydantic schemas to validate API payloads.

These schemas act as contracts at ingress points so we fail fast when
the server's payloads change shape. Field names follow the wire format
(snake_case) so records round-trip without aliasing.
"""
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

REQUIRED_TEXT_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "city",
    "state",
    "country",
)


def _coerce_date(value):
    # The API may serialize dates as full timestamps ("1815-12-10T00:00:00Z").
    if isinstance(value, str) and len(value) > 10 and value[4] == "-":
        return value[:10]
    return value


class PersonalInfoSchema(BaseModel):
    """One personal information record as returned by the API."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    first_name: str
    last_name: str
    email: str
    date_of_birth: date
    city: str
    state: str
    country: str
    image: Optional[str] = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return _coerce_date(v)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    @property
    def place_of_birth(self) -> str:
        return f"{self.city}, {self.state}, {self.country}"


class PersonalInfoFields(BaseModel):
    """The field set submitted by the add/edit form."""

    first_name: str
    last_name: str
    email: str
    date_of_birth: date
    city: str
    state: str
    country: str

    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def text_nonempty(cls, v: str, info) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} is required")
        return v.strip()

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return _coerce_date(v)

    @classmethod
    def from_record(cls, record: PersonalInfoSchema) -> "PersonalInfoFields":
        return cls(**record.model_dump(exclude={"id", "image"}))

    def to_form(self) -> Dict[str, str]:
        """Multipart form fields, dates rendered as ISO-8601."""
        data = self.model_dump()
        data["date_of_birth"] = self.date_of_birth.isoformat()
        return data


class RecordListResponse(BaseModel):
    """Envelope returned by `GET /personal-information`."""

    sql_data: List[PersonalInfoSchema]
