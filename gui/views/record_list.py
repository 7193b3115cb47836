"""Record table props."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from gui.views.base import BaseView
from personal_info.models.schemas import PersonalInfoSchema


@dataclass(frozen=True)
class RecordRow:
    """One table row: photo, full name, date of birth, place of birth."""

    id: int
    full_name: str
    initials: str
    photo_url: Optional[str]
    date_of_birth: str
    place_of_birth: str

    @classmethod
    def from_record(cls, record: PersonalInfoSchema, photo_url: Optional[str]) -> "RecordRow":
        return cls(
            id=record.id,
            full_name=record.full_name,
            initials=record.initials,
            photo_url=photo_url,
            date_of_birth=record.date_of_birth.strftime("%m/%d/%Y"),
            place_of_birth=record.place_of_birth,
        )


@dataclass
class RecordListProps(BaseView):
    name: str = "records"
    rows: List[RecordRow] = field(default_factory=list)
    is_loading: bool = False
    search_query: str = ""
    error: Optional[str] = None
