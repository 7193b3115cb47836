"""Add/edit dialog props."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gui.views.base import BaseView
from personal_info.models.schemas import PersonalInfoSchema

ADD_TITLE = "Add New Person"
EDIT_TITLE = "Edit Person"


@dataclass
class RecordFormProps(BaseView):
    name: str = "record_form"
    open: bool = False
    title: str = ADD_TITLE
    record: Optional[PersonalInfoSchema] = None
    # Staged preview first, stored photo otherwise
    image_src: Optional[str] = None
    avatar_text: str = "UP"
    upload_label: str = "Upload Photo"
    submit_label: str = "Save"
    error: Optional[str] = None
