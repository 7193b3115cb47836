"""Delete confirmation dialog props."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gui.views.base import BaseView


@dataclass
class DeleteConfirmProps(BaseView):
    name: str = "delete_confirm"
    open: bool = False
    person_name: str = ""
    error: Optional[str] = None

    @property
    def message(self) -> str:
        return (
            f"Are you sure you want to delete the record for {self.person_name}? "
            "This action cannot be undone."
        )
