"""Main GUI application object.

`PersonalInfoApp` wires the client core together (API client, record store,
image staging buffer, dialog coordinator, mutation gateway) and exposes
the intents the views fire plus the props they render. Rendering itself
belongs to the presentation layer.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Mapping, Optional

from pydantic import ValidationError as SchemaValidationError

from gui.services.clients import get_api_client
from gui.services.image_staging import ImagePreview, ImageStagingBuffer
from gui.services.mutation_gateway import MutationGateway
from gui.services.record_store import RecordStore
from gui.services.search_service import filter_records
from gui.state import AddOpen, AppState, DeleteOpen, DialogCoordinator, EditOpen
from gui.utils.logging import log
from gui.views.delete_confirm import DeleteConfirmProps
from gui.views.record_form import ADD_TITLE, EDIT_TITLE, RecordFormProps
from gui.views.record_list import RecordListProps, RecordRow
from personal_info.api_client import PersonalInfoClient
from personal_info.config import Settings, get_settings
from personal_info.models.schemas import PersonalInfoFields, PersonalInfoSchema
from personal_info.utils.logger import setup_logging


class PersonalInfoApp:
    """Record management app shell."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[PersonalInfoClient] = None):
        self.settings = settings or get_settings()
        self.client = client or get_api_client(self.settings)
        self.images = ImageStagingBuffer()
        self.state = AppState(dialogs=DialogCoordinator(on_close=self._on_dialog_closed))
        self.store = RecordStore(self.client)
        self.gateway = MutationGateway(self.client, self.store, self.state.dialogs)
        self.form_values: Dict[str, str] = {}
        self.form_error: Optional[str] = None

    @property
    def dialogs(self) -> DialogCoordinator:
        return self.state.dialogs

    def _on_dialog_closed(self) -> None:
        self.images.clear()
        self.form_values = {}
        self.form_error = None
        self.gateway.last_error = None

    # ---- Loading & search -------------------------------------------------

    async def start(self) -> bool:
        return await self.store.load()

    def set_search_query(self, query: str) -> None:
        self.state.search_query = query

    def visible_records(self) -> List[PersonalInfoSchema]:
        return filter_records(self.store.records, self.state.search_query)

    # ---- Dialog intents ---------------------------------------------------

    def _require_record(self, record_id: int) -> PersonalInfoSchema:
        record = self.store.get(record_id)
        if record is None:
            raise KeyError(f"No record with id {record_id}")
        return record

    def request_add(self) -> None:
        self.dialogs.open_add()
        self.form_values = {}

    def request_edit(self, record_id: int) -> None:
        record = self._require_record(record_id)
        self.dialogs.open_edit(record)
        self.form_values = PersonalInfoFields.from_record(record).to_form()

    def request_delete(self, record_id: int) -> None:
        self.dialogs.open_delete(self._require_record(record_id))

    def cancel_dialog(self) -> None:
        self.dialogs.cancel()

    def change_field(self, name: str, value: str) -> None:
        self.form_values[name] = value

    async def change_image(
        self, data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None
    ) -> Optional[ImagePreview]:
        if not isinstance(self.dialogs.state, (AddOpen, EditOpen)):
            log("Image change ignored: no form dialog open", logging.WARNING)
            return None
        return await self.images.stage(data, filename, content_type, owner=self.dialogs.state)

    async def submit_form(self, values: Optional[Mapping[str, str]] = None) -> bool:
        """Create or update depending on the open dialog.

        Entered values stay in `form_values` when the submission fails.
        """
        dialog = self.dialogs.state
        if not isinstance(dialog, (AddOpen, EditOpen)):
            log("Submit ignored: no form dialog open", logging.WARNING)
            return False

        if values:
            self.form_values.update(values)
        try:
            fields = PersonalInfoFields.model_validate(self.form_values)
        except SchemaValidationError as exc:
            self.form_error = "Please fill in all required fields"
            log(f"Form incomplete: {exc.error_count()} field error(s)", logging.WARNING)
            return False

        image = self.images.staged_image()
        if isinstance(dialog, EditOpen):
            ok = await self.gateway.update(dialog.record.id, fields, image)
        else:
            ok = await self.gateway.create(fields, image)

        if not ok:
            self.form_error = str(self.gateway.last_error)
            return False
        return True

    async def confirm_delete(self) -> bool:
        dialog = self.dialogs.state
        if not isinstance(dialog, DeleteOpen):
            log("Delete confirm ignored: no delete dialog open", logging.WARNING)
            return False
        return await self.gateway.remove(dialog.record.id)

    # ---- View props -------------------------------------------------------

    def list_view_props(self) -> RecordListProps:
        error = self.store.last_error
        return RecordListProps(
            rows=[
                RecordRow.from_record(r, self.client.image_url(r.image))
                for r in self.visible_records()
            ],
            is_loading=self.store.is_loading,
            search_query=self.state.search_query,
            error=str(error) if error else None,
        )

    def form_dialog_props(self) -> RecordFormProps:
        dialog = self.dialogs.state
        if not isinstance(dialog, (AddOpen, EditOpen)):
            return RecordFormProps(open=False)

        preview = self.images.preview
        if isinstance(dialog, EditOpen):
            record = dialog.record
            return RecordFormProps(
                open=True,
                title=EDIT_TITLE,
                record=record,
                image_src=preview.data_uri if preview else self.client.image_url(record.image),
                avatar_text=record.initials,
                upload_label="Update Photo",
                submit_label="Save Changes",
                error=self.form_error,
            )
        return RecordFormProps(
            open=True,
            image_src=preview.data_uri if preview else None,
            error=self.form_error,
        )

    def delete_dialog_props(self) -> DeleteConfirmProps:
        dialog = self.dialogs.state
        if not isinstance(dialog, DeleteOpen):
            return DeleteConfirmProps(open=False)
        error = self.gateway.last_error
        return DeleteConfirmProps(
            open=True,
            person_name=dialog.record.full_name,
            error=str(error) if error else None,
        )


async def _run(app: PersonalInfoApp) -> None:
    if await app.start():
        log(f"Loaded {len(app.store.records)} records from {app.settings.api_url}")
    else:
        log(f"Could not load records from {app.settings.api_url}", logging.ERROR)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    asyncio.run(_run(PersonalInfoApp(settings=settings)))
