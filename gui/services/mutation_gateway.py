"""Mutation gateway: turns add/edit/delete intents into API calls.

Each operation makes exactly one API call and succeeds on any 2xx status,
whatever the response body holds. On success the record store is
refreshed from the server (the response itself is never merged locally)
and the dialog that issued the mutation is closed. On failure the error is
logged and kept in `last_error`, and neither the store nor the dialog is
touched, so the user can retry with their input intact.

In-flight mutations are never cancelled. If the originating dialog was
closed (or replaced) while the call was outstanding, the success path
leaves the current dialog alone.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Optional, Set, Tuple

from gui.services.record_store import RecordStore
from gui.state import DialogCoordinator
from gui.utils.async_tasks import run_async
from gui.utils.logging import log
from personal_info.api_client import PersonalInfoClient, StagedImage
from personal_info.errors import PersonalInfoError
from personal_info.models.schemas import PersonalInfoFields, PersonalInfoSchema

NEW_RECORD = "new"


class MutationInFlightError(PersonalInfoError):
    """A mutation for the same target is still outstanding."""


class MutationGateway:
    def __init__(self, client: PersonalInfoClient, store: RecordStore, dialogs: DialogCoordinator):
        self._client = client
        self._store = store
        self._dialogs = dialogs
        self._in_flight: Set[Hashable] = set()
        self.last_error: Optional[PersonalInfoError] = None
        self.last_record: Optional[PersonalInfoSchema] = None

    def is_pending(self, target: Hashable) -> bool:
        return target in self._in_flight

    async def _mutate(self, target: Hashable, label: str, call: Callable[[], Any]) -> Tuple[bool, Any]:
        if target in self._in_flight:
            self.last_error = MutationInFlightError(f"{label} already in progress for {target}")
            log(f"Rejected {label}: mutation for {target} still in flight", logging.WARNING)
            return False, None

        origin = self._dialogs.state
        self._in_flight.add(target)
        try:
            result = await run_async(call)
        except PersonalInfoError as exc:
            self.last_error = exc
            log(f"Error during {label}: {exc}", logging.ERROR)
            return False, None
        finally:
            self._in_flight.discard(target)

        self.last_error = None
        await self._store.refresh()
        self._dialogs.close_if(origin)
        return True, result

    async def create(self, fields: PersonalInfoFields, image: Optional[StagedImage] = None) -> bool:
        """Create a record; True once the server accepted it.

        The echoed record, when the server sends one, is kept in
        `last_record`.
        """
        ok, self.last_record = await self._mutate(
            NEW_RECORD, "create", lambda: self._client.create_record(fields, image)
        )
        return ok

    async def update(
        self, record_id: int, fields: PersonalInfoFields, image: Optional[StagedImage] = None
    ) -> bool:
        """Replace record `record_id`; True once the server accepted it."""
        ok, self.last_record = await self._mutate(
            record_id, "update", lambda: self._client.update_record(record_id, fields, image)
        )
        return ok

    async def remove(self, record_id: int) -> bool:
        """Delete record `record_id`; True on success."""
        ok, _ = await self._mutate(
            record_id, "delete", lambda: self._client.delete_record(record_id)
        )
        self.last_record = None
        return ok
