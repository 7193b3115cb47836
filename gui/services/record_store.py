"""Record store: the canonical in-memory list of records.

The list is always a verbatim snapshot of the last successful server read.
Both the initial load and every post-mutation refresh replace the whole
snapshot in a single assignment, so readers see either the old list or the
new one, never a mix.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence, Set, Tuple

from gui.utils.async_tasks import run_async
from gui.utils.logging import log
from personal_info.api_client import PersonalInfoClient
from personal_info.errors import DecodeError, PersonalInfoError
from personal_info.models.schemas import PersonalInfoSchema


class StoreStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"


class RecordStore:
    """Owns the record list fetched from the API."""

    def __init__(self, client: PersonalInfoClient):
        self._client = client
        self._records: Tuple[PersonalInfoSchema, ...] = ()
        self.status = StoreStatus.UNINITIALIZED
        # True until the first load attempt settles
        self.is_loading = True
        self.last_error: Optional[PersonalInfoError] = None

    @property
    def records(self) -> Tuple[PersonalInfoSchema, ...]:
        return self._records

    def get(self, record_id: int) -> Optional[PersonalInfoSchema]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    async def load(self) -> bool:
        """Fetch the full collection and replace the snapshot.

        Returns False (keeping the previous snapshot) on transport or
        decode failure, including a collection that repeats a record id.
        """
        try:
            records = await run_async(self._client.list_records)
            _check_unique_ids(records)
        except PersonalInfoError as exc:
            self.last_error = exc
            log(f"Error fetching records: {exc}", logging.ERROR)
            return False
        finally:
            self.is_loading = False

        self._records = tuple(records)
        self.status = StoreStatus.LOADED
        self.last_error = None
        log(f"Loaded {len(self._records)} records")
        return True

    async def refresh(self) -> bool:
        """Re-read server truth after a mutation."""
        return await self.load()


def _check_unique_ids(records: Sequence[PersonalInfoSchema]) -> None:
    seen: Set[int] = set()
    for record in records:
        if record.id in seen:
            raise DecodeError(f"Record id {record.id} appears more than once")
        seen.add(record.id)
