"""Shared fixtures: sample records and an in-memory stand-in for the API."""

import io
import os
import sys
from datetime import date
from typing import Dict, List, Optional

import pytest
from PIL import Image

# Ensure project root is on path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from personal_info.config import Settings  # noqa: E402
from personal_info.errors import TransportError  # noqa: E402
from personal_info.models.schemas import PersonalInfoFields, PersonalInfoSchema  # noqa: E402


def make_record(record_id: int, first_name: str, last_name: str, city: str, **extra) -> PersonalInfoSchema:
    data = {
        "id": record_id,
        "first_name": first_name,
        "last_name": last_name,
        "email": f"{first_name.lower()}@example.com",
        "date_of_birth": "1815-12-10",
        "city": city,
        "state": "Greater London",
        "country": "UK",
        "image": None,
    }
    data.update(extra)
    return PersonalInfoSchema.model_validate(data)


class FakeServer:
    """Stands in for PersonalInfoClient, keeping records in memory.

    Set `fail_next` to an exception to make the next call raise it, or
    `fail_next_list` to fail only the next collection read. With
    `echo_records` off, create and update answer like a server that only
    sends a status message.
    """

    def __init__(self, records: List[PersonalInfoSchema], settings: Optional[Settings] = None):
        self.records: Dict[int, PersonalInfoSchema] = {r.id: r for r in records}
        self.settings = settings or Settings(api_url="http://api.test/api", base_url="http://api.test/")
        self.next_id = max(self.records, default=0) + 1
        self.fail_next: Optional[Exception] = None
        self.fail_next_list: Optional[Exception] = None
        self.echo_records = True
        self.calls: List[tuple] = []

    def _maybe_fail(self):
        if self.fail_next is not None:
            exc, self.fail_next = self.fail_next, None
            raise exc

    def list_records(self):
        self.calls.append(("list",))
        self._maybe_fail()
        if self.fail_next_list is not None:
            exc, self.fail_next_list = self.fail_next_list, None
            raise exc
        return list(self.records.values())

    def create_record(self, fields: PersonalInfoFields, image=None):
        self.calls.append(("create", fields, image))
        self._maybe_fail()
        record = PersonalInfoSchema(
            id=self.next_id,
            image=f"images/{image.filename}" if image else None,
            **fields.model_dump(),
        )
        self.records[record.id] = record
        self.next_id += 1
        return record if self.echo_records else None

    def update_record(self, record_id: int, fields: PersonalInfoFields, image=None):
        self.calls.append(("update", record_id, fields, image))
        self._maybe_fail()
        if record_id not in self.records:
            raise TransportError(f"record {record_id} not found", status_code=404)
        current = self.records[record_id]
        record = PersonalInfoSchema(
            id=record_id,
            image=f"images/{image.filename}" if image else current.image,
            **fields.model_dump(),
        )
        self.records[record_id] = record
        return record if self.echo_records else None

    def delete_record(self, record_id: int):
        self.calls.append(("delete", record_id))
        self._maybe_fail()
        self.records.pop(record_id, None)

    def image_url(self, image):
        if not image:
            return None
        return f"{self.settings.storage_url}{image}"


@pytest.fixture()
def sample_records():
    return [
        make_record(1, "Ada", "Lovelace", "London"),
        make_record(2, "Alan", "Turing", "Maida Vale", image="images/alan.png"),
        make_record(3, "Grace", "Hopper", "New York", state="NY", country="USA"),
    ]


@pytest.fixture()
def server(sample_records):
    return FakeServer(sample_records)


@pytest.fixture()
def new_fields():
    return PersonalInfoFields(
        first_name="Katherine",
        last_name="Johnson",
        email="katherine@example.com",
        date_of_birth=date(1918, 8, 26),
        city="White Sulphur Springs",
        state="WV",
        country="USA",
    )


@pytest.fixture()
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (640, 480), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def record_factory():
    return make_record
