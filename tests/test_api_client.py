"""
Tests for the REST client.
The HTTP session is mocked; no network access is required.
"""

import json
import threading
from unittest.mock import MagicMock

import pytest
import requests

from personal_info.api_client import PersonalInfoClient, StagedImage
from personal_info.config import Settings
from personal_info.errors import DecodeError, TransportError, ValidationError

RECORD = {
    "id": 7,
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "date_of_birth": "1815-12-10",
    "city": "London",
    "state": "Greater London",
    "country": "UK",
    "image": "images/ada.png",
}


def _response(status: int, body=None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    if body is None:
        resp._content = b""
    elif isinstance(body, bytes):
        resp._content = body
    else:
        resp._content = json.dumps(body).encode("utf-8")
    return resp


@pytest.fixture()
def session():
    sess = MagicMock()
    sess.headers = {}
    return sess


@pytest.fixture()
def client(session):
    settings = Settings(api_url="http://api.test/api/", base_url="http://api.test")
    return PersonalInfoClient(settings=settings, session_factory=lambda: session)


def _parts(session):
    return dict(session.request.call_args.kwargs["files"])


# ===========================================================================
# Requests
# ===========================================================================


class TestRequests:
    def test_sets_json_accept_header(self, client, session):
        assert client.session is session
        assert session.headers["Accept"] == "application/json"

    def test_list_records_unwraps_sql_data(self, client, session):
        session.request.return_value = _response(200, {"sql_data": [RECORD]})

        records = client.list_records()

        assert [r.id for r in records] == [7]
        method, url = session.request.call_args.args
        assert (method, url) == ("GET", "http://api.test/api/personal-information")
        assert session.request.call_args.kwargs["timeout"] == client.settings.request_timeout

    def test_create_sends_multipart_fields_and_image(self, client, session, new_fields):
        session.request.return_value = _response(201, RECORD)
        image = StagedImage("ada.png", b"\x89PNG", "image/png")

        record = client.create_record(new_fields, image)

        assert record.id == 7
        method, url = session.request.call_args.args
        assert (method, url) == ("POST", "http://api.test/api/personal-information")
        parts = _parts(session)
        assert parts["first_name"] == (None, "Katherine")
        assert parts["date_of_birth"] == (None, "1918-08-26")
        assert parts["image"] == ("ada.png", b"\x89PNG", "image/png")
        assert "_method" not in parts

    def test_update_posts_with_put_override(self, client, session, new_fields):
        session.request.return_value = _response(200, {"data": RECORD})

        record = client.update_record(7, new_fields)

        assert record.first_name == "Ada"
        method, url = session.request.call_args.args
        assert (method, url) == ("POST", "http://api.test/api/personal-information/7")
        parts = _parts(session)
        assert parts["_method"] == (None, "PUT")
        assert "image" not in parts

    def test_delete_accepts_empty_body(self, client, session):
        session.request.return_value = _response(204)

        assert client.delete_record(7) is None
        method, url = session.request.call_args.args
        assert (method, url) == ("DELETE", "http://api.test/api/personal-information/7")


# ===========================================================================
# Mutation response bodies
# ===========================================================================


class TestMutationBodies:
    def test_create_accepts_message_body(self, client, session, new_fields):
        session.request.return_value = _response(
            201, {"message": "Personal information created successfully"}
        )

        assert client.create_record(new_fields) is None

    def test_update_accepts_non_json_body(self, client, session, new_fields):
        session.request.return_value = _response(200, b"OK")

        assert client.update_record(7, new_fields) is None

    def test_create_accepts_empty_body(self, client, session, new_fields):
        session.request.return_value = _response(201)

        assert client.create_record(new_fields) is None

    def test_rejected_mutation_still_raises(self, client, session, new_fields):
        session.request.return_value = _response(500, {"message": "boom"})

        with pytest.raises(TransportError):
            client.create_record(new_fields)


# ===========================================================================
# Sessions
# ===========================================================================


class TestSessions:
    def test_each_thread_gets_its_own_session(self):
        factory = MagicMock(side_effect=lambda: MagicMock(headers={}))
        client = PersonalInfoClient(settings=Settings(), session_factory=factory)
        seen = []

        worker = threading.Thread(target=lambda: seen.append(client.session))
        worker.start()
        worker.join()

        main_session = client.session
        assert client.session is main_session
        assert seen[0] is not main_session
        assert factory.call_count == 2


# ===========================================================================
# Error mapping
# ===========================================================================


class TestErrors:
    def test_connection_error_is_transport_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError) as exc_info:
            client.list_records()
        assert exc_info.value.status_code is None

    def test_non_2xx_is_transport_error(self, client, session):
        session.request.return_value = _response(500, {"message": "boom"})

        with pytest.raises(TransportError) as exc_info:
            client.delete_record(1)
        assert exc_info.value.status_code == 500

    def test_422_is_validation_error_with_field_messages(self, client, session, new_fields):
        session.request.return_value = _response(
            422, {"message": "invalid", "errors": {"email": ["The email has already been taken."]}}
        )

        with pytest.raises(ValidationError) as exc_info:
            client.create_record(new_fields)
        assert exc_info.value.errors == {"email": ["The email has already been taken."]}
        assert isinstance(exc_info.value, TransportError)

    def test_malformed_json_is_decode_error(self, client, session):
        session.request.return_value = _response(200, b"<html>oops</html>")

        with pytest.raises(DecodeError):
            client.list_records()

    def test_wrong_shape_is_decode_error(self, client, session):
        session.request.return_value = _response(200, {"records": []})

        with pytest.raises(DecodeError):
            client.list_records()


# ===========================================================================
# Image URLs
# ===========================================================================


class TestImageUrl:
    def test_resolves_against_storage_root(self, client):
        assert client.image_url("images/ada.png") == "http://api.test/storage/images/ada.png"

    def test_missing_image_has_no_url(self, client):
        assert client.image_url(None) is None
        assert client.image_url("") is None
