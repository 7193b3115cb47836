"""
Personal Information API Client - CRUD calls against the records REST API.

The deployed API only routes GET/POST/DELETE, so updates are sent as a POST
carrying a `_method=PUT` override field. Callers see a single
`update_record` operation.

Mutations succeed on any 2xx status. Their response body is informational
only: callers reload the collection afterwards, so a body that is not a
record is logged and reported as None rather than raised.
"""
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
from pydantic import ValidationError as SchemaValidationError

from .config import Settings, get_settings
from .errors import DecodeError, TransportError, ValidationError
from .models.schemas import PersonalInfoFields, PersonalInfoSchema, RecordListResponse
from .utils.logger import get_logger

COLLECTION_PATH = "/personal-information"
METHOD_OVERRIDE_FIELD = "_method"

logger = get_logger(__name__)


@dataclass(frozen=True)
class StagedImage:
    """An image file ready to be sent as the `image` multipart field."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class PersonalInfoClient:
    """
    Client for the personal information REST API.

    Provides methods to:
    - List records
    - Create a record (multipart, optional photo)
    - Update a record (override-tagged POST)
    - Delete a record
    - Resolve stored photo paths to URLs

    Calls run on worker threads, and `requests.Session` is not documented
    as thread-safe, so each thread gets its own session from
    `session_factory`.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        """
        Initialize the API client.

        Args:
            settings: Settings instance (loaded from the environment if not provided)
            session_factory: Builds a requests.Session for each worker thread
                (defaults to `requests.Session`)
        """
        self.settings = settings or get_settings()
        self._session_factory = session_factory or requests.Session
        self._local = threading.local()

    @property
    def api_url(self) -> str:
        return self.settings.api_url.rstrip("/")

    @property
    def session(self) -> requests.Session:
        """The calling thread's session."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            session.headers.update({"Accept": "application/json"})
            self._local.session = session
        return session

    def _send(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make an API request and check its status.

        Args:
            method: HTTP method (GET, POST, DELETE)
            endpoint: API endpoint path
            **kwargs: Additional arguments for requests

        Returns:
            The 2xx response

        Raises:
            TransportError: network failure or non-2xx status
            ValidationError: the server rejected the payload (422)
        """
        url = f"{self.api_url}{endpoint}"
        kwargs.setdefault("timeout", self.settings.request_timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if response.status_code == 422:
            errors = {}
            try:
                body = response.json()
                if isinstance(body, dict):
                    errors = body.get("errors") or {}
            except ValueError:
                pass
            raise ValidationError(f"{method} {url} rejected by server", errors=errors)

        if not response.ok:
            raise TransportError(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        Make an API request and decode the JSON body.

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            TransportError, ValidationError: see `_send`
            DecodeError: the body is not valid JSON
        """
        response = self._send(method, endpoint, **kwargs)
        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"{method} {response.url or endpoint} returned malformed JSON") from exc

    @staticmethod
    def _multipart(
        fields: PersonalInfoFields,
        image: Optional[StagedImage] = None,
        extra: Optional[Dict[str, str]] = None,
    ) -> List[Tuple[str, Tuple[Optional[str], Any]]]:
        # (None, value) parts force multipart encoding even without a file
        parts = [(name, (None, value)) for name, value in fields.to_form().items()]
        for name, value in (extra or {}).items():
            parts.append((name, (None, value)))
        if image is not None:
            parts.append(("image", (image.filename, image.content, image.content_type)))
        return parts

    @staticmethod
    def _parse_record(response: requests.Response) -> Optional[PersonalInfoSchema]:
        """Best-effort record from a mutation response; None if there isn't one."""
        if not response.content or not response.content.strip():
            return None
        try:
            data = response.json()
        except ValueError:
            logger.warning("Mutation response is not JSON; ignoring body")
            return None
        # Handle different possible response structures
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]
        try:
            return PersonalInfoSchema.model_validate(data)
        except SchemaValidationError:
            logger.warning("Mutation response is not a record; ignoring body")
            return None

    def list_records(self) -> List[PersonalInfoSchema]:
        """
        Fetch the full record collection.

        Returns:
            Records in server order
        """
        data = self._request("GET", COLLECTION_PATH)
        try:
            return list(RecordListResponse.model_validate(data).sql_data)
        except SchemaValidationError as exc:
            raise DecodeError(f"Unexpected list payload: {exc}") from exc

    def create_record(
        self, fields: PersonalInfoFields, image: Optional[StagedImage] = None
    ) -> Optional[PersonalInfoSchema]:
        """
        Create a record.

        Args:
            fields: Submitted field set
            image: Optional photo to upload

        Returns:
            The created record when the server echoes it back, else None
        """
        response = self._send("POST", COLLECTION_PATH, files=self._multipart(fields, image))
        record = self._parse_record(response)
        logger.info("Created record %s", record.id if record else "(no body)")
        return record

    def update_record(
        self,
        record_id: int,
        fields: PersonalInfoFields,
        image: Optional[StagedImage] = None,
    ) -> Optional[PersonalInfoSchema]:
        """
        Replace an existing record.

        Sent as POST with `_method=PUT` because the deployed transport has
        no native update verb.
        """
        parts = self._multipart(fields, image, extra={METHOD_OVERRIDE_FIELD: "PUT"})
        response = self._send("POST", f"{COLLECTION_PATH}/{record_id}", files=parts)
        logger.info("Updated record %s", record_id)
        return self._parse_record(response)

    def delete_record(self, record_id: int) -> None:
        """Delete a record. The server answers with an empty body."""
        self._send("DELETE", f"{COLLECTION_PATH}/{record_id}")
        logger.info("Deleted record %s", record_id)

    def image_url(self, image: Optional[str]) -> Optional[str]:
        """Resolve a stored (relative) image path against the asset root."""
        if not image:
            return None
        return f"{self.settings.storage_url}{image.lstrip('/')}"
