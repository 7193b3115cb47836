"""Exceptions raised by the REST client and image decoding."""

from typing import Dict, List, Optional


class PersonalInfoError(Exception):
    """Base exception for record-management failures."""
    pass


class TransportError(PersonalInfoError):
    """Network unreachable, timed out, or a non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(PersonalInfoError):
    """Malformed JSON body or an image payload that cannot be decoded."""
    pass


class ValidationError(TransportError):
    """The server rejected the submitted fields (HTTP 422)."""

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message, status_code=422)
        self.errors = errors or {}
