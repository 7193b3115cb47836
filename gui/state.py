"""Application state container.

Which dialog is open is a single tagged value, so two dialogs can never be
flagged open at once and a target record only exists for the dialogs that
need one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from gui.utils.logging import log
from personal_info.models.schemas import PersonalInfoSchema


class DialogTransitionError(RuntimeError):
    """Raised when a dialog is opened while another one is open."""


@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class AddOpen:
    pass


@dataclass(frozen=True)
class EditOpen:
    record: PersonalInfoSchema


@dataclass(frozen=True)
class DeleteOpen:
    record: PersonalInfoSchema


DialogState = Union[Closed, AddOpen, EditOpen, DeleteOpen]

CLOSED = Closed()


class DialogCoordinator:
    """Tracks the open modal and the record it targets.

    Opening requires the coordinator to be Closed. Every transition back
    to Closed runs `on_close` (the image staging buffer's `clear`).
    """

    def __init__(self, on_close: Optional[Callable[[], None]] = None):
        self._state: DialogState = CLOSED
        self._on_close = on_close

    @property
    def state(self) -> DialogState:
        return self._state

    @property
    def is_open(self) -> bool:
        return not isinstance(self._state, Closed)

    @property
    def target(self) -> Optional[PersonalInfoSchema]:
        if isinstance(self._state, (EditOpen, DeleteOpen)):
            return self._state.record
        return None

    def _open(self, state: DialogState) -> DialogState:
        if self.is_open:
            raise DialogTransitionError(
                f"Cannot open {type(state).__name__} while {type(self._state).__name__} is open"
            )
        self._state = state
        log(f"Dialog -> {type(state).__name__}")
        return state

    def open_add(self) -> DialogState:
        return self._open(AddOpen())

    def open_edit(self, record: PersonalInfoSchema) -> DialogState:
        return self._open(EditOpen(record))

    def open_delete(self, record: PersonalInfoSchema) -> DialogState:
        return self._open(DeleteOpen(record))

    def close(self) -> bool:
        """Return to Closed; a no-op (hook included) when nothing is open."""
        if not self.is_open:
            return False
        log(f"Dialog {type(self._state).__name__} -> Closed")
        self._state = CLOSED
        if self._on_close is not None:
            self._on_close()
        return True

    def cancel(self) -> None:
        self.close()

    def close_if(self, state: DialogState) -> bool:
        """Close only if `state` is still the open dialog."""
        if self._state is not state:
            return False
        return self.close()


@dataclass
class AppState:
    """Holds ephemeral UI state."""

    search_query: str = ""
    dialogs: DialogCoordinator = field(default_factory=DialogCoordinator)
