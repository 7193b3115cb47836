"""Image staging buffer.

Holds the locally decoded preview of a photo picked in the add/edit dialog
until the form is submitted. Decoding uses Pillow on a worker thread and
produces a bounded PNG thumbnail (as a `data:` URI for display) alongside
the original bytes (for upload).

Every `stage` and `clear` bumps a generation counter; a decode that
finishes after the counter moved on is dropped instead of being applied to
whatever dialog is open now.
"""

from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from gui.utils.async_tasks import run_async
from gui.utils.logging import log
from personal_info.api_client import StagedImage
from personal_info.errors import DecodeError


@dataclass(frozen=True)
class ImagePreview:
    """A decoded image awaiting submission."""

    filename: str
    content_type: str
    content: bytes
    data_uri: str
    size: Tuple[int, int]
    owner: Any = None

    def as_upload(self) -> StagedImage:
        return StagedImage(filename=self.filename, content=self.content, content_type=self.content_type)


def decode_preview(
    data: bytes,
    filename: str,
    content_type: Optional[str] = None,
    max_size: Tuple[int, int] = (200, 200),
    owner: Any = None,
) -> ImagePreview:
    """Decode image bytes into a preview.

    Raises:
        DecodeError: If the bytes cannot be opened as an image.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            fmt = img.format
            size = img.size
            thumb = img.copy()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise DecodeError(f"Cannot decode image {filename!r}") from exc

    if thumb.mode not in ("RGB", "RGBA"):
        thumb = thumb.convert("RGBA")
    thumb.thumbnail(max_size)
    out = io.BytesIO()
    thumb.save(out, format="PNG")
    encoded = base64.b64encode(out.getvalue()).decode("ascii")

    return ImagePreview(
        filename=filename,
        content_type=content_type or Image.MIME.get(fmt or "", "application/octet-stream"),
        content=data,
        data_uri=f"data:image/png;base64,{encoded}",
        size=size,
        owner=owner,
    )


class ImageStagingBuffer:
    """Optimistic, never-persisted photo preview for the open dialog."""

    def __init__(self, max_size: Tuple[int, int] = (200, 200)):
        self.max_size = max_size
        self.preview: Optional[ImagePreview] = None
        self.last_error: Optional[DecodeError] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def stage(
        self,
        data: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        owner: Any = None,
    ) -> Optional[ImagePreview]:
        """Decode `data` and make it the current preview.

        Returns the preview, or None when decoding failed (the prior
        preview is kept) or the result went stale before it arrived.
        """
        self._generation += 1
        ticket = self._generation
        try:
            preview = await run_async(
                decode_preview, data, filename or "upload", content_type, self.max_size, owner
            )
        except DecodeError as exc:
            if ticket == self._generation:
                self.last_error = exc
            log(f"Image decode failed: {exc}", logging.WARNING)
            return None

        if ticket != self._generation:
            log(f"Discarding stale preview for {preview.filename}", logging.WARNING)
            return None

        self.preview = preview
        self.last_error = None
        return preview

    def clear(self) -> None:
        self._generation += 1
        self.preview = None
        self.last_error = None

    def staged_image(self) -> Optional[StagedImage]:
        return self.preview.as_upload() if self.preview else None
