"""In-memory representation of a file chosen for upload."""

from __future__ import annotations

import mimetypes
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from ._validators import MB

IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")
LETTER_TYPES = (
    *IMAGE_TYPES,
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)
JPEG_PNG_TYPES = ("image/jpeg", "image/png")

MAX_IMAGE_BYTES = 5 * MB
MAX_LETTER_BYTES = 5 * MB
MAX_VENUE_IMAGE_BYTES = 10 * MB
MAX_RESERVATION_LETTER_BYTES = 10 * MB


class UploadFile(BaseModel):
    filename: str
    content_type: str
    content: bytes

    model_config = ConfigDict(frozen=True)

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> UploadFile:
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content_type=content_type or guessed or "application/octet-stream",
            content=path.read_bytes(),
        )
