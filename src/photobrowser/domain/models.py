from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from PIL import Image
from pydantic import BaseModel, ConfigDict, field_validator


class Photo(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)

    id: str
    author: str
    width: int
    height: int
    url: str
    download_url: str

    @field_validator("url", "download_url")
    @classmethod
    def validate_absolute_url(cls, value: str) -> str:
        text = value.strip()
        if any(char.isspace() or not char.isprintable() for char in text):
            raise ValueError("photo urls must not contain whitespace or control characters")
        parsed = urlparse(text)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("photo urls must be absolute http(s) URLs")
        return text


@dataclass(frozen=True, slots=True)
class DecodedImage:
    content: bytes
    format: str
    width: int
    height: int

    @property
    def media_type(self) -> str:
        return Image.MIME.get(self.format, "application/octet-stream")
