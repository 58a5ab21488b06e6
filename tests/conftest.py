"""Shared test fixtures."""

import json
import threading
import time
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from photobrowser.adapters.transport import TransportError
from photobrowser.settings import AppSettings, EnvSettings, PhotoBrowserYamlSettings

LIST_URL = "https://photos.example.test/v2/list"


@dataclass
class FakeTransport:
    """Transport returning canned payloads per URL and recording every request."""

    responses: dict[str, bytes | None] = field(default_factory=dict)
    failing_urls: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)
    gate: threading.Event | None = None

    def fetch(self, url: str) -> bytes | None:
        self.calls.append(url)
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if url in self.failing_urls:
            raise TransportError(f"GET {url} failed")
        return self.responses.get(url)


def make_png(width: int = 200, height: int = 100) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color=(200, 40, 40)).save(buffer, format="PNG")
    return buffer.getvalue()


def photo_record(photo_id: str, author: str, **overrides: object) -> dict[str, object]:
    record: dict[str, object] = {
        "id": photo_id,
        "author": author,
        "width": 100,
        "height": 100,
        "url": f"https://x/{photo_id}",
        "download_url": f"https://x/{photo_id}/download",
    }
    record.update(overrides)
    return record


def encode_records(*records: dict[str, object]) -> bytes:
    return json.dumps(list(records)).encode("utf-8")


def build_settings(**ui_overrides: object) -> AppSettings:
    yaml_settings = PhotoBrowserYamlSettings.model_validate(
        {"source": {"list_url": LIST_URL}, "ui": ui_overrides}
    )
    return AppSettings(
        env=EnvSettings(photobrowser_env="test"),
        yaml=yaml_settings,
        project_root=Path("."),
        config_path=Path("config/photobrowser.yaml"),
    )


def wait_until(predicate: Callable[[], bool], timeout: float = 5.0) -> None:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return
        time.sleep(0.01)
    raise AssertionError("condition was not met in time")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()
