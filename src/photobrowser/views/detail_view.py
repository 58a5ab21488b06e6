from __future__ import annotations

import logging
from concurrent.futures import Executor

from ..adapters.transport import Transport
from ..decoders import decode_image
from ..domain.models import DecodedImage
from ..remote import Remote
from .layout import DisplaySize, ViewState, fit_within, resolve_view_state

LOGGER = logging.getLogger(__name__)

PHOTO_TITLE = "Photo"


class PhotoDetailView:
    title = PHOTO_TITLE

    def __init__(self, remote: Remote[DecodedImage]) -> None:
        self._remote = remote

    @classmethod
    def for_download_url(
        cls,
        download_url: str,
        *,
        transport: Transport,
        executor: Executor | None = None,
    ) -> PhotoDetailView:
        return cls(Remote(download_url, decode_image, transport=transport, executor=executor))

    @property
    def remote(self) -> Remote[DecodedImage]:
        return self._remote

    @property
    def image(self) -> DecodedImage | None:
        return self._remote.value

    def on_appear(self) -> None:
        self._remote.load()

    def state(self, *, show_failures: bool = False) -> ViewState:
        return resolve_view_state(self._remote, show_failures=show_failures)

    def display_size(self, max_width: int, max_height: int) -> DisplaySize | None:
        image = self._remote.value
        if image is None:
            return None
        return fit_within(image.width, image.height, max_width, max_height)

    def retry(self) -> None:
        self._remote.reset()
        self._remote.load()


class PhotoViewRegistry:
    """Keeps one detail view per download URL for the lifetime of the app."""

    def __init__(self, *, transport: Transport, executor: Executor | None = None) -> None:
        self._transport = transport
        self._executor = executor
        self._views: dict[str, PhotoDetailView] = {}

    def __len__(self) -> int:
        return len(self._views)

    def get(self, download_url: str) -> PhotoDetailView | None:
        return self._views.get(download_url)

    def get_or_create(self, download_url: str) -> PhotoDetailView:
        view = self._views.get(download_url)
        if view is None:
            view = PhotoDetailView.for_download_url(
                download_url,
                transport=self._transport,
                executor=self._executor,
            )
            self._views[download_url] = view
            LOGGER.debug("Created detail view for %s", download_url)
        return view
