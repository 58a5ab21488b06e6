from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import quote

from ..domain.models import Photo
from ..remote import NotStarted, Remote, RemoteResult
from .layout import ViewState, resolve_view_state

AUTHORS_TITLE = "Authors"


@dataclass(frozen=True, slots=True)
class AuthorRow:
    photo_id: str
    author: str
    detail_path: str


def build_detail_path(photo_id: str) -> str:
    return f"/photos/{quote(photo_id, safe='')}"


class AuthorsListView:
    title = AUTHORS_TITLE

    def __init__(self, remote: Remote[list[Photo]]) -> None:
        self._remote = remote
        self._resolved_at: datetime | None = None
        remote.subscribe(self._on_result)

    @property
    def remote(self) -> Remote[list[Photo]]:
        return self._remote

    @property
    def resolved_at(self) -> datetime | None:
        return self._resolved_at

    def _on_result(self, result: RemoteResult[list[Photo]]) -> None:
        if isinstance(result, NotStarted):
            self._resolved_at = None
        else:
            self._resolved_at = datetime.now(timezone.utc)

    def on_appear(self) -> None:
        self._remote.load()

    def state(self, *, show_failures: bool = False) -> ViewState:
        return resolve_view_state(self._remote, show_failures=show_failures)

    def rows(self) -> list[AuthorRow]:
        photos = self._remote.value or []
        return [
            AuthorRow(
                photo_id=photo.id,
                author=photo.author,
                detail_path=build_detail_path(photo.id),
            )
            for photo in photos
        ]

    def find_photo(self, photo_id: str) -> Photo | None:
        for photo in self._remote.value or []:
            if photo.id == photo_id:
                return photo
        return None

    def retry(self) -> None:
        self._remote.reset()
        self._remote.load()
