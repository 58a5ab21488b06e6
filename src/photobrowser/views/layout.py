from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..remote import Failure, Remote, Success


class ViewState(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DisplaySize:
    width: int
    height: int


def fit_within(width: int, height: int, max_width: int, max_height: int) -> DisplaySize:
    """Scale ``width`` x ``height`` to fit the box, keeping the aspect ratio.

    Images smaller than the box are scaled up.
    """
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    if max_width <= 0 or max_height <= 0:
        raise ValueError("viewport dimensions must be positive")

    scale = min(max_width / width, max_height / height)
    return DisplaySize(
        width=max(1, min(max_width, round(width * scale))),
        height=max(1, min(max_height, round(height * scale))),
    )


def resolve_view_state(remote: Remote, *, show_failures: bool) -> ViewState:
    result = remote.result
    if isinstance(result, Success):
        return ViewState.LOADED
    if isinstance(result, Failure) and show_failures:
        return ViewState.FAILED
    return ViewState.LOADING
