from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FetchOrDecodeError(RuntimeError):
    """Raised into a result cell when a remote resource could not be fetched or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason


class RemoteStateError(RuntimeError):
    """Raised when a loader is used out of order."""


class LoadPhase(str, Enum):
    NOT_STARTED = "not_started"
    DISPATCHED = "dispatched"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class NotStarted:
    kind = "not_started"


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T
    kind = "success"


@dataclass(frozen=True, slots=True)
class Failure:
    error: FetchOrDecodeError
    kind = "failure"


RemoteResult = Union[NotStarted, Success[T], Failure]
