from .loader import Remote
from .observable import Observable
from .result import (
    Failure,
    FetchOrDecodeError,
    LoadPhase,
    NotStarted,
    RemoteResult,
    RemoteStateError,
    Success,
)

__all__ = [
    "Failure",
    "FetchOrDecodeError",
    "LoadPhase",
    "NotStarted",
    "Observable",
    "Remote",
    "RemoteResult",
    "RemoteStateError",
    "Success",
]
