from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor
from typing import Callable, Generic, TypeVar

from ..adapters.transport import Transport, TransportError
from .observable import Observable, Observer
from .result import (
    Failure,
    FetchOrDecodeError,
    LoadPhase,
    NotStarted,
    RemoteResult,
    RemoteStateError,
    Success,
)

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)


class Remote(Generic[T]):
    """A value fetched once from ``url`` and decoded with ``decode``.

    ``load`` must be called on the event loop that owns the views. The fetch
    and the decode run on an executor thread; the outcome is published back
    on the event loop, so observers only ever run there.
    """

    def __init__(
        self,
        url: str,
        decode: Callable[[bytes], T | None],
        *,
        transport: Transport,
        executor: Executor | None = None,
    ) -> None:
        self._url = url
        self._decode = decode
        self._transport = transport
        self._executor = executor
        self._cell: Observable[RemoteResult[T]] = Observable(NotStarted())
        self._phase = LoadPhase.NOT_STARTED
        self._task: asyncio.Task[None] | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def phase(self) -> LoadPhase:
        return self._phase

    @property
    def result(self) -> RemoteResult[T]:
        return self._cell.value

    @property
    def value(self) -> T | None:
        result = self._cell.value
        if isinstance(result, Success):
            return result.value
        return None

    @property
    def is_loading(self) -> bool:
        return self._phase == LoadPhase.DISPATCHED

    def subscribe(self, observer: Observer[RemoteResult[T]]) -> None:
        self._cell.subscribe(observer)

    def unsubscribe(self, observer: Observer[RemoteResult[T]]) -> None:
        self._cell.unsubscribe(observer)

    def load(self) -> None:
        if self._phase != LoadPhase.NOT_STARTED:
            return

        loop = asyncio.get_running_loop()
        self._phase = LoadPhase.DISPATCHED
        self._task = loop.create_task(self._complete(loop))
        LOGGER.info("Dispatched fetch for %s", self._url)

    async def wait(self) -> RemoteResult[T]:
        if self._task is not None:
            await asyncio.shield(self._task)
        return self._cell.value

    def reset(self) -> None:
        if self._phase == LoadPhase.DISPATCHED:
            raise RemoteStateError(f"Cannot reset {self._url} while a fetch is in flight")
        if self._phase == LoadPhase.NOT_STARTED:
            return

        self._task = None
        self._phase = LoadPhase.NOT_STARTED
        self._cell.set(NotStarted())
        LOGGER.info("Reset remote resource %s", self._url)

    async def _complete(self, loop: asyncio.AbstractEventLoop) -> None:
        outcome = await loop.run_in_executor(self._executor, self._fetch_and_decode)
        self._phase = LoadPhase.COMPLETED
        self._cell.set(outcome)
        if isinstance(outcome, Failure):
            LOGGER.warning("Remote resource failed: %s", outcome.error)
        else:
            LOGGER.info("Remote resource loaded from %s", self._url)

    def _fetch_and_decode(self) -> Success[T] | Failure:
        try:
            payload = self._transport.fetch(self._url)
        except TransportError as exc:
            return self._failure("fetch failed", exc)
        except Exception as exc:
            LOGGER.exception("Transport raised for %s", self._url)
            return self._failure("fetch failed", exc)

        if payload is None:
            return self._failure("no payload received")

        try:
            decoded = self._decode(payload)
        except Exception as exc:
            LOGGER.exception("Decoder raised for %s", self._url)
            return self._failure("decode raised", exc)

        if decoded is None:
            return self._failure("decode failed")
        return Success(decoded)

    def _failure(self, reason: str, cause: BaseException | None = None) -> Failure:
        error = FetchOrDecodeError(self._url, reason)
        error.__cause__ = cause
        return Failure(error)
