from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]


class Observable(Generic[T]):
    """A single value that notifies its observers whenever it changes.

    ``set`` only notifies on an actual transition; writing an equal value is
    silently dropped. Observers are called outside the lock, in subscription
    order, on the thread that called ``set``.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._observers: list[Observer[T]] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        with self._lock:
            return self._value

    def subscribe(self, observer: Observer[T]) -> None:
        with self._lock:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer[T]) -> None:
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                return

    def set(self, value: T) -> bool:
        with self._lock:
            if value == self._value:
                return False
            self._value = value
            observers = list(self._observers)

        for observer in observers:
            observer(value)
        return True
