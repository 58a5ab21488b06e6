"""Tests for the observable value container."""

from photobrowser.remote import Observable


def test_set_notifies_observers_on_change() -> None:
    observable: Observable[int] = Observable(0)
    seen: list[int] = []
    observable.subscribe(seen.append)

    changed = observable.set(5)

    assert changed is True
    assert observable.value == 5
    assert seen == [5]


def test_set_with_equal_value_does_not_notify() -> None:
    observable: Observable[str] = Observable("idle")
    seen: list[str] = []
    observable.subscribe(seen.append)

    assert observable.set("idle") is False
    assert seen == []


def test_observers_are_called_in_subscription_order() -> None:
    observable: Observable[int] = Observable(0)
    calls: list[str] = []
    observable.subscribe(lambda value: calls.append(f"first:{value}"))
    observable.subscribe(lambda value: calls.append(f"second:{value}"))

    observable.set(1)

    assert calls == ["first:1", "second:1"]


def test_unsubscribe_unknown_observer_is_ignored() -> None:
    observable: Observable[int] = Observable(0)

    observable.unsubscribe(print)

    assert observable.set(1) is True


def test_observer_may_unsubscribe_itself_during_notification() -> None:
    observable: Observable[int] = Observable(0)
    seen: list[int] = []

    def once(value: int) -> None:
        seen.append(value)
        observable.unsubscribe(once)

    observable.subscribe(once)
    observable.set(1)
    observable.set(2)

    assert seen == [1]
