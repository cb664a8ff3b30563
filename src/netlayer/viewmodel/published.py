# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-slot observable values with latest-value semantics."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Subscriber = Callable[[T], None]


class Subscription:
    def __init__(self, cancel: Callable[[], None]):
        self._cancel: Callable[[], None] | None = cancel

    def cancel(self) -> None:
        if self._cancel is not None:
            self._cancel()
            self._cancel = None


class Published(Generic[T]):
    """
    Holds one value; ``send`` overwrites it and notifies subscribers.

    A new subscriber is called immediately with the current value. Cells are
    not synchronized: only touch them from the designated event loop.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: dict[int, Subscriber[T]] = {}
        self._next_id = 0

    @property
    def value(self) -> T:
        return self._value

    def send(self, value: T) -> None:
        self._value = value
        for subscriber in list(self._subscribers.values()):
            subscriber(value)

    def subscribe(self, subscriber: Subscriber[T]) -> Subscription:
        key = self._next_id
        self._next_id += 1
        self._subscribers[key] = subscriber
        subscriber(self._value)
        return Subscription(lambda: self._subscribers.pop(key, None))

    def __repr__(self) -> str:
        return f"Published({self._value!r})"
