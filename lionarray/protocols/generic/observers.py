# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Range-change subscription registry.

Observable arrays keep their subscriptions in an ``_array_subscriptions``
list; the functions here are the only code that reads or writes it.
Handlers are plain callables passed by reference at subscribe time and are
invoked as ``handler(array, start, removed, added)``.

Each phase dispatches to the subscriptions present when that phase starts.
A subscriber added while a will is being dispatched therefore receives the
matching did without the will; subscribers that forward changes (see
``ArrayProxy``) must drop such an unpaired did.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from lionarray._errors import InvalidContentError
from lionarray.config import settings
from lionarray.ln.types import MaybeUndefined, Undefined

__all__ = (
    "ArrayHandlers",
    "Subscription",
    "add_array_observer",
    "remove_array_observer",
    "has_array_observers",
    "array_observer_count",
    "is_subscribed",
    "send_array_will_change",
    "send_array_did_change",
    "object_at",
)

logger = logging.getLogger(__name__)

RangeHandler = Callable[
    [Any, int, MaybeUndefined[int], MaybeUndefined[int]], None
]


@dataclass(frozen=True, slots=True)
class ArrayHandlers:
    """The will/did pair a subscriber registers with a target."""

    will_change: RangeHandler
    did_change: RangeHandler

    @classmethod
    def of(cls, subscriber: Any) -> ArrayHandlers:
        """Handlers from a subscriber implementing ``ArrayObserver``."""
        try:
            return cls(subscriber.array_will_change, subscriber.array_did_change)
        except AttributeError as e:
            raise TypeError(
                f"{type(subscriber).__name__} does not implement "
                "array_will_change/array_did_change; pass handlers explicitly"
            ) from e


@dataclass(frozen=True, slots=True, eq=False)
class Subscription:
    subscriber: Any
    handlers: ArrayHandlers

    def matches(self, subscriber: Any, handlers: ArrayHandlers) -> bool:
        return self.subscriber is subscriber and self.handlers == handlers


def _subscriptions(target: Any) -> list[Subscription]:
    subs = getattr(target, "_array_subscriptions", None)
    if subs is None:
        raise InvalidContentError.from_value(
            target,
            expected="ObservableArray",
            message=(
                f"{type(target).__name__} does not support array observers"
            ),
        )
    return subs


def add_array_observer(
    target: Any, subscriber: Any, handlers: ArrayHandlers | None = None
) -> None:
    """Register ``subscriber`` for range changes on ``target``.

    A ``None`` target is a no-op. Registering an identical
    (subscriber, handlers) pair twice keeps a single subscription.
    """
    if target is None:
        return
    handlers = handlers or ArrayHandlers.of(subscriber)
    subs = _subscriptions(target)
    if any(s.matches(subscriber, handlers) for s in subs):
        return
    subs.append(Subscription(subscriber, handlers))
    logger.debug(
        "Added array observer %s to %s",
        type(subscriber).__name__,
        type(target).__name__,
    )


def remove_array_observer(
    target: Any, subscriber: Any, handlers: ArrayHandlers | None = None
) -> None:
    """Unregister a subscription. Unknown pairs and ``None`` are ignored."""
    if target is None:
        return
    handlers = handlers or ArrayHandlers.of(subscriber)
    subs = _subscriptions(target)
    for sub in subs:
        if sub.matches(subscriber, handlers):
            subs.remove(sub)
            logger.debug(
                "Removed array observer %s from %s",
                type(subscriber).__name__,
                type(target).__name__,
            )
            return


def array_observer_count(target: Any) -> int:
    if target is None:
        return 0
    return len(getattr(target, "_array_subscriptions", None) or ())


def has_array_observers(target: Any) -> bool:
    return array_observer_count(target) > 0


def is_subscribed(target: Any, subscriber: Any) -> bool:
    """True if ``subscriber`` holds any subscription on ``target``."""
    if target is None:
        return False
    subs = getattr(target, "_array_subscriptions", None) or ()
    return any(s.subscriber is subscriber for s in subs)


def _dispatch(
    phase: str,
    array: Any,
    start: int,
    removed: MaybeUndefined[int],
    added: MaybeUndefined[int],
) -> None:
    subs = _subscriptions(array)
    if settings.LIONARRAY_TRACE_CHANGES:
        logger.debug(
            "%s %s(start=%s, removed=%s, added=%s) -> %d observer(s)",
            type(array).__name__,
            phase,
            start,
            removed,
            added,
            len(subs),
        )
    # snapshot: handlers may subscribe or unsubscribe while we iterate
    for sub in tuple(subs):
        if not any(s is sub for s in subs):
            continue
        handler = (
            sub.handlers.will_change
            if phase == "will_change"
            else sub.handlers.did_change
        )
        handler(array, start, removed, added)


def send_array_will_change(
    array: Any,
    start: int,
    removed: MaybeUndefined[int],
    added: MaybeUndefined[int],
) -> None:
    """Notify every subscriber of ``array`` that a range is about to change."""
    _dispatch("will_change", array, start, removed, added)


def send_array_did_change(
    array: Any,
    start: int,
    removed: MaybeUndefined[int],
    added: MaybeUndefined[int],
) -> None:
    """Notify every subscriber of ``array`` that a range has changed."""
    _dispatch("did_change", array, start, removed, added)


def object_at(collection: Any, idx: int) -> Any:
    """Read ``collection[idx]``, or ``Undefined`` when there is no such slot."""
    if collection is None:
        return Undefined
    if (reader := getattr(collection, "object_at", None)) is not None:
        return reader(idx)
    if idx < 0 or not isinstance(collection, Sequence):
        return Undefined
    try:
        return collection[idx]
    except IndexError:
        return Undefined
