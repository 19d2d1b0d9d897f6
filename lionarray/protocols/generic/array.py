# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable, Iterator, MutableSequence, Sequence
from typing import Any

from lionarray._errors import ItemNotFoundError
from lionarray.ln.types import MaybeUndefined, Undefined

from . import observers
from .observers import ArrayHandlers

__all__ = (
    "ObservableArray",
    "MutableObservableArray",
    "ObservableList",
    "as_array",
    "is_array",
)


class ObservableArray(Sequence):
    """Read side of an ordered collection that announces range changes.

    Implementers provide ``object_at`` and ``__len__`` and an
    ``_array_subscriptions`` list for the observer registry. Everything a
    Python sequence offers (indexing, slicing, iteration, ``in``, ``index``,
    ``count``) is derived from those two.

    ``object_at`` never raises: it returns ``Undefined`` for a missing slot.
    ``__getitem__`` follows the Python protocol and raises
    ``ItemNotFoundError`` (an ``IndexError``) instead.
    """

    __slots__ = ()

    @abstractmethod
    def object_at(self, idx: int) -> Any:
        """Item at ``idx``, or ``Undefined`` if out of range."""

    @abstractmethod
    def __len__(self) -> int: ...

    @property
    def length(self) -> int:
        return len(self)

    def _normalize_index(self, idx: int) -> int:
        length = len(self)
        if idx < 0:
            idx += length
        if not 0 <= idx < length:
            raise ItemNotFoundError(
                f"index {idx} item not found",
                details={"index": idx, "length": length},
            )
        return idx

    def __getitem__(self, key: int | slice) -> Any:
        if isinstance(key, slice):
            return [self.object_at(i) for i in range(*key.indices(len(self)))]
        if not isinstance(key, int):
            key_cls = key.__class__.__name__
            raise TypeError(f"indices must be integers or slices, not {key_cls}")
        return self.object_at(self._normalize_index(key))

    def __iter__(self) -> Iterator[Any]:
        for i in range(len(self)):
            yield self.object_at(i)

    @property
    def first_object(self) -> Any:
        return self.object_at(0)

    @property
    def last_object(self) -> Any:
        return self.object_at(len(self) - 1) if len(self) else Undefined

    def to_list(self) -> list[Any]:
        return list(self)

    def array_content_will_change(
        self,
        start: int,
        removed: MaybeUndefined[int],
        added: MaybeUndefined[int],
    ) -> None:
        """Announce that ``removed`` items at ``start`` are about to be
        replaced by ``added`` items. Must precede the mutation."""
        observers.send_array_will_change(self, start, removed, added)

    def array_content_did_change(
        self,
        start: int,
        removed: MaybeUndefined[int],
        added: MaybeUndefined[int],
    ) -> None:
        """Announce that the range given to the matching
        ``array_content_will_change`` call has been replaced."""
        observers.send_array_did_change(self, start, removed, added)

    def add_array_observer(
        self, subscriber: Any, handlers: ArrayHandlers | None = None
    ) -> None:
        observers.add_array_observer(self, subscriber, handlers)

    def remove_array_observer(
        self, subscriber: Any, handlers: ArrayHandlers | None = None
    ) -> None:
        observers.remove_array_observer(self, subscriber, handlers)

    @property
    def has_array_observers(self) -> bool:
        return observers.has_array_observers(self)


class MutableObservableArray(ObservableArray, MutableSequence):
    """Mutation side of an observable array.

    Every mutator funnels into ``replace(idx, amt, objects)``, so one
    will/did pair is announced per call. ``clear``, ``extend`` and
    ``reverse`` are overridden to splice once rather than item by item.
    """

    __slots__ = ()

    @abstractmethod
    def replace(self, idx: int, amt: int, objects: Iterable[Any] = ()) -> None:
        """Remove ``amt`` items at ``idx`` and insert ``objects`` there."""

    def _slice_bounds(self, key: slice) -> tuple[int, int, int]:
        start, stop, step = key.indices(len(self))
        return start, max(stop - start, 0), step

    def __setitem__(self, key: int | slice, value: Any) -> None:
        if isinstance(key, slice):
            start, amt, step = self._slice_bounds(key)
            if step != 1:
                raise ValueError("extended slice assignment is not supported")
            self.replace(start, amt, list(value))
            return
        self.replace(self._normalize_index(key), 1, [value])

    def __delitem__(self, key: int | slice) -> None:
        if isinstance(key, slice):
            start, amt, step = self._slice_bounds(key)
            if step == 1:
                if amt:
                    self.replace(start, amt, ())
                return
            for i in sorted(range(*key.indices(len(self))), reverse=True):
                self.replace(i, 1, ())
            return
        self.replace(self._normalize_index(key), 1, ())

    def insert(self, index: int, value: Any) -> None:
        """Insert before ``index``, clamping like ``list.insert``."""
        length = len(self)
        if index < 0:
            index = max(index + length, 0)
        self.replace(min(index, length), 0, [value])

    def insert_at(self, idx: int, obj: Any) -> Any:
        """Insert ``obj`` at ``idx``; unlike ``insert``, never clamps."""
        if not 0 <= idx <= len(self):
            raise ItemNotFoundError(
                f"index {idx} out of range for insert",
                details={"index": idx, "length": len(self)},
            )
        self.replace(idx, 0, [obj])
        return obj

    def remove_at(self, start: int, amt: int = 1) -> None:
        if not 0 <= start < len(self):
            raise ItemNotFoundError(
                f"index {start} item not found",
                details={"index": start, "length": len(self)},
            )
        self.replace(start, amt, ())

    def push_object(self, obj: Any) -> Any:
        return self.insert_at(len(self), obj)

    def push_objects(self, objects: Iterable[Any]) -> None:
        self.replace(len(self), 0, list(objects))

    def pop_object(self) -> Any:
        """Remove and return the last item, or ``Undefined`` when empty."""
        if not len(self):
            return Undefined
        idx = len(self) - 1
        obj = self.object_at(idx)
        self.remove_at(idx)
        return obj

    def shift_object(self) -> Any:
        """Remove and return the first item, or ``Undefined`` when empty."""
        if not len(self):
            return Undefined
        obj = self.object_at(0)
        self.remove_at(0)
        return obj

    def unshift_object(self, obj: Any) -> Any:
        return self.insert_at(0, obj)

    def set_objects(self, objects: Iterable[Any]) -> None:
        self.replace(0, len(self), list(objects))

    def clear(self) -> None:
        if len(self):
            self.replace(0, len(self), ())

    def extend(self, values: Iterable[Any]) -> None:
        self.replace(len(self), 0, list(values))

    def reverse(self) -> None:
        if len(self) > 1:
            self.replace(0, len(self), self.to_list()[::-1])


class ObservableList(MutableObservableArray):
    """A list that announces every splice to its array observers."""

    __slots__ = ("_items", "_array_subscriptions")

    def __init__(self, items: Iterable[Any] | None = None) -> None:
        self._items: list[Any] = list(items) if items is not None else []
        self._array_subscriptions: list[observers.Subscription] = []

    def object_at(self, idx: int) -> Any:
        if 0 <= idx < len(self._items):
            return self._items[idx]
        return Undefined

    def __len__(self) -> int:
        return len(self._items)

    def replace(self, idx: int, amt: int, objects: Iterable[Any] = ()) -> None:
        """Splice ``objects`` in place of ``amt`` items at ``idx``.

        ``idx`` may equal the length (append). ``amt`` is clamped to the
        items actually present so the announced range matches the splice.
        A call that would neither remove nor add anything is silent.
        """
        length = len(self._items)
        if not 0 <= idx <= length:
            raise ItemNotFoundError(
                f"index {idx} out of range for replace",
                details={"index": idx, "length": length},
            )
        if amt < 0:
            raise ValueError(f"amt must be non-negative, got {amt}")
        objects = list(objects) if objects is not None else []
        amt = min(amt, length - idx)
        added = len(objects)
        if not amt and not added:
            return

        self.array_content_will_change(idx, amt, added)
        self._items[idx : idx + amt] = objects
        self.array_content_did_change(idx, amt, added)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ObservableList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


def as_array(items: Iterable[Any] | None = None) -> ObservableArray:
    """Wrap ``items`` in an ``ObservableList``; arrays pass through as-is."""
    if isinstance(items, ObservableArray):
        return items
    return ObservableList(items)


def is_array(value: Any) -> bool:
    """True for values an ArrayProxy can use as content."""
    return isinstance(value, ObservableArray)
