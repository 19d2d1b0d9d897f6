# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import PrivateAttr

from lionarray._errors import (
    ArrangedMutationError,
    DestroyedProxyError,
    InvalidContentError,
    MissingContentError,
    ReentrantSwapError,
    SelfReferenceError,
)
from lionarray.config import settings
from lionarray.ln.types import MaybeUndefined, Undefined

from .._concepts import Observer
from . import observers
from .array import MutableObservableArray, is_array
from .element import Element
from .observers import ArrayHandlers

__all__ = ("ArrayProxy",)

logger = logging.getLogger(__name__)


def _view_length(view: Any) -> int:
    return len(view) if view is not None and is_array(view) else 0


class ArrayProxy(MutableObservableArray, Element, Observer):
    """An array that forwards every read and write to a swappable content
    array and re-announces the content's range changes as its own.

    ``content`` can be reassigned at any time. Observers of the proxy see
    the swap as one bulk replace: ``(0, old_length, Undefined)`` before and
    ``(0, Undefined, new_length)`` after, with the proxy's subscription
    moved from the old array to the new one in between.

    Example::

        pets = as_array(["dog", "cat", "fish"])
        proxy = ArrayProxy(pets)
        proxy.first_object                           # 'dog'
        proxy.content = as_array(["amoeba", "paramecium"])
        proxy.first_object                           # 'amoeba'

    Subclasses can transform items as they are read by overriding
    ``object_at_content``::

        class ShoutingProxy(ArrayProxy):
            def object_at_content(self, idx):
                return self.content.object_at(idx).upper()

    Subclasses can also present a different view (sorted, filtered) by
    overriding the ``arranged_content`` property. Mutating through such a
    proxy raises ``ArrangedMutationError`` unless the subclass routes writes
    itself by overriding ``replace``. A subclass whose view changes for
    reasons other than a new ``content`` must make the change inside
    ``_changing_arranged_content()`` so the subscription follows it.

    ``content`` must be an ``ObservableArray`` (an ``ObservableList``,
    another ``ArrayProxy``) or ``None``. With no content the proxy reads as
    empty: ``len()`` is 0 and ``object_at`` returns ``Undefined``.
    """

    _content: Any = PrivateAttr(default=None)
    _array_subscriptions: list = PrivateAttr(default_factory=list)
    _swap_depth: int = PrivateAttr(default=0)
    _forwarding: int = PrivateAttr(default=0)
    # sources of forwarded wills still waiting for their did
    _pending_sources: list = PrivateAttr(default_factory=list)

    def __init__(self, content: Any = None, **data: Any) -> None:
        super().__init__(**data)
        self._content = content
        self._setup_arranged_content()

    @property
    def content(self) -> Any:
        """The underlying array. Assigning a new one rebinds the proxy."""
        return self._content

    @content.setter
    def content(self, value: Any) -> None:
        if value is self._content:
            return
        self._validate_view(value)
        with self._changing_arranged_content():
            self._content = value

    @property
    def arranged_content(self) -> Any:
        """The array this proxy presents. Defaults to ``content`` itself."""
        return self._content

    @arranged_content.setter
    def arranged_content(self, value: Any) -> None:
        self.content = value

    # -- reads --------------------------------------------------------------

    def object_at(self, idx: int) -> Any:
        if self._content is None:
            return Undefined
        return self.object_at_content(idx)

    def object_at_content(self, idx: int) -> Any:
        """Retrieve the item at ``idx`` from the arranged content.

        Override to transform items as they are read. Only called when
        ``content`` is not None.
        """
        return observers.object_at(self.arranged_content, idx)

    def __len__(self) -> int:
        return _view_length(self.arranged_content)

    # -- writes -------------------------------------------------------------

    def replace(self, idx: int, amt: int, objects: Iterable[Any] = ()) -> None:
        if self.arranged_content is not self._content:
            raise ArrangedMutationError(
                details={"proxy": self.class_name(), "index": idx}
            )
        if self._content is None:
            raise MissingContentError(details={"proxy": self.class_name()})
        self.replace_content(idx, amt, objects)

    def replace_content(
        self, idx: int, amt: int, objects: Iterable[Any] = ()
    ) -> None:
        """Splice ``objects`` into the content array.

        Override to transform items before they are stored. Only called
        when ``content`` is not None.
        """
        self._content.replace(idx, amt, objects)

    # -- content binding ----------------------------------------------------

    @property
    def _arranged_handlers(self) -> ArrayHandlers:
        return ArrayHandlers(
            self.arranged_content_array_will_change,
            self.arranged_content_array_did_change,
        )

    @contextlib.contextmanager
    def _changing_arranged_content(self) -> Iterator[None]:
        """Bracket a change of the ``arranged_content`` reference.

        Announces the full old range and detaches from the old view on
        entry; attaches to the new view and announces the full new range on
        exit. A destroyed proxy cannot be rebound.
        """
        if self._is_destroying:
            raise DestroyedProxyError(
                details={"proxy": self.class_name(), "id": str(self.id)}
            )
        self._check_reentrant_swap()
        self._swap_depth += 1
        try:
            self._arranged_content_will_change()
            yield
            self._arranged_content_did_change()
            logger.debug(
                "%s %s rebound to %s",
                self.class_name(),
                self.id,
                type(self.arranged_content).__name__,
            )
        finally:
            self._swap_depth -= 1
            if not self._swap_depth:
                # a bracket that raised may leave its own will unmatched
                self._discard_pending(self)

    def _check_reentrant_swap(self) -> None:
        if not (self._swap_depth or self._forwarding):
            return
        details = {
            "swap_depth": self._swap_depth,
            "forwarding": self._forwarding,
        }
        if settings.LIONARRAY_STRICT_REENTRANCY:
            raise ReentrantSwapError(details=details)
        logger.warning(
            "%s %s content swapped while a change is in flight: %s",
            self.class_name(),
            self.id,
            details,
        )

    def _arranged_content_will_change(self) -> None:
        length = _view_length(self.arranged_content)
        self.arranged_content_array_will_change(self, 0, length, Undefined)
        self._teardown_arranged_content()

    def _arranged_content_did_change(self) -> None:
        length = _view_length(self.arranged_content)
        self._setup_arranged_content()
        self.arranged_content_array_did_change(self, 0, Undefined, length)

    def _validate_view(self, view: Any) -> bool:
        """Check ``view`` can back this proxy; True if it can be observed.

        A destroyed element that is not an array is tolerated (it shows up
        while a chain of proxies is being torn down) but cannot be observed.
        """
        if view is None:
            return False
        if view is self:
            raise SelfReferenceError(details={"proxy": self.class_name()})
        if is_array(view):
            return True
        if getattr(view, "is_destroyed", False):
            return False
        raise InvalidContentError.from_value(
            view,
            expected="ObservableArray or ArrayProxy",
            message=(
                "ArrayProxy expects an ObservableArray or ArrayProxy, "
                f"but you passed {type(view).__name__}"
            ),
        )

    def _setup_arranged_content(self) -> None:
        arranged = self.arranged_content
        if self._validate_view(arranged):
            observers.add_array_observer(
                arranged, self, self._arranged_handlers
            )
        elif arranged is not None:
            logger.warning(
                "%s %s given destroyed %s as content; not observing it",
                self.class_name(),
                self.id,
                type(arranged).__name__,
            )

    def _teardown_arranged_content(self) -> None:
        arranged = self.arranged_content
        if arranged is not None and is_array(arranged):
            observers.remove_array_observer(
                arranged, self, self._arranged_handlers
            )
            # the old view's outstanding dids will never reach us
            if dropped := self._discard_pending(arranged):
                logger.debug(
                    "%s %s detached with %d unfinished change(s)",
                    self.class_name(),
                    self.id,
                    dropped,
                )

    def _discard_pending(self, source: Any) -> int:
        kept = [s for s in self._pending_sources if s is not source]
        dropped = len(self._pending_sources) - len(kept)
        self._pending_sources[:] = kept
        return dropped

    def _take_pending(self, source: Any) -> bool:
        pending = self._pending_sources
        for i in range(len(pending) - 1, -1, -1):
            if pending[i] is source:
                del pending[i]
                return True
        return False

    # -- change forwarding --------------------------------------------------

    def arranged_content_array_will_change(
        self,
        array: Any,
        start: int,
        removed: MaybeUndefined[int],
        added: MaybeUndefined[int],
    ) -> None:
        """Re-announce a pending change of the arranged content as this
        proxy's own. ``array`` is dropped; the proxy is the source."""
        self._pending_sources.append(array)
        self._forwarding += 1
        try:
            self.array_content_will_change(start, removed, added)
        except Exception:
            self._take_pending(array)
            raise
        finally:
            self._forwarding -= 1

    def arranged_content_array_did_change(
        self,
        array: Any,
        start: int,
        removed: MaybeUndefined[int],
        added: MaybeUndefined[int],
    ) -> None:
        """Re-announce a completed change. A did whose will was never
        forwarded (the proxy subscribed mid-change) is dropped."""
        if not self._take_pending(array):
            logger.warning(
                "%s %s dropped did_change(start=%s, removed=%s, added=%s) "
                "from %s with no matching will_change",
                self.class_name(),
                self.id,
                start,
                removed,
                added,
                type(array).__name__,
            )
            return
        self._forwarding += 1
        try:
            self.array_content_did_change(start, removed, added)
        finally:
            self._forwarding -= 1

    # -- lifecycle ----------------------------------------------------------

    def will_destroy(self) -> None:
        self._teardown_arranged_content()

    def __repr__(self) -> str:
        return f"{self.class_name()}(content={self._content!r})"
