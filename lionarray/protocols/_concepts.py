# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lionarray.ln.types import MaybeUndefined

__all__ = (
    "Observer",
    "Observable",
    "ArrayObserver",
)


class Observer(ABC):
    """Base for objects that subscribe to range changes."""


class Observable(ABC):
    """Observable entities must define 'id'."""


@runtime_checkable
class ArrayObserver(Protocol):
    """Capability interface for receiving range-change events.

    ``removed`` and ``added`` are counts, or ``Undefined`` on the uncounted
    side of a full-range notification.
    """

    def array_will_change(
        self,
        array: Any,
        start: int,
        removed: MaybeUndefined[int],
        added: MaybeUndefined[int],
    ) -> None: ...

    def array_did_change(
        self,
        array: Any,
        start: int,
        removed: MaybeUndefined[int],
        added: MaybeUndefined[int],
    ) -> None: ...
