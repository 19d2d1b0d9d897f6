# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .array import (
    MutableObservableArray,
    ObservableArray,
    ObservableList,
    as_array,
    is_array,
)
from .array_proxy import ArrayProxy
from .element import Element
from .observers import ArrayHandlers, Subscription

__all__ = (
    "ArrayHandlers",
    "ArrayProxy",
    "Element",
    "MutableObservableArray",
    "ObservableArray",
    "ObservableList",
    "Subscription",
    "as_array",
    "is_array",
)
