# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging
from importlib import import_module
from typing import TYPE_CHECKING

from . import ln as ln
from .config import settings
from .ln.types import Undefined
from .version import __version__

if TYPE_CHECKING:
    from .protocols.generic.array import (
        MutableObservableArray,
        ObservableArray,
        ObservableList,
        as_array,
        is_array,
    )
    from .protocols.generic.array_proxy import ArrayProxy
    from .protocols.generic.element import Element
    from .protocols.generic.observers import ArrayHandlers

logger = logging.getLogger(__name__)
logger.setLevel(settings.log_level)

_lazy_imports = {}


def _get_obj(name: str, module: str):
    global _lazy_imports
    obj_ = getattr(import_module(f"lionarray.{module}"), name)
    _lazy_imports[name] = obj_
    return obj_


def __getattr__(name: str):
    global _lazy_imports
    if name in _lazy_imports:
        return _lazy_imports[name]

    match name:
        case "ArrayProxy":
            return _get_obj("ArrayProxy", "protocols.generic.array_proxy")
        case "Element":
            return _get_obj("Element", "protocols.generic.element")
        case "ArrayHandlers":
            return _get_obj("ArrayHandlers", "protocols.generic.observers")
        case (
            "ObservableArray"
            | "MutableObservableArray"
            | "ObservableList"
            | "as_array"
            | "is_array"
        ):
            return _get_obj(name, "protocols.generic.array")
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = (
    "__version__",
    "ArrayHandlers",
    "ArrayProxy",
    "Element",
    "MutableObservableArray",
    "ObservableArray",
    "ObservableList",
    "Undefined",
    "as_array",
    "is_array",
    "ln",
    "logger",
    "settings",
)
