# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from typing_extensions import Self

from .._concepts import Observable

__all__ = ("Element",)

logger = logging.getLogger(__name__)


class Element(BaseModel, Observable):
    """Identity and destroy lifecycle shared by lionarray objects.

    ``destroy()`` flips ``is_destroying``, runs the ``will_destroy()`` hook
    exactly once, then flips ``is_destroyed``. Subclasses release whatever
    they hold (subscriptions, references) in ``will_destroy()``.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        extra="forbid",
        use_attribute_docstrings=True,
        validate_assignment=True,
    )

    id: UUID = Field(default_factory=uuid4, frozen=True)
    """A unique identifier for the element."""

    _is_destroying: bool = PrivateAttr(default=False)
    _is_destroyed: bool = PrivateAttr(default=False)

    @classmethod
    def class_name(cls, full: bool = False) -> str:
        """Returns this class's name.

        full (bool): If True, returns the fully qualified class name; otherwise,
            returns only the class name.
        """
        if full:
            return f"{cls.__module__}.{cls.__qualname__}"
        return cls.__name__

    @field_validator("id", mode="before")
    def _validate_id(cls, value: Any) -> UUID:
        if isinstance(value, UUID):
            return value
        if isinstance(value, str):
            try:
                return UUID(value)
            except Exception as e:
                raise ValueError(f"Invalid UUID string: {value}") from e
        raise TypeError(f"Invalid type for id: {type(value)}")

    @property
    def is_destroying(self) -> bool:
        return self._is_destroying

    @property
    def is_destroyed(self) -> bool:
        return self._is_destroyed

    def will_destroy(self) -> None:
        """Hook run once by ``destroy()`` before the element is marked dead."""

    def destroy(self) -> Self:
        """Tear the element down. Repeated calls are no-ops."""
        if self._is_destroying:
            return self
        self._is_destroying = True
        self.will_destroy()
        self._is_destroyed = True
        logger.debug("Destroyed %s %s", self.class_name(), self.id)
        return self

    def __bool__(self) -> bool:
        """Elements are always considered truthy."""
        return True

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        """Returns a hash of this element's ID."""
        return hash(self.id)
