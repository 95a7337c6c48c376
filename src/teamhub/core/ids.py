"""UUID-backed identifier value objects shared by every domain area."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import ClassVar, Self

from teamhub.core.exceptions import ValidationError


@dataclass(frozen=True)
class EntityId:
    """Immutable UUIDv4 identifier.

    Subclasses set ``invalid_error`` to the error raised when a value
    is not a UUID.
    """

    value: str

    invalid_error: ClassVar[type[ValidationError]] = ValidationError

    @classmethod
    def create(cls, value: str | uuid.UUID | None = None) -> Self:
        """Wrap an existing identifier, or generate one when value is None.

        Raises:
            ValidationError: The subclass's ``invalid_error`` if value is malformed.
        """
        if value is None:
            return cls.generate()
        if isinstance(value, uuid.UUID):
            return cls(str(value))
        try:
            parsed = uuid.UUID(str(value))
        except ValueError:
            raise cls.invalid_error(str(value)) from None
        return cls(str(parsed))

    @classmethod
    def generate(cls) -> Self:
        return cls(str(uuid.uuid4()))

    @property
    def uuid(self) -> uuid.UUID:
        return uuid.UUID(self.value)

    def __str__(self) -> str:
        return self.value
