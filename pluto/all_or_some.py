"""A value that is either "everything" or one specific allowed value."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")

_ALL = object()


class AllOrSome(Generic[T]):
    """Either ``All`` (anything is allowed, usually written ``*``) or ``Some(value)``.

    Constructing without a value gives the ``All`` variant, which is the default.
    """

    __slots__ = ("_value",)

    def __init__(self, value: object = _ALL) -> None:
        self._value = value

    @classmethod
    def all(cls) -> AllOrSome[T]:
        """Return the variant that allows everything."""
        return cls()

    @classmethod
    def some(cls, value: T) -> AllOrSome[T]:
        """Return the variant that allows only ``value``."""
        return cls(value)

    def is_all(self) -> bool:
        """Whether this is the ``All`` variant."""
        return self._value is _ALL

    def is_some(self) -> bool:
        """Whether this is the ``Some`` variant."""
        return not self.is_all()

    def get(self) -> T | None:
        """Return the held value, or ``None`` for the ``All`` variant."""
        if self.is_all():
            return None
        return self._value  # type: ignore[return-value]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AllOrSome):
            return NotImplemented
        if self.is_all() or other.is_all():
            return self.is_all() and other.is_all()
        return self._value == other._value

    def __hash__(self) -> int:
        if self.is_all():
            return hash((AllOrSome, "all"))
        return hash((AllOrSome, "some", self._value))

    def __repr__(self) -> str:
        if self.is_all():
            return "AllOrSome.all()"
        return f"AllOrSome.some({self._value!r})"