"""Option[T] – Some and Nothing variants.

Feed linkage columns are nullable; the store hands them over as an
``Option[str]`` so callers never compare against ``None`` sentinels.
"""

from __future__ import annotations

from typing import Generic, Iterator, NoReturn, TypeVar

T = TypeVar("T")


class Some(Generic[T]):
    """Option with a value."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def is_none(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def __iter__(self) -> Iterator[T]:
        yield self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Some) and other._value == self._value

    def __hash__(self) -> int:
        return hash(("Some", self._value))

    def __repr__(self) -> str:
        return f"Some({self._value!r})"


class Nothing(Generic[T]):
    """Empty option."""

    __slots__ = ()

    def is_some(self) -> bool:
        return False

    def is_none(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError("Called unwrap() on Nothing")

    def unwrap_or(self, default: T) -> T:
        return default

    def __iter__(self) -> Iterator[T]:
        return iter(())

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Nothing)

    def __hash__(self) -> int:
        return hash("Nothing")

    def __repr__(self) -> str:
        return "Nothing"


type Option[T] = Some[T] | Nothing[T]


def option_of(value: T | None) -> "Option[T]":
    """Lift a nullable value (e.g. a DB column) into an :data:`Option`."""
    if value is None:
        return Nothing()
    return Some(value)


__all__ = ["Nothing", "Option", "Some", "option_of"]
