"""Success/failure values returned by every fallible operation."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying a typed error."""

    error: E


Result = Union[Ok[T], Err[E]]


def is_ok(result: "Result[T, E]") -> bool:
    """Check whether a result is a success."""
    return isinstance(result, Ok)


def is_err(result: "Result[T, E]") -> bool:
    """Check whether a result is a failure."""
    return isinstance(result, Err)
