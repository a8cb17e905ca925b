"""Result type so the use-case layer can report failures without raising.

A use case returns ``Success(value)`` or ``Failure(error)``; the caller
inspects ``is_failure()`` or chains further steps with ``map`` /
``and_then`` / ``map_error``, which skip over a Failure untouched.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E', bound=Exception)


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> "Result[U, Exception]":
        """Apply ``fn`` to the value; if ``fn`` raises, the error becomes a Failure."""
        try:
            return Success(fn(self.value))
        except Exception as e:
            return Failure(e)

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        return fn(self.value)

    def map_error(self, fn: Callable[[Exception], Exception]) -> "Success[T]":
        return self

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, fn: Callable) -> "Failure[E]":
        return self

    def and_then(self, fn: Callable) -> "Failure[E]":
        return self

    def map_error(self, fn: Callable[[E], U]) -> "Failure[U]":
        """Translate the error, e.g. a low-level OSError into a domain exception."""
        return Failure(fn(self.error))

    def unwrap(self):
        """Raise the stored error."""
        raise self.error

    def unwrap_or(self, default):
        return default


Result = Union[Success[T], Failure[E]]
