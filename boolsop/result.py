"""Result type for boundary operations that report failure instead of raising.

The algebra raises on misuse; only environment-facing code (settings
loading) returns a Result so the CLI can report the problem and exit.
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Ok[T] | Err[E]
