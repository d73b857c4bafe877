"""Ok/Err results.

Fallible steps return a value instead of raising, so a workflow reads as a
straight run of ``if isinstance(x, Err): return x`` checks::

    branch = repo.current_branch()
    if isinstance(branch, Err):
        return Err(git_failure("getting current branch", branch.error))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Never, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def unwrap(self) -> Never:
        """Raise ValueError; for call sites that already know the step succeeded."""
        raise ValueError(f"called unwrap on Err: {self.error!r}")


Result = Ok[T] | Err[E]
