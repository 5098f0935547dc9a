from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Degraded:
    """An optional step that did not produce a value; callers fall back."""

    reason: str
    error: BaseException | None = None

    def describe(self) -> str:
        if self.error is None:
            return self.reason
        return f"{self.reason}: {self.error}"


Result = Union[Ok[T], Degraded]


class BackendError(RuntimeError):
    def __init__(self, message: str, *, code: str = "backend_unavailable"):
        super().__init__(message)
        self.code = code
