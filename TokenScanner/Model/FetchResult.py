"""
Outcome of a fallible upstream step (directory listing, download, tokenization).
Callers decide explicitly whether a failure degrades to an empty/zero value.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: T) -> T:
        if not self.ok or self.value is None:
            return default
        return self.value

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "FetchResult[T]":
        return cls(error=error or "unknown error")
