"""Explicit success/failure values for steps whose failure is recoverable."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of a recoverable step: either a value or the error that prevented it.

    Notes on usage:
        Build with Outcome.ok / Outcome.failed / Outcome.capture, and collapse with
        unwrap_or at the point where the fallback is decided.
    """

    value: T | None = None
    error: Exception | None = None

    @classmethod
    def ok(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failed(cls, error: Exception) -> Outcome[T]:
        return cls(error=error)

    @classmethod
    def capture(cls, step: Callable[[], T]) -> Outcome[T]:
        """Run step and wrap whatever it returns or raises."""
        try:
            return cls.ok(step())
        except Exception as exc:  # noqa: BLE001
            return cls.failed(exc)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T, logger: logging.Logger | None = None) -> T:
        """Return the value, or log the error and return default."""
        if self.error is None:
            return self.value  # type: ignore[return-value]
        if logger is not None:
            logger.error("%s", self.error, exc_info=self.error)
        return default
