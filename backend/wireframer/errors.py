"""
Error taxonomy and tagged stage outcomes.

Every call that leaves the process (render, generate, accessibility fix)
reports a StageResult instead of raising, so the pipeline driver can decide
per stage whether to continue, degrade, or abort.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class WireframeError(Exception):
    """Base error for a failed wireframe request."""

    status_code = 500

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InputError(WireframeError):
    """Missing or malformed request input. Raised before any resource is acquired."""

    status_code = 400


class RenderingError(WireframeError):
    """Navigation timeout, missing selector, or browser crash."""


class GenerationError(WireframeError):
    """Transport-level failure talking to the generation service."""


class StageStatus(str, Enum):
    OK = "ok"
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


@dataclass(frozen=True)
class StageResult(Generic[T]):
    status: StageStatus
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, value: Any) -> "StageResult":
        return cls(StageStatus.OK, value=value)

    @classmethod
    def recoverable(cls, error: BaseException, fallback: Any = None) -> "StageResult":
        return cls(StageStatus.RECOVERABLE, value=fallback, error=error)

    @classmethod
    def fatal(cls, error: BaseException) -> "StageResult":
        return cls(StageStatus.FATAL, error=error)

    @property
    def is_fatal(self) -> bool:
        return self.status is StageStatus.FATAL

    def unwrap(self) -> T:
        """Return the value, or raise the stored error for fatal results."""
        if self.is_fatal:
            if isinstance(self.error, WireframeError):
                raise self.error
            raise WireframeError(str(self.error), cause=self.error)
        return self.value
