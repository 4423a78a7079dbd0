"""Result type returned by the file-level conversion API.

``Result[T]`` is an immutable container for a value, a value with
warnings, or an error. The file API returns results
instead of raising so a directory conversion can report every file.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ResultStatus(Enum):
    """Outcome of an operation."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Immutable outcome of an operation.

    Build instances through the ``success``, ``failure`` and ``warning``
    constructors.
    """

    status: ResultStatus
    data: T | None = None
    error: Exception | None = None
    warnings: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.status == ResultStatus.SUCCESS and self.error is not None:
            raise ValueError("Success results cannot have errors")
        if self.status == ResultStatus.ERROR and self.data is not None:
            raise ValueError("Error results cannot have data")
        if self.warnings is None:
            object.__setattr__(self, "warnings", [])
        if self.metadata is None:
            object.__setattr__(self, "metadata", {})

    @classmethod
    def success(cls, data: T, metadata: dict[str, Any] | None = None) -> "Result[T]":
        return cls(status=ResultStatus.SUCCESS, data=data, metadata=metadata or {})

    @classmethod
    def failure(cls, error: Exception, metadata: dict[str, Any] | None = None) -> "Result[T]":
        return cls(status=ResultStatus.ERROR, error=error, metadata=metadata or {})

    @classmethod
    def warning(cls, data: T, warnings: list[str], metadata: dict[str, Any] | None = None) -> "Result[T]":
        return cls(status=ResultStatus.WARNING, data=data, warnings=warnings, metadata=metadata or {})

    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    def is_error(self) -> bool:
        return self.status == ResultStatus.ERROR

    def is_warning(self) -> bool:
        return self.status == ResultStatus.WARNING

    def unwrap(self) -> T:
        """Return the data, raising the stored error for an error result.

        Raises:
            Exception: The stored error.
        """
        if self.is_error():
            raise self.error or RuntimeError("Result contains error")
        return self.data  # type: ignore[return-value]

