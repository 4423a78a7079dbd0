"""Path helpers for the file-level conversion API.

This module validates source and target paths, maps input file names to
output file names through ``*`` wildcard masks, and builds user-facing
hints when a path operation fails.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import fnmatch
import platform
from pathlib import Path

from ..exceptions import ConversionError

INVALID_NAME_CHARS = '<>:"|?*'


class PathValidationError(ConversionError):
    """Raised when path validation fails."""

    def __init__(self, message: str, path: str, validation_type: str = "path"):
        self.path = path
        self.validation_type = validation_type
        super().__init__(message, {"path": path, "validation_type": validation_type})


def validate_source_path(source_path: str | Path) -> Path:
    """Validate a source path and return it as a ``Path``.

    Raises:
        PathValidationError: If the path is empty or does not exist.
    """
    path_str = str(source_path)
    if not path_str.strip():
        raise PathValidationError("Source path cannot be empty", path_str, "empty_path")

    path = Path(source_path)
    if not path.exists():
        raise PathValidationError(f"Source path does not exist: {path_str}", path_str, "missing")
    return path


def validate_target_path(target_path: str | Path) -> Path:
    """Validate a target file path without touching the filesystem.

    Raises:
        PathValidationError: If the path is empty or its name holds invalid characters.
    """
    path_str = str(target_path)
    if not path_str.strip():
        raise PathValidationError("Target path cannot be empty", path_str, "empty_path")

    path = Path(target_path)
    if any(char in path.name for char in INVALID_NAME_CHARS):
        raise PathValidationError(
            f"Target name contains invalid characters: {INVALID_NAME_CHARS}", path_str, "invalid_chars"
        )
    return path


def ensure_parent_dir(target_path: str | Path) -> None:
    """Create the parent directory of ``target_path`` when it is missing."""
    path = Path(target_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PathValidationError(f"Cannot create parent directory: {e}", str(path.parent), "parent_creation") from e


def matches_mask(name: str, mask: str) -> bool:
    return fnmatch.fnmatchcase(name, mask)


def apply_mask(name: str, input_mask: str, output_mask: str) -> str:
    """Map a file name matched by ``input_mask`` onto ``output_mask``.

    The text matched by the single ``*`` of ``input_mask`` replaces the
    ``*`` of ``output_mask``: ``apply_mask("UserTest.js", "*Test.js",
    "*Spec.js")`` returns ``"UserSpec.js"``.

    Raises:
        ValueError: If ``name`` does not match ``input_mask``.
    """
    prefix, _, suffix = input_mask.partition("*")
    if not (matches_mask(name, input_mask) and len(name) >= len(prefix) + len(suffix)):
        raise ValueError(f"'{name}' does not match the input mask '{input_mask}'")
    stem = name[len(prefix) : len(name) - len(suffix)]
    return output_mask.replace("*", stem, 1)


def normalize_path_for_display(path: str | Path) -> str:
    """Return ``path`` with forward slashes, for stable CLI output."""
    return Path(path).as_posix()


def suggest_path_fixes(error: Exception, path: str | Path) -> list[str]:
    """Generate hints for a failed path operation."""
    suggestions = []
    path_obj = Path(path)

    if isinstance(error, FileNotFoundError):
        if not path_obj.parent.exists():
            suggestions.append(f"Create the parent directory: {path_obj.parent}")
        suggestions.append(f"Check if the path exists: {path}")
    elif isinstance(error, PermissionError):
        suggestions.append(f"Check permissions for: {path_obj.parent}")
        if platform.system() == "Windows":
            suggestions.append("Check if the file is open in another program")
    elif isinstance(error, UnicodeDecodeError):
        suggestions.append(f"Save the file as UTF-8: {path}")

    return suggestions
