"""Error taxonomy and classification for skill package operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorCategory(Enum):
    """Categories of errors with different recovery paths."""
    VALIDATION = "validation"            # Bad caller input (name, description, path)
    ALREADY_EXISTS = "already_exists"    # Name collision in the skills root
    NOT_FOUND = "not_found"              # Operation target absent
    IO_ERROR = "io_error"                # Filesystem/permission failure
    UNKNOWN = "unknown"                  # Unclassified error


@dataclass
class RecoveryHint:
    """How a caller can recover from an error."""
    recoverable: bool = False
    user_message: Optional[str] = None


DEFAULT_HINTS: dict[ErrorCategory, RecoveryHint] = {
    ErrorCategory.VALIDATION: RecoveryHint(
        recoverable=True,
        user_message="Invalid input. Check the skill name and description.",
    ),
    ErrorCategory.ALREADY_EXISTS: RecoveryHint(
        recoverable=True,
        user_message="A skill with this name already exists. Choose another name.",
    ),
    ErrorCategory.NOT_FOUND: RecoveryHint(
        recoverable=True,
        user_message="Skill not found. Refresh the skill list.",
    ),
    ErrorCategory.IO_ERROR: RecoveryHint(
        recoverable=False,
        user_message=None,
    ),
    ErrorCategory.UNKNOWN: RecoveryHint(
        recoverable=False,
        user_message="An unexpected error occurred.",
    ),
}


@dataclass
class ClassifiedError:
    """An error with its category and recovery hint."""
    category: ErrorCategory
    original_error: Exception
    message: str
    hint: RecoveryHint
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def recoverable(self) -> bool:
        return self.hint.recoverable

    @property
    def user_message(self) -> str:
        return self.hint.user_message or str(self.original_error)


class SkillError(Exception):
    """Base exception for skill package errors."""

    category = ErrorCategory.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SkillError):
    """Caller supplied an invalid name, description or path."""

    category = ErrorCategory.VALIDATION


class InvalidNameError(ValidationError):
    """Skill name is missing."""

    def __init__(self, message: str = "Skill name is required."):
        super().__init__(message)


class InvalidFormatError(ValidationError):
    """Skill name does not match the lowercase kebab-case grammar."""

    def __init__(self, name: str):
        super().__init__(
            f"Invalid skill name '{name}': must be lowercase alphanumeric with hyphens."
        )
        self.name = name


class AlreadyExistsError(SkillError):
    """A skill with the requested name is already in the skills root."""

    category = ErrorCategory.ALREADY_EXISTS

    def __init__(self, name: str):
        super().__init__(f'Skill "{name}" already exists.')
        self.name = name


class NotFoundError(SkillError):
    """The skill or source path an operation targets does not exist."""

    category = ErrorCategory.NOT_FOUND


def classify_error(error: Exception) -> ClassifiedError:
    """
    Classify an error and attach a recovery hint.

    Skill errors carry their own category. Raw ``OSError`` from the
    filesystem maps to ``IO_ERROR`` and keeps its original message.

    Args:
        error: The exception to classify

    Returns:
        ClassifiedError with category, message, and hint
    """
    if isinstance(error, SkillError):
        category = error.category
        # Skill errors already carry a user-facing message
        hint = RecoveryHint(
            recoverable=DEFAULT_HINTS[category].recoverable,
            user_message=error.message,
        )
        return ClassifiedError(
            category=category,
            original_error=error,
            message=error.message,
            hint=hint,
        )

    if isinstance(error, OSError):
        metadata: dict[str, Any] = {}
        if error.filename:
            metadata["filename"] = str(error.filename)
        if error.errno is not None:
            metadata["errno"] = error.errno
        return ClassifiedError(
            category=ErrorCategory.IO_ERROR,
            original_error=error,
            message=error.strerror or str(error),
            hint=DEFAULT_HINTS[ErrorCategory.IO_ERROR],
            metadata=metadata,
        )

    return ClassifiedError(
        category=ErrorCategory.UNKNOWN,
        original_error=error,
        message=str(error),
        hint=DEFAULT_HINTS[ErrorCategory.UNKNOWN],
    )
