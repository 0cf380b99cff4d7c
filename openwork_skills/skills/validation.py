"""Skill name grammar."""

from __future__ import annotations

import re

from openwork_skills.core.errors import InvalidFormatError, InvalidNameError

# One or more lowercase alphanumeric segments joined by single hyphens
SKILL_NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def validate_skill_name(name: str) -> None:
    """Validate a skill name.

    Raises:
        InvalidNameError: If the name is empty
        InvalidFormatError: If the name is not lowercase kebab-case
    """
    if not name:
        raise InvalidNameError()
    if not SKILL_NAME_PATTERN.fullmatch(name):
        raise InvalidFormatError(name)


def is_valid_skill_name(name: str) -> bool:
    """Return True if ``name`` passes :func:`validate_skill_name`."""
    return bool(name) and SKILL_NAME_PATTERN.fullmatch(name) is not None
