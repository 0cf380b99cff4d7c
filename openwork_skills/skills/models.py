"""Skill descriptor types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union


class SkillSource(Enum):
    """Where a skill comes from. Only user skills are mutable."""
    USER = "user"
    BUILT_IN = "built-in"


def normalize_skill_path(path: Union[str, Path]) -> str:
    """Absolute, forward-slash form of a skill path."""
    return Path(path).resolve().as_posix()


@dataclass(frozen=True)
class DiscoveredSkill:
    """A skill candidate reported by discovery."""
    name: str
    description: str
    path: str
    source: SkillSource


@dataclass(frozen=True)
class SkillDescriptor:
    """A skill as returned to callers of the manager."""
    name: str
    description: str
    path: str
    source: SkillSource
    enabled: bool = True

    @property
    def is_mutable(self) -> bool:
        return self.source is SkillSource.USER

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping."""
        return {
            "name": self.name,
            "description": self.description,
            "path": self.path,
            "source": self.source.value,
            "enabled": self.enabled,
        }
