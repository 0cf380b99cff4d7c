"""Skill package management - SKILL.md based capability extension."""

from openwork_skills.skills.discovery import discover_skills, make_discovery
from openwork_skills.skills.enablement import EnablementStore
from openwork_skills.skills.manager import SkillManager
from openwork_skills.skills.models import DiscoveredSkill, SkillDescriptor, SkillSource
from openwork_skills.skills.parser import (
    create_skill_template,
    extract_description,
    read_skill_description,
)
from openwork_skills.skills.validation import is_valid_skill_name, validate_skill_name

__all__ = [
    "DiscoveredSkill",
    "EnablementStore",
    "SkillDescriptor",
    "SkillManager",
    "SkillSource",
    "create_skill_template",
    "discover_skills",
    "extract_description",
    "is_valid_skill_name",
    "make_discovery",
    "read_skill_description",
    "validate_skill_name",
]
