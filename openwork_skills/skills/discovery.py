"""Skill discovery across built-in and user skill directories.

Priority order (higher wins on conflict):
1. User skills (<workdir>/.openwork/skills/)
2. Built-in skills (shipped with the package)
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional

from openwork_skills.core.logging import get_logger
from openwork_skills.skills.models import DiscoveredSkill, SkillSource, normalize_skill_path
from openwork_skills.skills.parser import SKILL_FILENAME, extract_description

BUNDLED_SKILLS_DIR = Path(__file__).parent / "bundled"

# Signature the manager expects from a discovery primitive
SkillDiscovery = Callable[[Path], Iterable[DiscoveredSkill]]


def scan_skills_dir(directory: Path, source: SkillSource) -> list[DiscoveredSkill]:
    """Scan ``directory`` for ``<name>/SKILL.md`` packages.

    Args:
        directory: Directory whose subdirectories are skill packages
        source: Provenance to stamp on each result

    Returns:
        Skills sorted by directory name. Unreadable files are skipped.
    """
    skills: list[DiscoveredSkill] = []
    if not directory.is_dir():
        return skills

    logger = get_logger()
    for skill_file in sorted(directory.glob(f"*/{SKILL_FILENAME}")):
        try:
            content = skill_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read skill file %s: %s", skill_file, e)
            continue

        skills.append(
            DiscoveredSkill(
                name=skill_file.parent.name,
                description=extract_description(content),
                path=normalize_skill_path(skill_file),
                source=source,
            )
        )

    logger.debug("Discovered %d %s skill(s) in %s", len(skills), source.value, directory)
    return skills


def discover_skills(
    user_skills_dir: Path,
    builtin_skills_dir: Optional[Path] = BUNDLED_SKILLS_DIR,
) -> list[DiscoveredSkill]:
    """Discover built-in and user skills.

    Built-in skills are listed first, then user skills. A user skill
    shadows a built-in skill of the same name.
    """
    user = scan_skills_dir(user_skills_dir, SkillSource.USER)
    user_names = {s.name for s in user}

    builtin: list[DiscoveredSkill] = []
    if builtin_skills_dir is not None:
        builtin = [
            s for s in scan_skills_dir(builtin_skills_dir, SkillSource.BUILT_IN)
            if s.name not in user_names
        ]

    return builtin + user


def make_discovery(builtin_skills_dir: Optional[Path] = BUNDLED_SKILLS_DIR) -> SkillDiscovery:
    """Bind a built-in directory into a discovery callable for the manager."""

    def discover(user_skills_dir: Path) -> list[DiscoveredSkill]:
        return discover_skills(user_skills_dir, builtin_skills_dir)

    return discover
