"""SKILL.md frontmatter parsing and scaffolding.

Skills follow the SKILL.md format:
- A leading ``---`` delimited frontmatter block with ``name`` and ``description``
- A free-form markdown body with instructions
"""

from __future__ import annotations

import re
from pathlib import Path

from openwork_skills.core.logging import get_logger

SKILL_FILENAME = "SKILL.md"

# Leading frontmatter block; the closing delimiter may end the file
FRONTMATTER_PATTERN = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)

DESCRIPTION_PATTERN = re.compile(r"^description:\s*(.*)$", re.MULTILINE)


def extract_description(content: str) -> str:
    """Return the ``description:`` value from a SKILL.md frontmatter block.

    Returns an empty string when the block or the key is missing.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return ""
    desc_match = DESCRIPTION_PATTERN.search(match.group(1))
    return desc_match.group(1).strip() if desc_match else ""


def read_skill_description(path: Path) -> str:
    """Read a SKILL.md file and extract its description.

    Read failures degrade to an empty description so listing and refresh
    paths never fail on a single bad file.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        get_logger().debug("Could not read skill file %s: %s", path, e)
        return ""
    return extract_description(content)


def create_skill_template(name: str, description: str) -> str:
    """Create a SKILL.md template.

    Args:
        name: Skill name (lowercase, hyphen-separated)
        description: Brief skill description

    Returns:
        SKILL.md template content
    """
    return f'''---
name: {name}
description: {description}
---

# {name}

Describe what this skill does and how to use it.
'''
