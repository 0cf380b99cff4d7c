"""Shared test fixtures and pytest configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from openwork_skills.core.logging import reset_logger
from openwork_skills.skills.discovery import make_discovery
from openwork_skills.skills.enablement import EnablementStore
from openwork_skills.skills.manager import SkillManager


@pytest.fixture(autouse=True)
def _reset_logging():
    """Each test starts with an unconfigured logger."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def skills_root(tmp_path: Path) -> Path:
    """User skills root inside a temporary workdir (not created yet)."""
    return tmp_path / "workdir" / ".openwork" / "skills"


@pytest.fixture
def builtin_dir(tmp_path: Path) -> Path:
    """A built-in skills directory with one skill."""
    builtin = tmp_path / "builtin"
    skill = builtin / "web-research"
    skill.mkdir(parents=True)
    (skill / "SKILL.md").write_text(
        "---\nname: web-research\ndescription: Researches topics on the web\n---\n\n# web-research\n"
    )
    return builtin


@pytest.fixture
def store(tmp_path: Path) -> EnablementStore:
    return EnablementStore(tmp_path / "openwork" / "skills.json")


@pytest.fixture
def manager(skills_root: Path, store: EnablementStore, builtin_dir: Path) -> SkillManager:
    return SkillManager(skills_root, store, discover=make_discovery(builtin_dir))


@pytest.fixture
def external_skill(tmp_path: Path) -> Path:
    """An external skill folder ready to install."""
    source = tmp_path / "external" / "my-skill"
    source.mkdir(parents=True)
    (source / "SKILL.md").write_text(
        "---\nname: my-skill\ndescription: Custom tool\n---\n\n# my-skill\n\nDo the thing.\n"
    )
    scripts = source / "scripts"
    scripts.mkdir()
    (scripts / "run.py").write_text("print('hi')\n")
    return source
