"""Skill directory manager: the single gateway over the user skills root.

Every operation lazily ensures the root exists, performs one filesystem
transaction, consults or updates the enablement store and returns a
normalized :class:`SkillDescriptor`. Filesystem errors are not translated;
they propagate as ``OSError``. There is no rollback for partially applied
operations and no locking, so one process is expected to own the root.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional, Union

from openwork_skills.core.errors import (
    AlreadyExistsError,
    NotFoundError,
    ValidationError,
)
from openwork_skills.core.logging import log_entry, log_exit
from openwork_skills.skills.discovery import SkillDiscovery, make_discovery
from openwork_skills.skills.enablement import EnablementStore
from openwork_skills.skills.models import SkillDescriptor, SkillSource, normalize_skill_path
from openwork_skills.skills.parser import (
    SKILL_FILENAME,
    create_skill_template,
    read_skill_description,
)
from openwork_skills.skills.validation import validate_skill_name

_SCOPE = "Skills"


class SkillManager:
    """Creates, installs, deletes, reads and rewrites user skill packages."""

    def __init__(
        self,
        root: Path,
        store: EnablementStore,
        discover: Optional[SkillDiscovery] = None,
    ):
        """Initialize the skill manager.

        Args:
            root: User skills root, usually ``<workdir>/.openwork/skills``
            store: Enablement store holding enabled/disabled flags
            discover: Discovery primitive; defaults to bundled + user skills
        """
        self.root = Path(root)
        self.store = store
        self._discover = discover or make_discovery()

    def ensure_root(self) -> Path:
        """Create the skills root if needed and return it."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def _skill_dir(self, name: str) -> Path:
        # Names address a direct child of the root, never a nested or parent path
        if not name or name in (".", "..") or Path(name).name != name or "\\" in name:
            raise ValidationError(f"Invalid skill name '{name}'.")
        return self.ensure_root() / name

    def _skill_file(self, name: str) -> Path:
        return self._skill_dir(name) / SKILL_FILENAME

    def _require_skill_file(self, name: str) -> Path:
        skill_path = self._skill_file(name)
        if not skill_path.exists():
            raise NotFoundError(f'Skill "{name}" not found.')
        return skill_path

    def _describe(self, name: str, skill_path: Path, enabled: Optional[bool] = None) -> SkillDescriptor:
        return SkillDescriptor(
            name=name,
            description=read_skill_description(skill_path),
            path=normalize_skill_path(skill_path),
            source=SkillSource.USER,
            enabled=self.store.is_enabled(name) if enabled is None else enabled,
        )

    def list(self) -> list[SkillDescriptor]:
        """List built-in and user skills with their enabled flags.

        Order is whatever the discovery primitive returns.
        """
        log_entry(_SCOPE, "list")
        root = self.ensure_root()
        result = [
            SkillDescriptor(
                name=skill.name,
                description=skill.description,
                path=normalize_skill_path(skill.path),
                source=skill.source,
                enabled=self.store.is_enabled(skill.name),
            )
            for skill in self._discover(root)
        ]
        log_exit(_SCOPE, "list", count=len(result))
        return result

    def get(self, name: str) -> SkillDescriptor:
        """Describe a single user skill from disk.

        Raises:
            NotFoundError: If the skill has no SKILL.md
        """
        skill_path = self._require_skill_file(name)
        return self._describe(name, skill_path)

    def create(
        self,
        name: str,
        description: str,
        content: Optional[str] = None,
    ) -> SkillDescriptor:
        """Create a new user skill.

        Args:
            name: Skill name (lowercase, hyphen-separated)
            description: Brief skill description, required
            content: Full SKILL.md text; a template is rendered if empty

        Returns:
            Descriptor of the new, enabled skill

        Raises:
            ValidationError: If the name or description is invalid
            AlreadyExistsError: If a skill of that name exists
        """
        log_entry(_SCOPE, "create", name=name, content_length=len(content or ""))
        root = self.ensure_root()
        name = name.strip()
        description = description.strip()

        validate_skill_name(name)
        if not description:
            raise ValidationError("Skill description is required.")

        skill_dir = root / name
        if skill_dir.exists():
            raise AlreadyExistsError(name)

        skill_dir.mkdir(parents=True)

        body = (content or "").strip() or create_skill_template(name, description)
        skill_path = skill_dir / SKILL_FILENAME
        skill_path.write_text(body, encoding="utf-8")

        result = SkillDescriptor(
            name=name,
            description=description,
            path=normalize_skill_path(skill_path),
            source=SkillSource.USER,
            enabled=True,
        )
        log_exit(_SCOPE, "create", name=name)
        return result

    def _resolve_source_dir(self, input_path: Union[str, Path]) -> Path:
        path = Path(input_path).expanduser()
        if not path.exists():
            raise NotFoundError(f"Skill path does not exist: {path}")

        if path.is_file():
            if path.name.lower() != SKILL_FILENAME.lower():
                raise ValidationError(
                    "Skill path must point to a SKILL.md file or its directory."
                )
            return path.resolve().parent

        if path.is_dir():
            if not (path / SKILL_FILENAME).is_file():
                raise NotFoundError(f"No SKILL.md found in {path}")
            return path.resolve()

        raise ValidationError("Skill path must be a file or directory.")

    def install_from_path(self, input_path: Union[str, Path]) -> SkillDescriptor:
        """Install a skill by copying an existing folder into the root.

        The installed name is the source folder's basename; the frontmatter
        ``name:`` is not consulted.

        Args:
            input_path: A skill folder, or the SKILL.md file inside one

        Returns:
            Descriptor of the installed, enabled skill

        Raises:
            NotFoundError: If the path or its SKILL.md is missing
            ValidationError: If a file other than SKILL.md is given,
                or the folder contains the skills root
            AlreadyExistsError: If a skill of that name exists
        """
        log_entry(_SCOPE, "install", input_path=str(input_path))
        root = self.ensure_root()
        source_dir = self._resolve_source_dir(input_path)
        root_resolved = root.resolve()
        if root_resolved == source_dir or root_resolved.is_relative_to(source_dir):
            # copytree would keep copying the new target into itself
            raise ValidationError(
                f'Cannot install "{source_dir.name}": the folder contains the skills directory.'
            )

        skill_name = source_dir.name
        target_dir = root / skill_name

        if target_dir.exists():
            raise AlreadyExistsError(skill_name)

        shutil.copytree(source_dir, target_dir)

        skill_path = target_dir / SKILL_FILENAME
        if not skill_path.exists():
            # A source file like skill.md keeps its casing through the copy
            copied = next(
                p for p in target_dir.iterdir() if p.name.lower() == SKILL_FILENAME.lower()
            )
            copied.rename(skill_path)

        # Description comes from the copy so the result reflects what is on disk
        result = SkillDescriptor(
            name=skill_name,
            description=read_skill_description(skill_path),
            path=normalize_skill_path(skill_path),
            source=SkillSource.USER,
            enabled=True,
        )
        log_exit(_SCOPE, "install", name=skill_name)
        return result

    def delete(self, name: str) -> None:
        """Remove a user skill and its enablement record.

        Deleting a missing skill is a silent no-op.
        """
        log_entry(_SCOPE, "delete", name=name)
        skill_dir = self._skill_dir(name)
        if not skill_dir.exists():
            log_exit(_SCOPE, "delete", name=name, removed=False)
            return
        shutil.rmtree(skill_dir)
        self.store.remove(name)
        log_exit(_SCOPE, "delete", name=name, removed=True)

    def get_content(self, name: str) -> str:
        """Return the raw SKILL.md text of a user skill.

        Raises:
            NotFoundError: If the skill has no SKILL.md
        """
        log_entry(_SCOPE, "getContent", name=name)
        skill_path = self._require_skill_file(name)
        content = skill_path.read_text(encoding="utf-8")
        log_exit(_SCOPE, "getContent", name=name, content_length=len(content))
        return content

    def save_content(self, name: str, content: str) -> SkillDescriptor:
        """Overwrite SKILL.md verbatim and return the refreshed descriptor.

        Raises:
            NotFoundError: If the skill has no SKILL.md
        """
        log_entry(_SCOPE, "saveContent", name=name, content_length=len(content))
        skill_path = self._require_skill_file(name)
        skill_path.write_text(content, encoding="utf-8")
        result = self._describe(name, skill_path)
        log_exit(_SCOPE, "saveContent", name=name)
        return result

    def set_enabled(self, name: str, enabled: bool) -> SkillDescriptor:
        """Toggle a skill on or off without touching its content.

        Raises:
            NotFoundError: If the skill has no SKILL.md
        """
        log_entry(_SCOPE, "setEnabled", name=name, enabled=enabled)
        skill_path = self._require_skill_file(name)
        self.store.set_enabled(name, enabled)
        result = self._describe(name, skill_path, enabled=enabled)
        log_exit(_SCOPE, "setEnabled", name=name, enabled=enabled)
        return result
