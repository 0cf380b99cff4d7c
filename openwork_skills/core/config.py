"""Configuration management for OpenWork skills."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from openwork_skills.core.logging import get_logger

if TYPE_CHECKING:
    from openwork_skills.skills.manager import SkillManager


def _default_openwork_dir() -> Path:
    """Get default OpenWork data directory."""
    return Path.home() / ".openwork"


class SkillsConfig(BaseModel):
    """Skill package locations. Unset paths derive from the workdir."""
    skills_dir: Optional[Path] = Field(
        default=None,
        description="User skills root (default: <workdir>/.openwork/skills)"
    )
    builtin_skills_dir: Optional[Path] = Field(
        default=None,
        description="Built-in skills directory (default: bundled skills)"
    )
    enablement_file: Optional[Path] = Field(
        default=None,
        description="JSON file with enabled/disabled flags (default: <openwork_dir>/skills.json)"
    )


class OpenworkConfig(BaseModel):
    """Main OpenWork configuration."""
    skills: SkillsConfig = Field(default_factory=SkillsConfig)

    # Paths - use default_factory so they're evaluated at instantiation, not import
    workdir: Path = Field(default_factory=Path.cwd, description="Working directory owning .openwork/skills")
    openwork_dir: Path = Field(default_factory=_default_openwork_dir)
    logs_dir: Optional[Path] = Field(default=None, description="Directory for rotating log files")

    log_level: str = Field(default="INFO", description="Logging level")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def skills_root(self) -> Path:
        return self.skills.skills_dir or (self.workdir / ".openwork" / "skills")

    @property
    def enablement_file(self) -> Path:
        return self.skills.enablement_file or (self.openwork_dir / "skills.json")


_PATH_KEYS = ("workdir", "openwork_dir", "logs_dir")
_SKILLS_PATH_KEYS = ("skills_dir", "builtin_skills_dir", "enablement_file")


class ConfigManager:
    """Manages the OpenWork configuration file."""

    DEFAULT_CONFIG_DIR = Path.home() / ".openwork"
    CONFIG_FILENAME = "config.yaml"

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_dir: Custom configuration directory. Defaults to ~/.openwork
        """
        self.config_dir = Path(config_dir) if config_dir else self.DEFAULT_CONFIG_DIR
        self.config_path = self.config_dir / self.CONFIG_FILENAME
        self._config: Optional[OpenworkConfig] = None

    @property
    def config(self) -> OpenworkConfig:
        """Get the current configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> OpenworkConfig:
        """
        Load configuration from file.

        Returns:
            OpenworkConfig: Loaded configuration, or defaults if the file is
            missing or invalid.
        """
        if not self.config_path.exists():
            return OpenworkConfig()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError("top level must be a mapping")
            return OpenworkConfig(**data)
        except (OSError, yaml.YAMLError, ValueError) as e:
            get_logger().warning("Failed to load config from %s: %s", self.config_path, e)
            return OpenworkConfig()

    def save(self, config: Optional[OpenworkConfig] = None) -> None:
        """
        Save configuration to file.

        Args:
            config: Configuration to save. Uses current config if not provided.
        """
        if config is not None:
            self._config = config

        if self._config is None:
            self._config = OpenworkConfig()

        self.config_dir.mkdir(parents=True, exist_ok=True)

        # Path objects are written as plain strings
        data = self._config.model_dump()
        for key in _PATH_KEYS:
            if data.get(key) is not None:
                data[key] = str(data[key])
        for key in _SKILLS_PATH_KEYS:
            if data["skills"].get(key) is not None:
                data["skills"][key] = str(data["skills"][key])

        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., "skills.skills_dir")
            default: Default value if key not found

        Returns:
            Configuration value or default.
        """
        obj: Any = self.config
        for part in key.split("."):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            elif isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj


def build_skill_manager(config: OpenworkConfig) -> "SkillManager":
    """Wire a SkillManager from configuration."""
    from openwork_skills.skills.discovery import BUNDLED_SKILLS_DIR, make_discovery
    from openwork_skills.skills.enablement import EnablementStore
    from openwork_skills.skills.manager import SkillManager

    builtin_dir = config.skills.builtin_skills_dir or BUNDLED_SKILLS_DIR
    return SkillManager(
        root=config.skills_root,
        store=EnablementStore(config.enablement_file),
        discover=make_discovery(builtin_dir),
    )
