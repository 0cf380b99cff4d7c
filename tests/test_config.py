"""Tests for configuration."""

from __future__ import annotations

from pathlib import Path

import yaml

from openwork_skills.core.config import (
    ConfigManager,
    OpenworkConfig,
    SkillsConfig,
    build_skill_manager,
)
from openwork_skills.skills.discovery import BUNDLED_SKILLS_DIR


class TestOpenworkConfig:
    def test_defaults(self):
        cfg = OpenworkConfig()
        assert cfg.log_level == "INFO"
        assert cfg.workdir == Path.cwd()
        assert cfg.openwork_dir == Path.home() / ".openwork"
        assert cfg.skills == SkillsConfig()

    def test_derived_paths(self, tmp_path: Path):
        cfg = OpenworkConfig(workdir=tmp_path / "proj", openwork_dir=tmp_path / "home")
        assert cfg.skills_root == tmp_path / "proj" / ".openwork" / "skills"
        assert cfg.enablement_file == tmp_path / "home" / "skills.json"

    def test_explicit_paths_win(self, tmp_path: Path):
        cfg = OpenworkConfig(
            skills=SkillsConfig(
                skills_dir=tmp_path / "custom-skills",
                enablement_file=tmp_path / "flags.json",
            )
        )
        assert cfg.skills_root == tmp_path / "custom-skills"
        assert cfg.enablement_file == tmp_path / "flags.json"


class TestConfigManager:
    def test_load_missing_file(self, tmp_path: Path):
        cfg = ConfigManager(tmp_path / "nonexistent").load()
        assert cfg.log_level == "INFO"

    def test_save_and_load(self, tmp_path: Path):
        manager = ConfigManager(tmp_path)
        cfg = OpenworkConfig(
            workdir=tmp_path / "proj",
            log_level="DEBUG",
            skills=SkillsConfig(builtin_skills_dir=tmp_path / "builtin"),
        )
        manager.save(cfg)

        assert manager.config_path == tmp_path / "config.yaml"
        raw = yaml.safe_load(manager.config_path.read_text())
        assert raw["workdir"] == str(tmp_path / "proj")
        assert raw["skills"]["builtin_skills_dir"] == str(tmp_path / "builtin")

        loaded = ConfigManager(tmp_path).load()
        assert loaded.workdir == tmp_path / "proj"
        assert loaded.log_level == "DEBUG"
        assert loaded.skills.builtin_skills_dir == tmp_path / "builtin"

    def test_malformed_yaml_falls_back_to_defaults(self, tmp_path: Path):
        (tmp_path / "config.yaml").write_text("skills: [unclosed\n")
        cfg = ConfigManager(tmp_path).load()
        assert cfg.log_level == "INFO"

    def test_invalid_values_fall_back_to_defaults(self, tmp_path: Path):
        (tmp_path / "config.yaml").write_text("skills: 42\n")
        cfg = ConfigManager(tmp_path).load()
        assert cfg.skills == SkillsConfig()

    def test_non_mapping_falls_back_to_defaults(self, tmp_path: Path):
        (tmp_path / "config.yaml").write_text("- just\n- a list\n")
        assert ConfigManager(tmp_path).load().log_level == "INFO"

    def test_unreadable_config_falls_back_to_defaults(self, tmp_path: Path):
        (tmp_path / "config.yaml").mkdir()
        cfg = ConfigManager(tmp_path).load()
        assert cfg == OpenworkConfig(workdir=cfg.workdir)

    def test_get_dot_notation(self, tmp_path: Path):
        (tmp_path / "config.yaml").write_text(
            yaml.dump({"skills": {"skills_dir": str(tmp_path / "s")}})
        )
        manager = ConfigManager(tmp_path)
        assert manager.get("skills.skills_dir") == tmp_path / "s"
        assert manager.get("skills.missing", "fallback") == "fallback"


class TestBuildSkillManager:
    def test_wires_paths(self, tmp_path: Path):
        cfg = OpenworkConfig(workdir=tmp_path, openwork_dir=tmp_path / "home")
        manager = build_skill_manager(cfg)

        assert manager.root == tmp_path / ".openwork" / "skills"
        assert manager.store.path == tmp_path / "home" / "skills.json"

    def test_defaults_to_bundled_builtins(self, tmp_path: Path):
        manager = build_skill_manager(OpenworkConfig(workdir=tmp_path, openwork_dir=tmp_path))
        builtin = [s for s in manager.list() if s.source.value == "built-in"]
        assert {s.name for s in builtin} == {
            p.name for p in BUNDLED_SKILLS_DIR.iterdir() if (p / "SKILL.md").is_file()
        }

    def test_custom_builtin_dir(self, tmp_path: Path, builtin_dir: Path):
        cfg = OpenworkConfig(
            workdir=tmp_path,
            openwork_dir=tmp_path,
            skills=SkillsConfig(builtin_skills_dir=builtin_dir),
        )
        names = [s.name for s in build_skill_manager(cfg).list()]
        assert names == ["web-research"]
