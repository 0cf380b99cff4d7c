"""OpenWork skills CLI entry point using Typer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import typer
from rich.markup import escape
from rich.table import Table

from openwork_skills.core.config import ConfigManager, OpenworkConfig, build_skill_manager
from openwork_skills.core.errors import SkillError, classify_error
from openwork_skills.core.logging import log_skill_error, setup_logging, trace_span
from openwork_skills.skills.manager import SkillManager
from openwork_skills.skills.models import SkillDescriptor
from openwork_skills.ui import console, error, info, success, warn

T = TypeVar("T")


class _State:
    """Per-invocation configuration shared with commands."""

    def __init__(self, config_manager: ConfigManager, config: OpenworkConfig):
        self.config_manager = config_manager
        self.config = config
        self._manager: Optional[SkillManager] = None

    @property
    def manager(self) -> SkillManager:
        if self._manager is None:
            self._manager = build_skill_manager(self.config)
        return self._manager


def _startup_callback(
    ctx: typer.Context,
    workdir: Optional[Path] = typer.Option(
        None, "--workdir", "-w", help="Working directory owning .openwork/skills (defaults to CWD)"
    ),
    config_dir: Optional[Path] = typer.Option(
        None, "--config-dir", envvar="OPENWORK_CONFIG_DIR", help="Configuration directory (defaults to ~/.openwork)"
    ),
) -> None:
    """Load configuration and logging before any command runs."""
    config_manager = ConfigManager(config_dir)
    cfg = config_manager.config
    if workdir is not None:
        cfg = cfg.model_copy(update={"workdir": workdir.resolve()})
    setup_logging(log_level=cfg.log_level, logs_dir=cfg.logs_dir)
    ctx.obj = _State(config_manager, cfg)


app = typer.Typer(
    name="openwork-skills",
    help="Manage OpenWork agent skill packages.",
    no_args_is_help=True,
    callback=_startup_callback,
)


def _run(action: str, fn: Callable[[], T], **details: Any) -> T:
    """Run a manager call inside a trace span, turning failures into exit code 1."""
    try:
        with trace_span("CLI", f"skills:{action}", **details):
            return fn()
    except (SkillError, OSError) as e:
        classified = classify_error(e)
        log_skill_error(classified)
        error(escape(classified.user_message))
        raise typer.Exit(1)


def _print_descriptor(skill: SkillDescriptor) -> None:
    state = "[green]enabled[/]" if skill.enabled else "[yellow]disabled[/]"
    info(f"{escape(skill.name)} ({skill.source.value}, {state})")
    if skill.description:
        console.print(f"    {escape(skill.description)}", highlight=False)
    console.print(f"    [dim]{escape(skill.path)}[/]", highlight=False)


@app.command("list")
def list_skills(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print skills as JSON"),
) -> None:
    """List built-in and user skills."""
    manager: SkillManager = ctx.obj.manager
    skills = _run("list", manager.list)

    if as_json:
        typer.echo(json.dumps([s.to_dict() for s in skills], indent=2))
        return

    if not skills:
        info("No skills installed.")
        return

    table = Table(title="Skills")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Source")
    table.add_column("Enabled")
    table.add_column("Description", style="green")
    for skill in skills:
        table.add_row(
            escape(skill.name),
            skill.source.value,
            "[green]Yes[/]" if skill.enabled else "[red]No[/]",
            escape(skill.description),
        )
    console.print(table)


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill name (lowercase, hyphen-separated)"),
    description: str = typer.Option(..., "--description", "-d", help="One-line skill description"),
    content_file: Optional[Path] = typer.Option(
        None, "--content-file", "-f", help="Use this file as SKILL.md instead of the template"
    ),
) -> None:
    """Create a new skill from the template or a prepared SKILL.md."""
    manager: SkillManager = ctx.obj.manager
    content = None
    if content_file is not None:
        content = _run("readContentFile", lambda: content_file.read_text(encoding="utf-8"))

    skill = _run(
        "create",
        lambda: manager.create(name, description, content),
        name=name,
        content_length=len(content or ""),
    )
    success(f"Created skill {escape(skill.name)}")
    _print_descriptor(skill)


@app.command()
def install(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Skill folder or its SKILL.md file"),
) -> None:
    """Install a skill by copying an existing folder."""
    manager: SkillManager = ctx.obj.manager
    skill = _run("install", lambda: manager.install_from_path(path), path=str(path))
    success(f"Installed skill {escape(skill.name)}")
    _print_descriptor(skill)


@app.command()
def delete(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a user skill. This cannot be undone."""
    manager: SkillManager = ctx.obj.manager
    if not yes:
        typer.confirm(f"Delete skill '{name}'?", abort=True)
    _run("delete", lambda: manager.delete(name), name=name)
    success(f"Deleted skill {escape(name)}")


@app.command()
def show(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill name"),
) -> None:
    """Print a skill's SKILL.md."""
    manager: SkillManager = ctx.obj.manager
    content = _run("getContent", lambda: manager.get_content(name), name=name)
    typer.echo(content, nl=not content.endswith("\n"))


@app.command()
def save(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill name"),
    file: Path = typer.Argument(..., help="File whose text replaces SKILL.md"),
) -> None:
    """Overwrite a skill's SKILL.md with the contents of a file."""
    manager: SkillManager = ctx.obj.manager
    content = _run("readContentFile", lambda: file.read_text(encoding="utf-8"))
    skill = _run(
        "saveContent",
        lambda: manager.save_content(name, content),
        name=name,
        content_length=len(content),
    )
    success(f"Saved skill {escape(skill.name)}")
    if not skill.description:
        warn("SKILL.md has no description in its frontmatter.")
    _print_descriptor(skill)


def _set_enabled(ctx: typer.Context, name: str, enabled: bool) -> None:
    manager: SkillManager = ctx.obj.manager
    skill = _run(
        "setEnabled",
        lambda: manager.set_enabled(name, enabled),
        name=name,
        enabled=enabled,
    )
    success(f"{'Enabled' if skill.enabled else 'Disabled'} skill {escape(skill.name)}")


@app.command()
def enable(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill name"),
) -> None:
    """Allow the agent to load a skill."""
    _set_enabled(ctx, name, True)


@app.command()
def disable(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill name"),
) -> None:
    """Keep a skill installed but stop the agent from loading it."""
    _set_enabled(ctx, name, False)


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(False, "--show", "-s", help="Show current configuration"),
    path: bool = typer.Option(False, "--path", "-p", help="Show config file path"),
) -> None:
    """View configuration."""
    state: _State = ctx.obj
    if path:
        typer.echo(str(state.config_manager.config_path))
        return
    if show:
        table = Table(title="Configuration")
        table.add_column("Setting", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")
        _flat_table(table, state.config.model_dump())
        table.add_row("skills_root (resolved)", str(state.config.skills_root))
        table.add_row("enablement_file (resolved)", str(state.config.enablement_file))
        console.print(table)
        return
    info(f"Config file: {state.config_manager.config_path}")
    info(f"Config file exists: {state.config_manager.config_path.exists()}")
    info(f"Skills root: {state.config.skills_root}")


def _flat_table(table: Table, data: dict, prefix: str = "") -> None:
    """Flatten nested dict into table rows."""
    for key, value in data.items():
        full_key = f"{prefix}{key}" if not prefix else f"{prefix}.{key}"
        if isinstance(value, dict):
            _flat_table(table, value, full_key)
        else:
            table.add_row(full_key, str(value))


if __name__ == "__main__":
    app()
