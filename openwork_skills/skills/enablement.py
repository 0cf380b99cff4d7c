"""Persistent enabled/disabled flags for skills.

Stored as a JSON object outside the skills root so toggling a skill never
rewrites its SKILL.md::

    {"pdf-report": {"enabled": false}}

Only disabled skills have a record; a skill without one is enabled.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from openwork_skills.core.logging import get_logger


class EnablementStore:
    """JSON-file backed mapping of skill name to enabled flag."""

    def __init__(self, path: Path):
        """
        Args:
            path: Location of the JSON file (created on first write)
        """
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            get_logger().warning("Ignoring unreadable skills config %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            get_logger().warning("Ignoring malformed skills config %s", self.path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def is_enabled(self, name: str) -> bool:
        """Return the flag for ``name``; True when no record exists."""
        record = self._read().get(name)
        if not isinstance(record, dict):
            return True
        enabled = record.get("enabled")
        return enabled if isinstance(enabled, bool) else True

    def set_enabled(self, name: str, enabled: bool) -> None:
        """Upsert the flag for ``name``."""
        data = self._read()
        record = data.get(name)
        record = dict(record) if isinstance(record, dict) else {}

        if enabled:
            record.pop("enabled", None)
        else:
            record["enabled"] = False

        if record:
            data[name] = record
        else:
            data.pop(name, None)

        self._write(data)

    def remove(self, name: str) -> None:
        """Purge the record for ``name``. No-op if absent."""
        data = self._read()
        if name in data:
            del data[name]
            self._write(data)

    def disabled(self) -> set[str]:
        """Names of all skills currently disabled."""
        return {
            name
            for name, record in self._read().items()
            if isinstance(record, dict) and record.get("enabled") is False
        }
