"""Managed state — the record of which skills a target directory received.

Every non-empty sync writes the installed skill names next to the skills
themselves. The next sync reads it back to find skills that were dropped
from the selection and must be removed.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


class ManagedState:
    """Reads and writes the managed-skills record for one target."""

    STATE_FILE = ".skillsync.json"

    def __init__(self, target_dir: str | Path):
        self.target_dir = Path(target_dir)
        self.state_file = self.target_dir / self.STATE_FILE

    def load(self) -> list[str]:
        """Return the skill names recorded by the previous sync.

        A missing, unreadable or malformed record counts as empty.
        """
        try:
            with open(self.state_file, encoding="utf-8") as f:
                data = json.load(f)
        except (FileNotFoundError, NotADirectoryError):
            return []
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable sync record %s: %s", self.state_file, e)
            return []

        skills = data.get("skills", []) if isinstance(data, dict) else None
        if not isinstance(skills, list):
            logger.warning("Ignoring malformed sync record %s", self.state_file)
            return []
        return [s for s in skills if isinstance(s, str) and s]

    def save(self, names: list[str]) -> None:
        """Record the skill names installed by this sync."""
        self.target_dir.mkdir(parents=True, exist_ok=True)
        entry = {
            "skills": sorted(set(names)),
            "synced_at": datetime.now(timezone.utc).isoformat(),
        }
        with open(self.state_file, "w", encoding="utf-8") as f:
            json.dump(entry, f, indent=2)
            f.write("\n")

    def discard(self, names: list[str]) -> None:
        """Drop ``names`` from the record; other entries are kept."""
        recorded = self.load()
        dropped = set(names)
        remaining = [n for n in recorded if n not in dropped]
        if remaining != recorded:
            self.save(remaining)
