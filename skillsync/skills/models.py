"""Skill data models — descriptors, discovery diagnostics, and sync outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


@dataclass(frozen=True)
class SkillMetadata:
    """The two header fields read from a SKILL.md manifest."""

    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class SkillDescriptor:
    """A single discovered skill."""

    name: str  # Directory name, used as the install folder name
    source: str  # "core" or the module identifier
    source_path: Path
    manifest_path: Path
    metadata: SkillMetadata = field(default_factory=SkillMetadata)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "source": self.source,
            "source_path": str(self.source_path),
            "manifest_path": str(self.manifest_path),
            "metadata": {
                "name": self.metadata.name,
                "description": self.metadata.description,
            },
        }


@dataclass(frozen=True)
class DiscoveryDiagnostic:
    """A discovery step that degraded instead of failing."""

    source: str
    path: Path
    message: str

    def __str__(self) -> str:
        return f"[{self.source}] {self.path}: {self.message}"


@dataclass
class Catalog:
    """Result of one discovery pass."""

    skills: list[SkillDescriptor] = field(default_factory=list)
    diagnostics: list[DiscoveryDiagnostic] = field(default_factory=list)

    @property
    def names(self) -> set[str]:
        return {s.name for s in self.skills}

    def __len__(self) -> int:
        return len(self.skills)

    def __iter__(self) -> Iterator[SkillDescriptor]:
        return iter(self.skills)


@dataclass
class SyncError:
    """A skill that could not be copied (or removed)."""

    skill: str
    error: str


@dataclass
class SyncResult:
    """Outcome of one install pass into one target directory."""

    installed: int = 0
    skipped: int = 0
    errors: list[SyncError] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "installed": self.installed,
            "skipped": self.skipped,
            "errors": [{"skill": e.skill, "error": e.error} for e in self.errors],
        }


@dataclass
class CleanupResult:
    """Outcome of removing managed skills from a target."""

    removed: int = 0
    removed_skills: list[str] = field(default_factory=list)
    failures: list[SyncError] = field(default_factory=list)
