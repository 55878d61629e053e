"""Skill discovery — find skills under the core root and selected module roots.

Layout on the source side:

    <source_root>/
    ├── core/
    │   └── skills/
    │       └── <skill>/SKILL.md
    └── modules/
        └── <module>/
            └── skills/
                └── <skill>/SKILL.md

A root without a ``skills/`` folder simply contributes no skills.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable

from skillsync.skills import CORE_SOURCE, MANIFEST_FILENAME, SKILLS_FOLDER
from skillsync.skills.metadata import parse_skill_metadata
from skillsync.skills.models import (
    Catalog,
    DiscoveryDiagnostic,
    SkillDescriptor,
    SkillMetadata,
)

logger = logging.getLogger(__name__)


class SourceLayout:
    """Where the core root and the module roots live."""

    CORE_DIR = "core"
    MODULES_DIR = "modules"

    def __init__(
        self,
        source_root: str | Path | None = None,
        core_root: str | Path | None = None,
        modules_root: str | Path | None = None,
    ):
        if source_root is None and (core_root is None or modules_root is None):
            raise ValueError("source_root or both core_root and modules_root are required")

        base = Path(source_root) if source_root is not None else None
        self.core_root = Path(core_root) if core_root is not None else base / self.CORE_DIR
        self.modules_root = (
            Path(modules_root) if modules_root is not None else base / self.MODULES_DIR
        )

    def module_root(self, module: str) -> Path:
        return self.modules_root / module

    def roots(self, selected_modules: Iterable[str] = ()) -> list[tuple[str, Path]]:
        """Return ``(source, root)`` pairs, core first, then modules in order."""
        pairs = [(CORE_SOURCE, self.core_root)]
        pairs.extend((m, self.module_root(m)) for m in selected_modules)
        return pairs


class SkillDiscoverer:
    """Walks source roots and builds a catalog of skills."""

    def __init__(
        self,
        layout: SourceLayout,
        skills_folder: str = SKILLS_FOLDER,
        manifest_filename: str = MANIFEST_FILENAME,
    ):
        self.layout = layout
        self.skills_folder = skills_folder
        self.manifest_filename = manifest_filename

    def discover(self, selected_modules: Iterable[str] = ()) -> list[SkillDescriptor]:
        """Discover all skills from core and the selected modules."""
        return self.discover_catalog(selected_modules).skills

    def discover_catalog(self, selected_modules: Iterable[str] = ()) -> Catalog:
        """Discover skills and keep any diagnostics raised along the way."""
        catalog = Catalog()

        for source, root in self.layout.roots(selected_modules):
            skills_dir = root / self.skills_folder
            try:
                info = _stat_or_none(skills_dir)
            except OSError as e:
                logger.warning("Cannot access skills folder %s: %s", skills_dir, e)
                catalog.diagnostics.append(DiscoveryDiagnostic(source, skills_dir, str(e)))
                continue

            if info is None or not stat.S_ISDIR(info.st_mode):
                logger.debug("No %s folder for %s at %s", self.skills_folder, source, root)
                continue

            skills, diagnostics = self.scan_skills_dir(skills_dir, source)
            catalog.skills.extend(skills)
            catalog.diagnostics.extend(diagnostics)

        logger.debug(
            "Discovered %d skill(s) with %d diagnostic(s)",
            len(catalog.skills),
            len(catalog.diagnostics),
        )
        return catalog

    def scan_skills_dir(
        self, skills_dir: str | Path, source: str
    ) -> tuple[list[SkillDescriptor], list[DiscoveryDiagnostic]]:
        """Collect the skills directly under one ``skills/`` folder.

        Entries are returned in filesystem order. An unreadable folder
        yields no skills and a single diagnostic.
        """
        skills_dir = Path(skills_dir)
        skills: list[SkillDescriptor] = []
        diagnostics: list[DiscoveryDiagnostic] = []

        try:
            with os.scandir(skills_dir) as it:
                entries = [e for e in it if e.is_dir(follow_symlinks=False)]
        except OSError as e:
            logger.warning("Cannot read skills folder %s: %s", skills_dir, e)
            diagnostics.append(DiscoveryDiagnostic(source, skills_dir, str(e)))
            return [], diagnostics

        for entry in entries:
            skill_path = Path(entry.path).absolute()
            manifest_path = skill_path / self.manifest_filename
            try:
                if _stat_or_none(manifest_path) is None:
                    continue
            except OSError as e:
                logger.warning("Cannot access manifest %s: %s", manifest_path, e)
                diagnostics.append(DiscoveryDiagnostic(source, manifest_path, str(e)))
                continue

            try:
                metadata = parse_skill_metadata(manifest_path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Cannot read manifest %s: %s", manifest_path, e)
                diagnostics.append(DiscoveryDiagnostic(source, manifest_path, str(e)))
                metadata = SkillMetadata()

            skills.append(
                SkillDescriptor(
                    name=entry.name,
                    source=source,
                    source_path=skill_path,
                    manifest_path=manifest_path,
                    metadata=metadata,
                )
            )

        return skills, diagnostics


def _stat_or_none(path: Path) -> os.stat_result | None:
    """Stat ``path``, returning None when nothing is there.

    Any other OSError (permissions, I/O) is raised to the caller.
    """
    try:
        return os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return None
