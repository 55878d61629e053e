"""Skill installer — synchronize a target directory with the discovered skills.

A sync pass against one target runs in a fixed order:

1. prune   — remove skills an earlier pass installed that are no longer selected
2. cleanup — remove the current copies of every skill about to be installed
3. install — copy each skill's full directory tree into the target
4. record  — remember which skills the target now holds

Directories in the target that were never installed by a sync are left alone.
Failures for a single skill are collected in the result, never raised.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import Iterable

from skillsync.skills.discovery import SkillDiscoverer
from skillsync.skills.models import (
    Catalog,
    CleanupResult,
    SkillDescriptor,
    SyncError,
    SyncResult,
)
from skillsync.sync.state import ManagedState
from skillsync.sync.targets import CLAUDE_CODE, GITHUB_COPILOT, resolve_target

logger = logging.getLogger(__name__)


class SkillInstaller:
    """Installs skills from the source roots into target directories."""

    def __init__(self, discoverer: SkillDiscoverer):
        self.discoverer = discoverer

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    def sync_target(
        self, target_dir: str | Path, selected_modules: Iterable[str] = ()
    ) -> SyncResult:
        """Discover skills and sync them into ``target_dir``.

        An empty selection leaves the target untouched.
        """
        catalog = self.discoverer.discover_catalog(selected_modules)
        return self.sync_catalog(target_dir, catalog)

    def sync_catalog(
        self, target_dir: str | Path, catalog: Catalog | list[SkillDescriptor]
    ) -> SyncResult:
        """Sync an already discovered catalog into ``target_dir``.

        The same catalog can be synced into any number of targets.
        """
        skills = list(catalog)
        if not skills:
            logger.debug("No skills to sync into %s; leaving it untouched", target_dir)
            return SyncResult()

        target = Path(target_dir)
        self.prune(target, skills)
        self.cleanup(target, skills)
        result = self.install(target, skills)

        managed = [s.name for s in skills if _is_skill_dir(target / s.name)]
        try:
            ManagedState(target).save(managed)
        except OSError as e:
            logger.warning("Could not record synced skills in %s: %s", target, e)

        return result

    def install_for_target(
        self,
        project_dir: str | Path,
        target: str,
        selected_modules: Iterable[str] = (),
    ) -> SyncResult:
        """Sync skills into a preset target (or path) under ``project_dir``."""
        return self.sync_target(resolve_target(project_dir, target), selected_modules)

    def install_for_github_copilot(
        self, project_dir: str | Path, selected_modules: Iterable[str] = ()
    ) -> SyncResult:
        return self.install_for_target(project_dir, GITHUB_COPILOT, selected_modules)

    def install_for_claude_code(
        self, project_dir: str | Path, selected_modules: Iterable[str] = ()
    ) -> SyncResult:
        return self.install_for_target(project_dir, CLAUDE_CODE, selected_modules)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def cleanup(self, target_dir: str | Path, skills: Iterable[SkillDescriptor]) -> int:
        """Remove previously installed copies of ``skills`` from the target.

        Returns the number of skill directories removed.
        """
        return self.cleanup_detailed(target_dir, skills).removed

    def cleanup_detailed(
        self, target_dir: str | Path, skills: Iterable[SkillDescriptor]
    ) -> CleanupResult:
        """Like :meth:`cleanup`, but also report entries that could not be removed."""
        return _remove_skill_dirs(Path(target_dir), {s.name for s in skills})

    def uninstall(
        self, target_dir: str | Path, skills: Iterable[SkillDescriptor]
    ) -> CleanupResult:
        """Remove ``skills`` from the target and drop them from its sync record."""
        target = Path(target_dir)
        result = self.cleanup_detailed(target, skills)
        if result.removed_skills:
            try:
                ManagedState(target).discard(result.removed_skills)
            except OSError as e:
                logger.warning("Could not update sync record in %s: %s", target, e)
        return result

    def prune(self, target_dir: str | Path, skills: Iterable[SkillDescriptor]) -> int:
        """Remove skills recorded by an earlier sync that are no longer selected."""
        target = Path(target_dir)
        current = {s.name for s in skills}
        stale = set(ManagedState(target).load()) - current
        if not stale:
            return 0

        logger.debug("Pruning %d deselected skill(s) from %s", len(stale), target)
        return _remove_skill_dirs(target, stale).removed

    def install(self, target_dir: str | Path, skills: Iterable[SkillDescriptor]) -> SyncResult:
        """Copy every skill's directory tree into ``target_dir``.

        Existing files are overwritten. A failed copy is recorded in
        ``errors`` and the remaining skills are still installed.
        """
        target = Path(target_dir)
        skills = list(skills)
        result = SyncResult()

        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Cannot create target directory %s: %s", target, e)
            result.errors = [SyncError(skill=s.name, error=str(e)) for s in skills]
            return result

        for skill in skills:
            destination = target / skill.name
            try:
                if destination.is_symlink():
                    raise FileExistsError(
                        errno.EEXIST, "Refusing to install through a symlink", str(destination)
                    )
                shutil.copytree(
                    skill.source_path,
                    destination,
                    symlinks=True,
                    dirs_exist_ok=True,
                )
                result.installed += 1
                logger.debug("Installed %s (%s) -> %s", skill.name, skill.source, destination)
            except OSError as e:
                logger.warning("Failed to install skill %s: %s", skill.name, e)
                result.errors.append(SyncError(skill=skill.name, error=str(e)))

        return result


def _remove_skill_dirs(target: Path, names: set[str]) -> CleanupResult:
    """Remove the immediate subdirectories of ``target`` named in ``names``."""
    result = CleanupResult()
    if not names:
        return result

    try:
        with os.scandir(target) as it:
            matches = [
                e for e in it if e.is_dir(follow_symlinks=False) and e.name in names
            ]
    except (FileNotFoundError, NotADirectoryError):
        return result
    except OSError as e:
        logger.warning("Cannot read target directory %s: %s", target, e)
        return result

    for entry in matches:
        try:
            shutil.rmtree(entry.path)
            result.removed += 1
            result.removed_skills.append(entry.name)
        except OSError as e:
            # The install step still copies over whatever is left behind.
            logger.warning("Could not remove %s: %s", entry.path, e)
            result.failures.append(SyncError(skill=entry.name, error=str(e)))

    return result


def _is_skill_dir(path: Path) -> bool:
    """True for a real directory, not a symlink to one."""
    return os.path.isdir(path) and not os.path.islink(path)
