"""Install targets — where each supported IDE looks for skills."""

from __future__ import annotations

from pathlib import Path

GITHUB_COPILOT = "github-copilot"
CLAUDE_CODE = "claude-code"

# Target id -> skills directory relative to the project root
TARGET_PRESETS: dict[str, tuple[str, ...]] = {
    GITHUB_COPILOT: (".github", "skills"),
    # .claude/skills is the legacy location; Claude also reads .github/skills
    CLAUDE_CODE: (".claude", "skills"),
}

DEFAULT_TARGETS = (GITHUB_COPILOT, CLAUDE_CODE)


def resolve_target(project_dir: str | Path, target: str) -> Path:
    """Turn a preset id or a path into the target skills directory.

    Relative paths are taken relative to ``project_dir``.
    """
    project = Path(project_dir)
    preset = TARGET_PRESETS.get(target)
    if preset:
        return project.joinpath(*preset)

    path = Path(target).expanduser()
    return path if path.is_absolute() else project / path
