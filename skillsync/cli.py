"""skillsync CLI — discover skills and install them into IDE skill folders."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from skillsync import __version__

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """skillsync — keep agent skill folders in sync with their sources.

    Skills are discovered under the core root and any selected module
    roots, then copied into one or more target directories. Skills a
    target received from an earlier sync are replaced, and skills no
    longer selected are removed; everything else in the target is left
    alone.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_settings(
    config_path: str | None,
    search_dir: Path,
    source_root: str | None,
    modules: tuple,
):
    """Merge the config file (if any) with command-line overrides."""
    from skillsync.config import DEFAULT_CONFIG_FILE, ConfigError, SyncConfig, load_config

    try:
        if config_path:
            config = load_config(config_path)
        elif (search_dir / DEFAULT_CONFIG_FILE).exists():
            config = load_config(search_dir / DEFAULT_CONFIG_FILE)
        else:
            config = SyncConfig()

        if source_root:
            config.source_root = Path(source_root)
        if modules:
            config.modules = list(modules)
        config.require_source_root()
    except ConfigError as e:
        raise click.ClickException(str(e))

    return config


def _build_installer(config):
    from skillsync.skills.discovery import SkillDiscoverer, SourceLayout
    from skillsync.sync.installer import SkillInstaller

    discoverer = SkillDiscoverer(
        SourceLayout(config.source_root),
        skills_folder=config.skills_folder,
        manifest_filename=config.manifest_filename,
    )
    return SkillInstaller(discoverer)


def _print_diagnostics(catalog):
    for d in catalog.diagnostics:
        console.print(f"  [yellow]![/] {escape(str(d))}")


# ── Discover ─────────────────────────────────────────────────────────


@main.command()
@click.option("--source-root", "-s", default=None, help="Directory holding core/ and modules/")
@click.option("--module", "-m", "modules", multiple=True, help="Module to include (repeatable)")
@click.option("--config", "-c", "config_path", default=None, help="Path to skillsync.yaml")
@click.option("--json", "as_json", is_flag=True, help="Print the catalog as JSON")
def discover(source_root: str | None, modules: tuple, config_path: str | None, as_json: bool):
    """List the skills available from core and the selected modules."""
    config = _load_settings(config_path, Path.cwd(), source_root, modules)
    installer = _build_installer(config)
    catalog = installer.discoverer.discover_catalog(config.modules)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "skills": [s.to_dict() for s in catalog],
                    "diagnostics": [str(d) for d in catalog.diagnostics],
                },
                indent=2,
            )
        )
        return

    if not catalog.skills:
        console.print("[yellow]No skills found.[/]")
        _print_diagnostics(catalog)
        return

    table = Table(title=f"Skills ({len(catalog)} found)")
    table.add_column("Skill", style="cyan")
    table.add_column("Source")
    table.add_column("Name")
    table.add_column("Description")

    for skill in catalog:
        table.add_row(
            skill.name,
            skill.source,
            skill.metadata.name,
            skill.metadata.description[:60],
        )

    console.print(table)
    _print_diagnostics(catalog)


# ── Sync ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("project_dir", default=".")
@click.option("--source-root", "-s", default=None, help="Directory holding core/ and modules/")
@click.option("--module", "-m", "modules", multiple=True, help="Module to include (repeatable)")
@click.option(
    "--target",
    "-t",
    "targets",
    multiple=True,
    help="Preset (github-copilot, claude-code) or directory (repeatable)",
)
@click.option("--config", "-c", "config_path", default=None, help="Path to skillsync.yaml")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def sync(
    project_dir: str,
    source_root: str | None,
    modules: tuple,
    targets: tuple,
    config_path: str | None,
    as_json: bool,
):
    """Install the selected skills into each target under PROJECT_DIR.

    Exits with status 1 if any skill failed to install.
    """
    from skillsync.sync.targets import resolve_target

    project = Path(project_dir)
    config = _load_settings(config_path, project, source_root, modules)
    if targets:
        config.targets = list(targets)

    installer = _build_installer(config)
    catalog = installer.discoverer.discover_catalog(config.modules)

    results = {}
    for target in config.targets:
        target_dir = resolve_target(project, target)
        results[target] = (target_dir, installer.sync_catalog(target_dir, catalog))

    failed = any(not result.succeeded for _, result in results.values())

    if as_json:
        click.echo(
            json.dumps(
                {
                    target: {"path": str(path), **result.to_dict()}
                    for target, (path, result) in results.items()
                },
                indent=2,
            )
        )
    else:
        console.print(f"\n[bold blue]skillsync[/] — Syncing {len(catalog)} skill(s)\n")
        if not catalog.skills:
            console.print("[yellow]No skills selected; targets left untouched.[/]")

        for target, (path, result) in results.items():
            status = "[green]OK[/]" if result.succeeded else "[red]ERRORS[/]"
            console.print(
                f"  {status} {escape(target)}: {result.installed} installed -> {escape(str(path))}"
            )
            for error in result.errors:
                console.print(f"    [red]x[/] {escape(error.skill)}: {escape(error.error)}")

        _print_diagnostics(catalog)

    if failed:
        raise SystemExit(1)


# ── Cleanup ──────────────────────────────────────────────────────────


@main.command()
@click.argument("target_dir")
@click.option("--source-root", "-s", default=None, help="Directory holding core/ and modules/")
@click.option("--module", "-m", "modules", multiple=True, help="Module to include (repeatable)")
@click.option("--config", "-c", "config_path", default=None, help="Path to skillsync.yaml")
def cleanup(target_dir: str, source_root: str | None, modules: tuple, config_path: str | None):
    """Remove installed copies of the selected skills from TARGET_DIR."""
    config = _load_settings(config_path, Path.cwd(), source_root, modules)
    installer = _build_installer(config)
    skills = installer.discoverer.discover(config.modules)

    result = installer.uninstall(target_dir, skills)
    console.print(f"  Removed {result.removed} skill(s) from {escape(target_dir)}")
    for failure in result.failures:
        console.print(f"    [red]x[/] {escape(failure.skill)}: {escape(failure.error)}")


if __name__ == "__main__":
    main()
