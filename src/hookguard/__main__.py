"""CLI entry point: run, list-hooks, install, uninstall."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .core.config import HOOK_TYPES, load_config, settings_template
from .core.errors import ConfigurationError, HookContextError, HookLoadError
from .core.log import setup_logging
from .hooks import HookLoader, HookRunner, build_context
from .installer import GitHooksInstaller
from .output import Printer

console = Console()
err_console = Console(stderr=True)

EXIT_SUCCESS = 0
EXIT_HOOK_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_LOAD_ERROR = 3
EXIT_CONTEXT_ERROR = 4

hook_type_argument = click.argument(
    "hook_type", required=False, default="pre-commit", type=click.Choice(HOOK_TYPES)
)


def _load(verbose: bool):
    try:
        config = load_config(verbose=verbose)
    except ConfigurationError as e:
        err_console.print(f"error: {e}", style="bold red")
        sys.exit(EXIT_CONFIG_ERROR)
    setup_logging(config.verbose)
    return config


@click.group()
@click.version_option(__version__, prog_name="hookguard")
def cli():
    """hookguard — run repository checks from git hooks."""


# ── run ─────────────────────────────────────────────────────────────


@cli.command()
@hook_type_argument
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
@click.option("--all-files", "-a", is_flag=True, help="Check every tracked file")
@click.option("--quiet", "-q", is_flag=True, help="Only show hooks that did not pass")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def run(hook_type: str, git_args: tuple[str, ...], all_files: bool, quiet: bool, verbose: bool):
    """Run the hooks configured for HOOK_TYPE (default: pre-commit)."""
    config = _load(verbose)
    context = build_context(hook_type, root=config.cwd, all_files=all_files, args=git_args)
    printer = Printer(hook_type, console=console, quiet=quiet)
    runner = HookRunner(config, context, printer)

    try:
        ok = runner.run()
    except HookLoadError as e:
        err_console.print(f"error: {e}", style="bold red", markup=False)
        sys.exit(EXIT_LOAD_ERROR)
    except HookContextError as e:
        err_console.print(f"error: {e}", style="bold red", markup=False)
        sys.exit(EXIT_CONTEXT_ERROR)

    sys.exit(EXIT_SUCCESS if ok else EXIT_HOOK_FAILED)


# ── list-hooks ──────────────────────────────────────────────────────


@cli.command("list-hooks")
@hook_type_argument
def list_hooks(hook_type: str):
    """List the hooks configured for HOOK_TYPE."""
    config = _load(False)
    context = build_context(hook_type, root=config.cwd)
    try:
        hooks = HookLoader(config, context).load_hooks()
    except HookLoadError as e:
        err_console.print(f"error: {e}", style="bold red", markup=False)
        sys.exit(EXIT_LOAD_ERROR)

    if not hooks:
        console.print(f"no {hook_type} hooks configured", style="dim")
        return
    table = Table(title=f"{hook_type} hooks", show_edge=False)
    table.add_column("name", style="bold")
    table.add_column("description")
    table.add_column("enabled")
    table.add_column("required")
    for hook in hooks:
        table.add_row(
            hook.name,
            hook.description,
            "yes" if hook.enabled() else "no",
            "yes" if hook.required() else "no",
        )
    console.print(table)


# ── install / uninstall ─────────────────────────────────────────────


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite existing .bak backups")
def install(force: bool):
    """Install git hook scripts that call hookguard."""
    config = _load(False)
    installer = GitHooksInstaller(config.cwd)
    try:
        installed = installer.install(force=force)
    except HookContextError as e:
        err_console.print(f"error: {e}", style="bold red")
        sys.exit(EXIT_CONTEXT_ERROR)

    settings_path = config.primary_project_dir / "settings.json"
    if not settings_path.exists():
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        settings_path.write_text(json.dumps(settings_template(), indent=2) + "\n")
        console.print(f"wrote starter settings to {_relative(settings_path, config.cwd)}")
    console.print(f"installed {len(installed)} git hook(s)", style="green")


@cli.command()
def uninstall():
    """Remove hookguard's git hook scripts."""
    config = _load(False)
    removed = GitHooksInstaller(config.cwd).uninstall()
    console.print(f"removed {len(removed)} git hook(s)")


def _relative(path: Path, base: Path) -> str:
    try:
        return str(path.relative_to(base))
    except ValueError:
        return str(path)


def main():
    cli()


if __name__ == "__main__":
    main()
