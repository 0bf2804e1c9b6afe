"""Configuration: settings files, env overrides, per-hook settings."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigurationError

PROJECT_DIR_NAME = ".hookguard"
ALL_HOOKS_KEY = "ALL"

HOOK_TYPES = (
    "pre-commit",
    "commit-msg",
    "pre-push",
    "post-checkout",
    "post-commit",
    "post-merge",
    "post-rewrite",
    "pre-rebase",
    "prepare-commit-msg",
)


@dataclass
class Config:
    cwd: Path = field(default_factory=Path.cwd)
    global_dir: Path = field(default_factory=lambda: Path.home() / ".hookguard")
    project_dir: Path | None = None  # explicit override; None = <cwd>/.hookguard
    verbose: bool = False
    requirements_file: str = ""
    plugin_directory: str = ""
    # hook type -> hook name -> settings, in definition order
    hooks: dict[str, dict[str, dict]] = field(default_factory=dict)
    skipped_hooks: set[str] = field(default_factory=set)

    @property
    def primary_project_dir(self) -> Path:
        if self.project_dir is not None:
            return self.project_dir
        return self.cwd / PROJECT_DIR_NAME

    @property
    def plugin_dir(self) -> Path:
        if self.plugin_directory:
            return (self.cwd / self.plugin_directory).resolve()
        return self.primary_project_dir / "plugins"

    def hook_names(self, hook_type: str) -> list[str]:
        """Configured hook names for *hook_type*, in order, without ALL."""
        return [n for n in self.hooks.get(hook_type, {}) if n != ALL_HOOKS_KEY]

    def for_hook(self, hook_type: str, name: str) -> dict:
        """Settings for one hook: the ALL entry overlaid with the hook's own."""
        section = self.hooks.get(hook_type, {})
        return _deep_merge(section.get(ALL_HOOKS_KEY, {}), section.get(name, {}))


def _deep_merge(base: dict, override: dict) -> dict:
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def parse_skip_list(value: str) -> set[str]:
    """Parse SKIP="a,b c" into {"a", "b", "c"}."""
    return {name for name in re.split(r"[,\s]+", value) if name}


def _read_settings(path: Path) -> dict:
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"cannot read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be an object")
    return data


def _apply_settings(config: Config, path: Path) -> None:
    """Apply a single settings.json file to config."""
    if not path.exists():
        return
    data = _read_settings(path)
    if "requirements_file" in data:
        config.requirements_file = str(data["requirements_file"])
    if "plugin_directory" in data:
        config.plugin_directory = str(data["plugin_directory"])

    hooks = data.get("hooks", {})
    if not isinstance(hooks, dict):
        raise ConfigurationError(f"{path}: 'hooks' must be an object")
    for hook_type, section in hooks.items():
        if hook_type not in HOOK_TYPES:
            raise ConfigurationError(f"{path}: unknown hook type {hook_type!r}")
        if not isinstance(section, dict) or not all(
            isinstance(v, dict) for v in section.values()
        ):
            raise ConfigurationError(f"{path}: hooks.{hook_type} must map names to objects")
        config.hooks[hook_type] = _deep_merge(config.hooks.get(hook_type, {}), section)


def load_config(
    cwd: Path | None = None,
    verbose: bool = False,
) -> Config:
    """Load config with priority: CLI args > env > .env > settings files > defaults."""
    load_dotenv(find_dotenv(usecwd=True))

    config = Config(cwd=cwd) if cwd is not None else Config()
    config.verbose = verbose

    _apply_settings(config, config.global_dir / "settings.json")
    _apply_settings(config, config.primary_project_dir / "settings.json")
    _apply_settings(config, config.primary_project_dir / "settings.local.json")

    if os.getenv("HOOKGUARD_VERBOSE", "").lower() in ("1", "true", "yes"):
        config.verbose = True
    if skip := os.getenv("SKIP"):
        config.skipped_hooks = parse_skip_list(skip)

    if verbose:
        config.verbose = True

    return config


def settings_template() -> dict[str, Any]:
    """Starter settings written by ``hookguard install`` when none exist."""
    return {
        "hooks": {
            "pre-commit": {
                "trailing-whitespace": {"enabled": True},
                "merge-conflicts": {"enabled": True, "required": True},
            }
        }
    }
