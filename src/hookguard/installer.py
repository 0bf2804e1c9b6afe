"""Git hook installation: write and remove the scripts git invokes."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from .core.config import HOOK_TYPES
from .core.errors import HookContextError

logger = logging.getLogger(__name__)

MARKER = "# managed by hookguard"

HOOK_SCRIPT = """#!/bin/sh
{marker}
# Runs the {hook_type} hooks configured in .hookguard/settings.json
exec hookguard run {hook_type} "$@"
"""


class GitHooksInstaller:
    """Install or remove hookguard's scripts in ``.git/hooks``."""

    def __init__(self, repo_root: Path, hook_types: tuple[str, ...] = HOOK_TYPES) -> None:
        self.repo_root = Path(repo_root)
        self.hook_types = hook_types
        self.hooks_dir = self.repo_root / ".git" / "hooks"

    def is_git_repository(self) -> bool:
        return (self.repo_root / ".git").is_dir()

    def _is_ours(self, path: Path) -> bool:
        try:
            return MARKER in path.read_text(errors="replace")
        except OSError:
            return False

    def install(self, force: bool = False) -> list[str]:
        """Write a script for each hook type. Foreign scripts are kept as ``.bak``."""
        if not self.is_git_repository():
            raise HookContextError(f"{self.repo_root} is not a git repository")
        self.hooks_dir.mkdir(parents=True, exist_ok=True)

        installed = []
        for hook_type in self.hook_types:
            path = self.hooks_dir / hook_type
            if path.exists() and not self._is_ours(path):
                backup = path.with_name(f"{hook_type}.bak")
                if backup.exists() and not force:
                    logger.warning("%s exists and %s is taken; skipping", path, backup.name)
                    continue
                path.replace(backup)
            path.write_text(HOOK_SCRIPT.format(marker=MARKER, hook_type=hook_type))
            os.chmod(path, stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH)
            installed.append(hook_type)
        return installed

    def uninstall(self) -> list[str]:
        """Remove our scripts and restore any backed up ones."""
        removed = []
        for hook_type in self.hook_types:
            path = self.hooks_dir / hook_type
            if not path.exists() or not self._is_ours(path):
                continue
            path.unlink()
            backup = path.with_name(f"{hook_type}.bak")
            if backup.exists():
                backup.replace(path)
            removed.append(hook_type)
        return removed
