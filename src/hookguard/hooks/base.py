"""Hook base class: config-driven HookUnit with subprocess helpers."""

from __future__ import annotations

import fnmatch
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..core.errors import InvalidHookDefinition
from ..core.process import SubprocessResult, spawn, spawn_detached
from .models import HookStatus

if TYPE_CHECKING:
    from ..core.config import Config
    from .context import HookContext

_STATUS_OVERRIDES = ("pass", "warn", "fail")


class Hook:
    """A check configured under ``hooks.<hook-type>.<name>``.

    Subclasses implement :meth:`run`, returning a HookStatus or a
    ``(HookStatus, output)`` pair. Everything else is driven by settings.
    """

    # True for hooks that only make sense with files to inspect
    requires_files = False
    default_description = ""

    def __init__(self, name: str, settings: dict, context: HookContext, config: Config) -> None:
        self.name = name
        self.settings = settings
        self.context = context
        self.config = config
        for key in ("on_fail", "on_warn"):
            value = settings.get(key)
            if value is not None and value not in _STATUS_OVERRIDES:
                raise InvalidHookDefinition(
                    f"hook {name!r}: {key} must be one of {', '.join(_STATUS_OVERRIDES)}"
                )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

    @property
    def description(self) -> str:
        return self.settings.get("description") or self.default_description or f"Run {self.name}"

    # ── HookUnit interface ──────────────────────────────────────────

    def enabled(self) -> bool:
        return bool(self.settings.get("enabled", True))

    def required(self) -> bool:
        return bool(self.settings.get("required", False))

    def skip_requested(self) -> bool:
        return bool(self.settings.get("skip", False)) or self.name in self.config.skipped_hooks

    def would_run(self) -> bool:
        if not self.enabled():
            return False
        needs_files = self.settings.get("requires_files", self.requires_files)
        return not (needs_files and not self.applicable_files())

    def run(self) -> HookStatus | tuple[HookStatus, str]:
        raise NotImplementedError

    def run_and_transform(self) -> tuple[HookStatus, str]:
        executable = self.settings.get("required_executable")
        if executable and shutil.which(executable) is None:
            return HookStatus.FAIL, (
                f"{self.name} requires '{executable}', which is not installed or not on PATH"
            )

        result = self.run()
        if isinstance(result, tuple):
            status, output = result
        else:
            status, output = result, ""
        return self._transform_status(HookStatus(status)), output or ""

    def _transform_status(self, status: HookStatus) -> HookStatus:
        if status is HookStatus.FAIL and self.settings.get("on_fail"):
            return HookStatus(self.settings["on_fail"])
        if status is HookStatus.WARN and self.settings.get("on_warn"):
            return HookStatus(self.settings["on_warn"])
        return status

    # ── Helpers for subclasses ──────────────────────────────────────

    @property
    def command(self) -> list[str]:
        cmd = self.settings.get("command", [])
        if isinstance(cmd, str):
            cmd = shlex.split(cmd)
        return list(cmd) + list(self.settings.get("flags", []))

    def execute(self, args: Sequence[str], files: Sequence[str] = ()) -> SubprocessResult:
        return spawn([*args, *files], cwd=self.context.root)

    def execute_in_background(self, args: Sequence[str]) -> subprocess.Popen:
        return spawn_detached(list(args), cwd=self.context.root)

    def applicable_files(self) -> list[str]:
        include = self.settings.get("include", [])
        exclude = self.settings.get("exclude", [])
        if isinstance(include, str):
            include = [include]
        if isinstance(exclude, str):
            exclude = [exclude]
        files = []
        for path in self.context.modified_files():
            if include and not any(fnmatch.fnmatch(path, pat) for pat in include):
                continue
            if any(fnmatch.fnmatch(path, pat) for pat in exclude):
                continue
            files.append(path)
        return files
