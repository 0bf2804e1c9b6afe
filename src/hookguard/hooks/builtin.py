"""Built-in hooks: command, trailing-whitespace, merge-conflicts."""

from __future__ import annotations

import re

from ..core.errors import InvalidHookDefinition
from .base import Hook
from .models import HookStatus
from .registry import register

CONFLICT_MARKER = re.compile(rb"^(<{7}|={7}|>{7})(\s|$)", re.MULTILINE)


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


@register("command")
class CommandHook(Hook):
    """Runs ``command`` (plus ``flags``); any non-zero exit fails the hook."""

    default_description = "Run custom command"

    def run(self):
        cmd = self.command
        if not cmd:
            raise InvalidHookDefinition(f"hook {self.name!r} has no command")
        files = self.applicable_files() if self.settings.get("pass_files") else []
        result = self.execute(cmd, files)
        if result.success:
            return HookStatus.PASS
        output = (_decode(result.stdout) + _decode(result.stderr)).rstrip("\n")
        return HookStatus.FAIL, output


class _FileCheck(Hook):
    requires_files = True

    def _read(self, path: str) -> bytes | None:
        try:
            return (self.context.root / path).read_bytes()
        except (FileNotFoundError, IsADirectoryError):
            return None


@register("trailing-whitespace")
class TrailingWhitespace(_FileCheck):
    default_description = "Check for trailing whitespace"

    def run(self):
        problems = []
        for path in self.applicable_files():
            data = self._read(path)
            if data is None or b"\0" in data:
                continue
            for lineno, line in enumerate(data.splitlines(), 1):
                if line != line.rstrip(b" \t"):
                    problems.append(f"{path}:{lineno}: trailing whitespace")
        if problems:
            return HookStatus.FAIL, "\n".join(problems)
        return HookStatus.PASS


@register("merge-conflicts")
class MergeConflicts(_FileCheck):
    default_description = "Check for merge conflicts"

    def run(self):
        problems = []
        for path in self.applicable_files():
            data = self._read(path)
            if data is None:
                continue
            for match in CONFLICT_MARKER.finditer(data):
                lineno = data.count(b"\n", 0, match.start()) + 1
                problems.append(f"{path}:{lineno}: merge conflict marker")
        if problems:
            return HookStatus.FAIL, "\n".join(problems)
        return HookStatus.PASS
