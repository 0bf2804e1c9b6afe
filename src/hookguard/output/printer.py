"""Rich console printer: renders run and hook lifecycle events."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from ..hooks.models import HookStatus, HookUnit

STATUS_LABELS = {
    HookStatus.PASS: ("OK", "green"),
    HookStatus.WARN: ("WARNING", "yellow"),
    HookStatus.FAIL: ("FAILED", "red"),
    HookStatus.INTERRUPT: ("INTERRUPTED", "red"),
}

DESCRIPTION_WIDTH = 60


def _describe(hook: HookUnit) -> str:
    return getattr(hook, "description", "") or hook.name


class Printer:
    """Result sink that writes to a Rich console."""

    def __init__(self, hook_type: str, console: Console | None = None, quiet: bool = False) -> None:
        self.hook_type = hook_type
        self.console = console or Console()
        self.quiet = quiet

    def start_run(self) -> None:
        if not self.quiet:
            self.console.print(f"Running {self.hook_type} hooks", style="bold")

    def nothing_to_run(self) -> None:
        if not self.quiet:
            self.console.print(f"No {self.hook_type} hooks enabled", style="dim")

    def start_hook(self, hook: HookUnit) -> None:
        pass

    def end_hook(self, hook: HookUnit, status: HookStatus, output: str) -> None:
        if self.quiet and status is HookStatus.PASS:
            return
        label, style = STATUS_LABELS[status]
        line = Text(f"{_describe(hook)[:DESCRIPTION_WIDTH]:.<{DESCRIPTION_WIDTH}}")
        line.append(f"[{hook.name}] ", style="dim")
        line.append(label, style=f"bold {style}")
        self.console.print(line)
        if status is not HookStatus.PASS and output.strip():
            for out_line in output.rstrip("\n").split("\n"):
                self.console.print(f"  {out_line}", markup=False, highlight=False)

    def hook_skipped(self, hook: HookUnit) -> None:
        self.console.print(f"Skipping {hook.name}", style="yellow")

    def required_hook_not_skipped(self, hook: HookUnit) -> None:
        self.console.print(f"Cannot skip {hook.name} since it is required", style="yellow")

    def run_succeeded(self) -> None:
        if not self.quiet:
            self.console.print(f"\n✓ All {self.hook_type} hooks passed", style="bold green")

    def run_warned(self) -> None:
        self.console.print(
            f"\n⚠ All {self.hook_type} hooks passed, but with warnings", style="bold yellow"
        )

    def run_failed(self) -> None:
        self.console.print(f"\n✗ One or more {self.hook_type} hooks failed", style="bold red")

    def run_interrupted(self) -> None:
        self.console.print()
        self.console.print("⚠ Hook run interrupted by user", style="bold yellow")
