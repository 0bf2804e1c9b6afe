"""Hook data models: HookStatus, HookUnit, ResultSink."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class HookStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    INTERRUPT = "interrupt"


@runtime_checkable
class HookUnit(Protocol):
    """One configured check, as the runner sees it."""

    name: str

    def enabled(self) -> bool: ...

    def skip_requested(self) -> bool: ...

    def required(self) -> bool: ...

    def would_run(self) -> bool: ...

    def run_and_transform(self) -> tuple[HookStatus, str]: ...


class ResultSink(Protocol):
    """Receives run and hook lifecycle events. Return values are ignored."""

    def start_run(self) -> None: ...

    def nothing_to_run(self) -> None: ...

    def start_hook(self, hook: HookUnit) -> None: ...

    def end_hook(self, hook: HookUnit, status: HookStatus, output: str) -> None: ...

    def hook_skipped(self, hook: HookUnit) -> None: ...

    def required_hook_not_skipped(self, hook: HookUnit) -> None: ...

    def run_succeeded(self) -> None: ...

    def run_warned(self) -> None: ...

    def run_failed(self) -> None: ...

    def run_interrupted(self) -> None: ...
