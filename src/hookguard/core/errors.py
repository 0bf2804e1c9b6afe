"""Fault hierarchy: HookguardError and its subclasses."""

from __future__ import annotations


class HookguardError(Exception):
    """Base class for every fault raised by hookguard."""


class ConfigurationError(HookguardError):
    """A settings file could not be read or holds invalid values."""


class HookLoadError(HookguardError):
    """Hooks could not be loaded; raised before the repository is touched."""

    def __init__(self, message: str, hint: str = "") -> None:
        super().__init__(f"{hint}\n{message}" if hint else message)
        self.hint = hint


class InvalidHookDefinition(HookLoadError):
    """A configured hook names an unknown type or carries a bad setting."""


class HookContextError(HookguardError):
    """Setting up or restoring the repository environment failed."""


class SpawnError(HookguardError):
    """An external command could not be located or started."""

    def __init__(self, args: list[str], reason: str) -> None:
        super().__init__(f"failed to start {args[0]!r}: {reason}")
        self.args_vector = args
