"""Hooks: hook units, registry, contexts, loader and runner."""

from .base import Hook
from .context import HookContext, PreCommitContext, RunAllContext, build_context
from .loader import HookLoader, import_plugins
from .models import HookStatus, HookUnit, ResultSink
from .registry import HookRegistry, register, registry
from .runner import HookRunner

__all__ = [
    "Hook",
    "HookContext",
    "HookLoader",
    "HookRegistry",
    "HookRunner",
    "HookStatus",
    "HookUnit",
    "PreCommitContext",
    "ResultSink",
    "RunAllContext",
    "build_context",
    "import_plugins",
    "register",
    "registry",
]
