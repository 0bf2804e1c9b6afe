"""Hook loader: import plugin hooks, then build hook instances from config."""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ..core.errors import HookLoadError, InvalidHookDefinition
from . import builtin  # noqa: F401  registers the built-in hooks
from .registry import HookRegistry, registry

if TYPE_CHECKING:
    from ..core.config import Config
    from .base import Hook
    from .context import HookContext

logger = logging.getLogger(__name__)


def _plugin_module_name(hook_type: str, path: Path) -> str:
    return f"hookguard_plugin_{hook_type.replace('-', '_')}_{path.stem}"


def import_plugins(directory: Path) -> list[str]:
    """Import every ``*.py`` in *directory* so its hooks register themselves.

    Modules are imported in file name order; a later module registering an
    existing name replaces the earlier class, built-ins included.
    """
    imported: list[str] = []
    if not directory.is_dir():
        return imported
    for path in sorted(directory.glob("*.py")):
        module_name = _plugin_module_name(directory.name, path)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"cannot import plugin {path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        logger.debug("loaded plugin %s", path)
        imported.append(module_name)
    return imported


def _load_error_hint(config: Config) -> str:
    message = "A load error occurred. "
    if config.requirements_file:
        return message + (
            f"Did you forget to specify a package in your `{config.requirements_file}`?"
        )
    return message + "Did you forget to install a package?"


class HookLoader:
    """Builds the ordered hooks configured for one hook type."""

    def __init__(
        self,
        config: Config,
        context: HookContext,
        hook_registry: HookRegistry | None = None,
    ) -> None:
        self.config = config
        self.context = context
        self.registry = hook_registry or registry

    @property
    def plugin_directory(self) -> Path:
        return self.config.plugin_dir / self.context.hook_type

    def load_hooks(self) -> list[Hook]:
        try:
            import_plugins(self.plugin_directory)
        except (ImportError, SyntaxError) as e:
            raise HookLoadError(
                f"{type(e).__name__}: {e}", hint=_load_error_hint(self.config)
            ) from e

        hooks = [self._instantiate(n) for n in self.config.hook_names(self.context.hook_type)]
        logger.debug("loaded %d %s hook(s)", len(hooks), self.context.hook_type)
        return hooks

    def _instantiate(self, name: str) -> Hook:
        settings = self.config.for_hook(self.context.hook_type, name)
        type_name = settings.get("type", name)
        cls = self.registry.get(type_name)
        if cls is None:
            raise InvalidHookDefinition(
                f"hook {name!r} has unknown type {type_name!r} "
                f"(known: {', '.join(self.registry.names()) or 'none'})"
            )
        return cls(name, settings, self.context, self.config)
