"""Hook registry: hook type name -> Hook class."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from .base import Hook

logger = logging.getLogger(__name__)

H = TypeVar("H", bound="type[Hook]")


class HookRegistry:
    """Name-keyed hook classes. Registering a name again replaces it."""

    def __init__(self) -> None:
        self._hooks: dict[str, type[Hook]] = {}

    def register(self, name: str) -> Callable[[H], H]:
        def decorator(cls: H) -> H:
            if name in self._hooks and self._hooks[name] is not cls:
                logger.debug("hook %r overridden by %s", name, cls.__qualname__)
            self._hooks[name] = cls
            return cls

        return decorator

    def get(self, name: str) -> type[Hook] | None:
        return self._hooks.get(name)

    def names(self) -> list[str]:
        return sorted(self._hooks)

    def __contains__(self, name: object) -> bool:
        return name in self._hooks


# Name → hook class mapping shared by built-ins and plugins.
registry = HookRegistry()
register = registry.register
