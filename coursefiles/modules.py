"""Registry of installed activity modules and whether their files are trusted.

Files of a module render inline only when its trust predicate says so. A
module registered without a predicate always has its files downloaded.
"""
from __future__ import annotations
from typing import Callable, Dict, Optional

TrustPredicate = Callable[[], bool]


class ModuleRegistry:
    def __init__(self):
        self._handlers: Dict[str, Optional[TrustPredicate]] = {}

    def register(self, module_type: str, trust_predicate: Optional[TrustPredicate] = None) -> None:
        self._handlers[module_type.lower()] = trust_predicate

    def is_installed(self, module_type: str) -> bool:
        return module_type.lower() in self._handlers

    def trust_predicate(self, module_type: str) -> Optional[TrustPredicate]:
        return self._handlers.get(module_type.lower())


def _untrusted() -> bool:
    return False


def _trusted() -> bool:
    return True


def default_registry() -> ModuleRegistry:
    registry = ModuleRegistry()
    registry.register("assignment")
    registry.register("resource", _trusted)
    registry.register("forum", _untrusted)
    registry.register("glossary", _untrusted)
    registry.register("data", _untrusted)
    return registry
