from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class AccessDecision:
    """Response policy accumulated by the gate.

    Only ever tightens: the lifetime can go down, forced download can only be
    switched on.
    """

    cache_lifetime: int
    force_download: bool = False

    def limit_lifetime(self, seconds: int) -> "AccessDecision":
        return replace(self, cache_lifetime=max(0, min(self.cache_lifetime, seconds)))

    def forcing_download(self) -> "AccessDecision":
        return replace(self, force_download=True)


@dataclass(frozen=True)
class ResolvedFile:
    path: str
    filename: str
