"""Small parsing helpers shared by config, paths and the gate."""
from __future__ import annotations
import os, re


def env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def clean_safedir(name: str) -> str:
    """Strip everything but letters, digits, underscore and dash (module type names)."""
    return re.sub(r"[^A-Za-z0-9_-]+", "", name or "")


def to_int(value: str | None) -> int | None:
    if value is None or not re.fullmatch(r"\d+", value):
        return None
    return int(value)
