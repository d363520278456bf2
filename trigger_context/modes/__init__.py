"""Behaviour mode registry."""

from __future__ import annotations

from .registry import (
    DEFAULT_MODE,
    VALID_MODES,
    ModeName,
    describe_mode,
    is_valid_mode,
    resolve_mode,
)

__all__ = [
    "DEFAULT_MODE",
    "VALID_MODES",
    "ModeName",
    "describe_mode",
    "is_valid_mode",
    "resolve_mode",
]
