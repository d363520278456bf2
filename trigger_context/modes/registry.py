"""Closed registry of behaviour modes.

A mode names the behaviour profile the downstream engine runs with. The set
is fixed at release time; configuration can only pick one of its members.

>>> resolve_mode(None)
<ModeName.TAG: 'tag'>
>>> is_valid_mode("agent")
True

"""

from __future__ import annotations

import enum

from trigger_context.errors import ConfigurationError


class ModeName(enum.StrEnum):
    """Modes the automation engine knows how to execute."""

    TAG = "tag"
    AGENT = "agent"
    EXPERIMENTAL_REVIEW = "experimental-review"


DEFAULT_MODE = ModeName.TAG

VALID_MODES: frozenset[str] = frozenset(mode.value for mode in ModeName)

_DESCRIPTIONS: dict[ModeName, str] = {
    ModeName.TAG: "Respond to trigger phrases, assignments and labels",
    ModeName.AGENT: "Run automatically without waiting for a trigger",
    ModeName.EXPERIMENTAL_REVIEW: "Post inline review comments on pull requests",
}


def is_valid_mode(name: str) -> bool:
    """Return True when ``name`` is exactly one of the registered modes."""
    return name in VALID_MODES


def resolve_mode(raw: str | None) -> ModeName:
    """Resolve a configured mode, falling back to the default when unset.

    Parameters
    ----------
    raw
        The configured value, or ``None`` when nothing was configured. An
        empty string counts as configured and is rejected.

    Returns
    -------
    ModeName
        The registry member named by ``raw``.

    Raises
    ------
    ConfigurationError
        If ``raw`` is not a registered mode name.

    """
    if raw is None:
        return DEFAULT_MODE
    if not is_valid_mode(raw):
        raise ConfigurationError.invalid_mode(raw, VALID_MODES)
    return ModeName(raw)


def describe_mode(mode: ModeName) -> str:
    """Return the one-line description of ``mode``."""
    return _DESCRIPTIONS[mode]
