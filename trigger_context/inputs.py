"""Configuration inputs for the automation engine.

The action receives its configuration as process environment variables.
:class:`InputConfig` reads and validates them in one place.

Usage
-----
Read configuration from the environment:

>>> import os
>>> os.environ["ALLOWED_TOOLS"] = "Read, Write  # file access"
>>> InputConfig.from_env().allowed_tools
('Read', 'Write')

Multi-value inputs accept commas or newlines as separators and ``#``
comments:

>>> parse_multiline_input("read\\n#comment\\nwrite, edit # trailing")
['read', 'write', 'edit']

"""

from __future__ import annotations

import dataclasses as dc
import os
import re
import typing as typ

from trigger_context.modes import ModeName, resolve_mode

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_DEFAULT_TRIGGER_PHRASE = "@claude"
_DEFAULT_BRANCH_PREFIX = "claude/"

_SEPARATOR = re.compile(r",|[\n\r]+")
_COMMENT = re.compile(r"#.*$")


def parse_multiline_input(value: str) -> list[str]:
    """Split a comma or newline separated list, dropping comments and blanks.

    Parameters
    ----------
    value
        Raw input, e.g. the contents of ``ALLOWED_TOOLS``.

    Returns
    -------
    list[str]
        Non-empty entries in their original order.

    """
    entries = (_COMMENT.sub("", token).strip() for token in _SEPARATOR.split(value))
    return [entry for entry in entries if entry]


def parse_additional_permissions(value: str) -> dict[str, str]:
    """Parse ``key: value`` lines into a permission mapping.

    Lines without a colon, with an empty key, or with an empty value are
    skipped. When a key repeats, the last line wins.

    Parameters
    ----------
    value
        Raw ``ADDITIONAL_PERMISSIONS`` input.

    Returns
    -------
    dict[str, str]
        Permission names mapped to access levels.

    Examples
    --------
    >>> parse_additional_permissions("actions: write\\ncontents:read\\nbad-line")
    {'actions': 'write', 'contents': 'read'}

    """
    permissions: dict[str, str] = {}
    if not value.strip():
        return permissions

    for line in value.strip().splitlines():
        key, sep, access = line.strip().partition(":")
        key, access = key.strip(), access.strip()
        if sep and key and access:
            permissions[key] = access
    return permissions


def parse_bool_flag(value: str | None) -> bool:
    """Return True only for the exact string ``"true"``."""
    return value == "true"


@dc.dataclass(frozen=True, slots=True)
class InputConfig:
    """Validated configuration for one invocation.

    Attributes
    ----------
    mode
        Behaviour mode from the closed registry.
    trigger_phrase
        Phrase in a comment or body that triggers the engine.
    assignee_trigger
        Login whose assignment triggers the engine; empty disables it.
    label_trigger
        Label whose application triggers the engine; empty disables it.
    allowed_tools, disallowed_tools
        Tool names in configuration order.
    custom_instructions, direct_prompt, override_prompt
        Free-form prompt text, empty when unset.
    base_branch
        Branch to base work on, ``None`` when not configured.
    branch_prefix
        Prefix for branches the engine creates.
    use_sticky_comment
        Reuse a single tracking comment.
    additional_permissions
        Extra token permissions, one entry per permission name.
    use_commit_signing
        Sign commits the engine creates.

    """

    mode: ModeName
    trigger_phrase: str = _DEFAULT_TRIGGER_PHRASE
    assignee_trigger: str = ""
    label_trigger: str = ""
    allowed_tools: tuple[str, ...] = ()
    disallowed_tools: tuple[str, ...] = ()
    custom_instructions: str = ""
    direct_prompt: str = ""
    override_prompt: str = ""
    base_branch: str | None = None
    branch_prefix: str = _DEFAULT_BRANCH_PREFIX
    use_sticky_comment: bool = False
    additional_permissions: dict[str, str] = dc.field(default_factory=dict)
    use_commit_signing: bool = False

    @classmethod
    def from_env(
        cls,
        env: cabc.Mapping[str, str] | None = None,
        *,
        mode: ModeName | None = None,
    ) -> InputConfig:
        """Create configuration from environment variables.

        Reads ``MODE``, ``TRIGGER_PHRASE``, ``ASSIGNEE_TRIGGER``,
        ``LABEL_TRIGGER``, ``ALLOWED_TOOLS``, ``DISALLOWED_TOOLS``,
        ``CUSTOM_INSTRUCTIONS``, ``DIRECT_PROMPT``, ``OVERRIDE_PROMPT``,
        ``BASE_BRANCH``, ``BRANCH_PREFIX``, ``USE_STICKY_COMMENT``,
        ``ADDITIONAL_PERMISSIONS`` and ``USE_COMMIT_SIGNING``.

        Parameters
        ----------
        env
            Environment mapping; defaults to ``os.environ``.
        mode
            Already-resolved mode. When omitted, ``MODE`` is validated before
            any other variable is read.

        Returns
        -------
        InputConfig
            Configuration with values from the environment or defaults.

        Raises
        ------
        ConfigurationError
            If ``MODE`` is not a registered mode.

        """
        source = os.environ if env is None else env
        if mode is None:
            mode = resolve_mode(source.get("MODE"))

        return cls(
            mode=mode,
            trigger_phrase=source.get("TRIGGER_PHRASE", _DEFAULT_TRIGGER_PHRASE),
            assignee_trigger=source.get("ASSIGNEE_TRIGGER", ""),
            label_trigger=source.get("LABEL_TRIGGER", ""),
            allowed_tools=tuple(parse_multiline_input(source.get("ALLOWED_TOOLS", ""))),
            disallowed_tools=tuple(
                parse_multiline_input(source.get("DISALLOWED_TOOLS", ""))
            ),
            custom_instructions=source.get("CUSTOM_INSTRUCTIONS", ""),
            direct_prompt=source.get("DIRECT_PROMPT", ""),
            override_prompt=source.get("OVERRIDE_PROMPT", ""),
            base_branch=source.get("BASE_BRANCH"),
            branch_prefix=source.get("BRANCH_PREFIX", _DEFAULT_BRANCH_PREFIX),
            use_sticky_comment=parse_bool_flag(source.get("USE_STICKY_COMMENT")),
            additional_permissions=parse_additional_permissions(
                source.get("ADDITIONAL_PERMISSIONS", "")
            ),
            use_commit_signing=parse_bool_flag(source.get("USE_COMMIT_SIGNING")),
        )

    def to_builtins(self) -> dict[str, typ.Any]:
        """Return a JSON-ready mapping of the configuration."""
        data = {field.name: getattr(self, field.name) for field in dc.fields(self)}
        data["mode"] = self.mode.value
        data["allowed_tools"] = list(self.allowed_tools)
        data["disallowed_tools"] = list(self.disallowed_tools)
        data["additional_permissions"] = dict(self.additional_permissions)
        return data


__all__ = [
    "InputConfig",
    "parse_additional_permissions",
    "parse_bool_flag",
    "parse_multiline_input",
]
