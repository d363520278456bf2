"""Errors raised or logged while building the trigger context."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

# Longest envelope excerpt quoted in a warning message
_PREVIEW_LIMIT = 80


class ConfigurationError(ValueError):
    """Raised when configuration or the triggering event cannot be used.

    Construction of the context stops at the first ``ConfigurationError``;
    no partially built context is returned.

    Attributes
    ----------
    value
        The offending configuration value or event name.

    """

    def __init__(self, message: str, *, value: object = None) -> None:
        """Initialise with a message and the value that was rejected."""
        self.value = value
        super().__init__(message)

    @classmethod
    def invalid_mode(
        cls, name: str, valid_modes: cabc.Iterable[str]
    ) -> ConfigurationError:
        """Return an error for a mode outside the registry.

        Parameters
        ----------
        name
            The mode value that was provided.
        valid_modes
            Mode names the registry accepts.

        Returns
        -------
        ConfigurationError
            Error naming the invalid mode and listing the valid ones.

        """
        valid = ", ".join(f"'{mode}'" for mode in sorted(valid_modes))
        return cls(f"Invalid mode: '{name}'. Valid modes are: {valid}", value=name)

    @classmethod
    def unsupported_event(cls, event_name: str) -> ConfigurationError:
        """Return an error for an event kind with no dispatch entry."""
        return cls(f"Unsupported event type: {event_name}", value=event_name)

    @classmethod
    def malformed_payload(cls, event_name: str, detail: str) -> ConfigurationError:
        """Return an error for a payload missing its designated sub-object."""
        return cls(
            f"Malformed {event_name} payload: {detail}",
            value=event_name,
        )

    @classmethod
    def malformed_event_file(cls, path: str, detail: str) -> ConfigurationError:
        """Return an error for a GITHUB_EVENT_PATH file that is not a JSON object."""
        return cls(
            f"GITHUB_EVENT_PATH {path} is not a JSON object: {detail}",
            value=path,
        )

    @classmethod
    def invalid_repository(cls, slug: str) -> ConfigurationError:
        """Return an error for a GITHUB_REPOSITORY value that is not a slug."""
        return cls(
            f"GITHUB_REPOSITORY must be in 'owner/name' format, got {slug!r}",
            value=slug,
        )

    @classmethod
    def missing_repository(cls) -> ConfigurationError:
        """Return an error when the owning repository cannot be determined."""
        return cls(
            "GITHUB_REPOSITORY must be set to 'owner/name' or the event payload "
            "must carry repository.owner.login and repository.name"
        )


class MalformedOverrideWarning(UserWarning):
    """Describes a ``WEBHOOK_EVENT`` envelope that was ignored.

    Never raised: the override step logs it and carries on with the ambient
    event source.
    """

    @classmethod
    def invalid_json(cls, text: str) -> MalformedOverrideWarning:
        """Return a warning for an envelope that is not valid JSON."""
        if len(text) > _PREVIEW_LIMIT:
            preview = text[:_PREVIEW_LIMIT] + "..."
        else:
            preview = text
        return cls(f"Failed to parse WEBHOOK_EVENT as JSON: {preview!r}")

    @classmethod
    def not_an_object(cls, kind: str) -> MalformedOverrideWarning:
        """Return a warning for valid JSON that is not an object."""
        return cls(f"WEBHOOK_EVENT must be a JSON object, got {kind}")

    @classmethod
    def invalid_shape(cls, detail: str) -> MalformedOverrideWarning:
        """Return a warning for an object whose fields have the wrong types."""
        return cls(f"WEBHOOK_EVENT has an unexpected shape: {detail}")


__all__ = ["ConfigurationError", "MalformedOverrideWarning"]
