"""Apply a ``WEBHOOK_EVENT`` envelope on top of the ambient event source.

The envelope lets a caller replay or simulate an event without the host's
cooperation. It is a JSON object of the form::

    {
        "event": "issue_comment",
        "payload": {
            "repository": {"owner": {"login": "octo-org"}, "name": "widgets"},
            "sender": {"login": "octocat"},
            ...
        }
    }

Every field is optional and overrides independently. The function returns a
new :class:`AmbientEventSource`; the one passed in is left untouched.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import msgspec

from trigger_context.errors import MalformedOverrideWarning
from trigger_context.github.models import (
    AmbientEventSource,
    Login,
    OverrideEnvelope,
    Repository,
    RepositoryRef,
)
from trigger_context.logging import get_logger, log_info, log_warning

logger = get_logger(__name__)

T = typ.TypeVar("T")


def _convert_or_none(value: object, type_: type[T]) -> T | None:
    """Convert a payload fragment, treating shape mismatches as absent."""
    if value is None:
        return None
    try:
        return msgspec.convert(value, type=type_)
    except msgspec.ValidationError:
        return None


def decode_envelope(text: str) -> OverrideEnvelope | None:
    """Decode ``text`` into an envelope, logging a warning when it is unusable.

    Returns
    -------
    OverrideEnvelope | None
        The decoded envelope, or ``None`` when ``text`` is not a JSON object
        of the expected shape.

    """
    try:
        raw = msgspec.json.decode(text)
    except msgspec.DecodeError as exc:
        warning = MalformedOverrideWarning.invalid_json(text)
        log_warning(logger, "%s; using ambient event", warning, exc_info=exc)
        return None

    if not isinstance(raw, dict):
        warning = MalformedOverrideWarning.not_an_object(type(raw).__name__)
        log_warning(logger, "%s; using ambient event", warning)
        return None

    try:
        return msgspec.convert(raw, type=OverrideEnvelope)
    except msgspec.ValidationError as exc:
        warning = MalformedOverrideWarning.invalid_shape(str(exc))
        log_warning(logger, "%s; using ambient event", warning, exc_info=exc)
        return None


def _override_repository(payload: dict[str, typ.Any]) -> Repository | None:
    ref = _convert_or_none(payload.get("repository"), RepositoryRef)
    if ref is None or ref.owner is None or not ref.owner.login or not ref.name:
        # Incomplete repository objects leave the ambient repository in place.
        return None
    return Repository(owner=ref.owner.login, repo=ref.name)


def _override_actor(payload: dict[str, typ.Any]) -> str | None:
    sender = _convert_or_none(payload.get("sender"), Login)
    if sender is None or not sender.login:
        return None
    return sender.login


def apply_envelope(
    ambient: AmbientEventSource, envelope: OverrideEnvelope
) -> AmbientEventSource:
    """Return ``ambient`` with the fields ``envelope`` carries replaced."""
    changes: dict[str, typ.Any] = {}

    if envelope.event:
        changes["event_name"] = envelope.event
        log_info(logger, "eventName overridden from webhook event: %s", envelope.event)

    payload = envelope.payload
    if payload is not None:
        changes["payload"] = payload
        log_info(logger, "payload overridden from webhook event")

        repository = _override_repository(payload)
        if repository is not None:
            changes["repository"] = repository
            log_info(
                logger,
                "repository overridden from webhook event: %s",
                repository.full_name,
            )

        actor = _override_actor(payload)
        if actor is not None:
            changes["actor"] = actor
            log_info(logger, "actor overridden from webhook event: %s", actor)

    if not changes:
        return ambient
    return dc.replace(ambient, **changes)


def apply_webhook_override(
    ambient: AmbientEventSource, envelope_text: str | None
) -> AmbientEventSource:
    """Patch ``ambient`` with the envelope in ``envelope_text``, if any.

    Parameters
    ----------
    ambient
        Event source supplied by the host.
    envelope_text
        Raw ``WEBHOOK_EVENT`` value. ``None`` or an empty string means no
        override.

    Returns
    -------
    AmbientEventSource
        ``ambient`` itself when there is nothing to apply or the envelope is
        malformed, otherwise a patched copy.

    """
    if not envelope_text:
        return ambient
    envelope = decode_envelope(envelope_text)
    if envelope is None:
        return ambient
    return apply_envelope(ambient, envelope)


__all__ = ["apply_envelope", "apply_webhook_override", "decode_envelope"]
