"""Read the ambient event source from a GitHub Actions step environment.

Actions exposes the triggering event to every step through environment
variables and a JSON file:

- ``GITHUB_EVENT_NAME``: webhook event name
- ``GITHUB_EVENT_PATH``: path of a file holding the webhook payload
- ``GITHUB_ACTOR``: login of the triggering user
- ``GITHUB_REPOSITORY``: ``owner/name`` of the repository

"""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

import msgspec

from trigger_context.common.slug import parse_repo_slug
from trigger_context.errors import ConfigurationError
from trigger_context.github.models import AmbientEventSource, Repository, RepositoryRef
from trigger_context.logging import get_logger, log_warning

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = get_logger(__name__)


def _read_event_payload(event_path: str | None) -> dict[str, typ.Any]:
    """Load the webhook payload file, or an empty payload when there is none."""
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        log_warning(logger, "GITHUB_EVENT_PATH %s does not exist", event_path)
        return {}
    try:
        return msgspec.json.decode(path.read_bytes(), type=dict[str, typ.Any])
    except msgspec.DecodeError as exc:
        raise ConfigurationError.malformed_event_file(event_path, str(exc)) from exc


def _repository_from_payload(payload: dict[str, typ.Any]) -> Repository | None:
    """Return the repository named by ``payload["repository"]``, if complete."""
    raw = payload.get("repository")
    if raw is None:
        return None
    try:
        ref = msgspec.convert(raw, type=RepositoryRef)
    except msgspec.ValidationError:
        return None
    if ref.owner is None or not ref.owner.login or not ref.name:
        return None
    return Repository(owner=ref.owner.login, repo=ref.name)


def resolve_repository(
    slug: str | None, payload: dict[str, typ.Any]
) -> Repository:
    """Resolve the owning repository from ``GITHUB_REPOSITORY`` or the payload.

    Parameters
    ----------
    slug
        Value of ``GITHUB_REPOSITORY``; takes precedence when set.
    payload
        Webhook payload used as the fallback source.

    Returns
    -------
    Repository
        The owning repository.

    Raises
    ------
    ConfigurationError
        If neither source names a repository, or ``slug`` is not in
        ``owner/name`` format.

    """
    if slug:
        try:
            owner, name = parse_repo_slug(slug)
        except ValueError as exc:
            raise ConfigurationError.invalid_repository(slug) from exc
        return Repository(owner=owner, repo=name)
    repository = _repository_from_payload(payload)
    if repository is None:
        raise ConfigurationError.missing_repository()
    return repository


def read_ambient_event(
    env: cabc.Mapping[str, str] | None = None,
) -> AmbientEventSource:
    """Build the ambient event source from Actions environment variables.

    Parameters
    ----------
    env
        Environment mapping; defaults to ``os.environ``.

    Returns
    -------
    AmbientEventSource
        Event metadata for the current invocation.

    Raises
    ------
    ConfigurationError
        If the owning repository cannot be determined, or the event payload
        file is not a JSON object.

    """
    source = os.environ if env is None else env
    payload = _read_event_payload(source.get("GITHUB_EVENT_PATH"))
    return AmbientEventSource(
        event_name=source.get("GITHUB_EVENT_NAME", ""),
        payload=payload,
        actor=source.get("GITHUB_ACTOR", ""),
        repository=resolve_repository(source.get("GITHUB_REPOSITORY"), payload),
    )


__all__ = ["read_ambient_event", "resolve_repository"]
