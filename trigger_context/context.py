"""Build the canonical trigger context consumed by the automation engine.

:func:`parse_github_context` is the entry point. It validates the configured
mode, reads the ambient event, applies any ``WEBHOOK_EVENT`` override, reads
the remaining inputs, and dispatches on the event name to find the issue or
pull request the event concerns.

Example
-------
>>> from trigger_context.github.models import AmbientEventSource, Repository
>>> ambient = AmbientEventSource(
...     event_name="pull_request",
...     payload={"action": "opened", "pull_request": {"number": 7}},
...     actor="octocat",
...     repository=Repository(owner="octo-org", repo="widgets"),
... )
>>> context = parse_github_context({"GITHUB_RUN_ID": "42"}, ambient=ambient)
>>> (context.entity_number, context.is_pr, context.event_action)
(7, True, 'opened')

"""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ

import msgspec

from trigger_context.errors import ConfigurationError
from trigger_context.github.models import (
    AmbientEventSource,
    GitHubEvent,
    IssueCommentEvent,
    IssuesEvent,
    PullRequestEvent,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    Repository,
)
from trigger_context.github.override import apply_webhook_override
from trigger_context.inputs import InputConfig
from trigger_context.logging import get_logger, log_debug
from trigger_context.modes import resolve_mode

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = get_logger(__name__)

EventT = typ.TypeVar("EventT", bound=GitHubEvent)


@dc.dataclass(frozen=True)
class GitHubContext(typ.Generic[EventT]):
    """Canonical description of the triggering event and its configuration.

    Attributes
    ----------
    run_id
        Workflow run identifier, forwarded verbatim from ``GITHUB_RUN_ID``.
    event_name
        Webhook event name after any override.
    event_action
        ``payload["action"]`` when it is a string.
    repository
        Repository the event belongs to.
    actor
        Login of the user that triggered the event.
    payload
        Webhook payload exactly as received.
    event
        Typed view of ``payload`` for the event kind.
    entity_number
        Number of the issue or pull request the event concerns.
    is_pr
        Whether ``entity_number`` designates a pull request.
    inputs
        Validated configuration.

    """

    run_id: str
    event_name: str
    event_action: str | None
    repository: Repository
    actor: str
    payload: dict[str, typ.Any]
    event: EventT
    entity_number: int
    is_pr: bool
    inputs: InputConfig

    def to_builtins(self) -> dict[str, typ.Any]:
        """Return a JSON-ready mapping of the context."""
        return {
            "run_id": self.run_id,
            "event_name": self.event_name,
            "event_action": self.event_action,
            "repository": self.repository.to_builtins(),
            "actor": self.actor,
            "payload": self.payload,
            "entity_number": self.entity_number,
            "is_pr": self.is_pr,
            "inputs": self.inputs.to_builtins(),
        }


@dc.dataclass(frozen=True, slots=True)
class _EventKind:
    """How one supported event name maps to its entity."""

    payload_type: type[GitHubEvent]
    entity: cabc.Callable[[typ.Any], tuple[int, bool]]


def _issue_entity(event: IssuesEvent) -> tuple[int, bool]:
    return event.issue.number, False


def _references_pull_request(link: object) -> bool:
    # Any object or array counts, even an empty one.
    if isinstance(link, dict | list):
        return True
    return bool(link)


def _issue_comment_entity(event: IssueCommentEvent) -> tuple[int, bool]:
    return event.issue.number, _references_pull_request(event.issue.pull_request)


def _pull_request_entity(
    event: PullRequestEvent | PullRequestReviewEvent | PullRequestReviewCommentEvent,
) -> tuple[int, bool]:
    return event.pull_request.number, True


_EVENT_KINDS: dict[str, _EventKind] = {
    "issues": _EventKind(IssuesEvent, _issue_entity),
    "issue_comment": _EventKind(IssueCommentEvent, _issue_comment_entity),
    "pull_request": _EventKind(PullRequestEvent, _pull_request_entity),
    "pull_request_review": _EventKind(PullRequestReviewEvent, _pull_request_entity),
    "pull_request_review_comment": _EventKind(
        PullRequestReviewCommentEvent, _pull_request_entity
    ),
}

SUPPORTED_EVENTS: frozenset[str] = frozenset(_EVENT_KINDS)


def build_context(
    ambient: AmbientEventSource,
    inputs: InputConfig,
    *,
    run_id: str,
) -> GitHubContext[typ.Any]:
    """Assemble the canonical context for an already-resolved event.

    Parameters
    ----------
    ambient
        Event source after any override has been applied.
    inputs
        Validated configuration.
    run_id
        Workflow run identifier.

    Returns
    -------
    GitHubContext
        The fully populated context.

    Raises
    ------
    ConfigurationError
        If the event name is not supported, or its payload lacks the object
        that designates the issue or pull request.

    """
    event_name = ambient.event_name
    kind = _EVENT_KINDS.get(event_name)
    if kind is None:
        raise ConfigurationError.unsupported_event(event_name)

    try:
        event = msgspec.convert(ambient.payload, type=kind.payload_type)
    except msgspec.ValidationError as exc:
        raise ConfigurationError.malformed_payload(event_name, str(exc)) from exc

    entity_number, is_pr = kind.entity(event)
    log_debug(
        logger,
        "Resolved %s event to %s #%d",
        event_name,
        "pull request" if is_pr else "issue",
        entity_number,
    )
    return GitHubContext(
        run_id=run_id,
        event_name=event_name,
        event_action=ambient.event_action,
        repository=ambient.repository,
        actor=ambient.actor,
        payload=ambient.payload,
        event=event,
        entity_number=entity_number,
        is_pr=is_pr,
        inputs=inputs,
    )


def parse_github_context(
    env: cabc.Mapping[str, str] | None = None,
    *,
    ambient: AmbientEventSource | None = None,
) -> GitHubContext[typ.Any]:
    """Build the context for the current invocation.

    ``MODE`` is validated before anything else, so an invalid mode is reported
    even when the event itself could not be read.

    Parameters
    ----------
    env
        Environment mapping; defaults to ``os.environ``.
    ambient
        Event source supplied by the host. When omitted it is read from the
        GitHub Actions variables in ``env``.

    Returns
    -------
    GitHubContext
        The canonical context.

    Raises
    ------
    ConfigurationError
        If the mode is invalid, the repository cannot be determined, or the
        event is unsupported or malformed.

    """
    source = os.environ if env is None else env
    mode = resolve_mode(source.get("MODE"))

    if ambient is None:
        ambient = AmbientEventSource.from_env(source)
    ambient = apply_webhook_override(ambient, source.get("WEBHOOK_EVENT"))

    inputs = InputConfig.from_env(source, mode=mode)
    return build_context(ambient, inputs, run_id=source.get("GITHUB_RUN_ID", ""))


__all__ = [
    "SUPPORTED_EVENTS",
    "GitHubContext",
    "build_context",
    "parse_github_context",
]
