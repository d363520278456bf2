"""Typed models for the triggering GitHub event.

The ambient event source and repository are frozen dataclasses owned by this
package. Webhook payload shapes are msgspec structs that declare only the
fields the context builder reads; every other payload key is ignored when a
payload is converted and stays available in the verbatim ``payload`` mapping.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import msgspec

from trigger_context.common.slug import repo_slug

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class Repository:
    """Repository that owns the triggering event.

    ``full_name`` is derived from ``owner`` and ``repo`` so the three can never
    disagree.
    """

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        """Return the GitHub-style ``owner/repo`` identifier."""
        return repo_slug(self.owner, self.repo)

    def to_builtins(self) -> dict[str, str]:
        """Return a JSON-ready mapping including ``full_name``."""
        return {"owner": self.owner, "repo": self.repo, "full_name": self.full_name}


@dc.dataclass(frozen=True, slots=True)
class AmbientEventSource:
    """Event metadata supplied by the host for one invocation.

    Attributes
    ----------
    event_name
        Webhook event name, e.g. ``issue_comment``.
    payload
        Webhook payload as delivered by the host.
    actor
        Login of the user that triggered the event.
    repository
        Repository the event belongs to.

    """

    event_name: str
    payload: dict[str, typ.Any]
    actor: str
    repository: Repository

    @property
    def event_action(self) -> str | None:
        """Return ``payload["action"]`` when it is a string."""
        action = self.payload.get("action")
        return action if isinstance(action, str) else None

    @classmethod
    def from_env(
        cls, env: cabc.Mapping[str, str] | None = None
    ) -> AmbientEventSource:
        """Read the ambient event from the GitHub Actions environment.

        See :func:`trigger_context.github.host.read_ambient_event`.
        """
        from trigger_context.github.host import read_ambient_event

        return read_ambient_event(env)


class OverrideEnvelope(msgspec.Struct, kw_only=True):
    """Out-of-band replacement for the ambient event (``WEBHOOK_EVENT``)."""

    event: str | None = None
    payload: dict[str, typ.Any] | None = None


class Login(msgspec.Struct, kw_only=True):
    """Any payload object identified by a ``login`` (users, owners)."""

    login: str | None = None


class RepositoryRef(msgspec.Struct, kw_only=True):
    """The ``repository`` object embedded in webhook payloads."""

    name: str | None = None
    owner: Login | None = None


class IssueRef(msgspec.Struct, kw_only=True):
    """The ``issue`` object of issue and issue comment payloads.

    GitHub models pull requests as issues; on those, ``pull_request`` links
    to the pull request and is otherwise absent or null. Its shape is not
    checked: any truthy value marks the issue as a pull request.
    """

    number: int
    pull_request: typ.Any = None


class PullRequestRef(msgspec.Struct, kw_only=True):
    """The ``pull_request`` object of pull request payloads."""

    number: int


class IssuesEvent(msgspec.Struct, kw_only=True):
    """Payload of an ``issues`` event."""

    issue: IssueRef


class IssueCommentEvent(msgspec.Struct, kw_only=True):
    """Payload of an ``issue_comment`` event."""

    issue: IssueRef


class PullRequestEvent(msgspec.Struct, kw_only=True):
    """Payload of a ``pull_request`` event."""

    pull_request: PullRequestRef


class PullRequestReviewEvent(msgspec.Struct, kw_only=True):
    """Payload of a ``pull_request_review`` event."""

    pull_request: PullRequestRef


class PullRequestReviewCommentEvent(msgspec.Struct, kw_only=True):
    """Payload of a ``pull_request_review_comment`` event."""

    pull_request: PullRequestRef


GitHubEvent = (
    IssuesEvent
    | IssueCommentEvent
    | PullRequestEvent
    | PullRequestReviewEvent
    | PullRequestReviewCommentEvent
)


__all__ = [
    "AmbientEventSource",
    "GitHubEvent",
    "IssueCommentEvent",
    "IssueRef",
    "IssuesEvent",
    "Login",
    "OverrideEnvelope",
    "PullRequestEvent",
    "PullRequestRef",
    "PullRequestReviewCommentEvent",
    "PullRequestReviewEvent",
    "Repository",
    "RepositoryRef",
]
