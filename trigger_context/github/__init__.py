"""GitHub event models, host adapter and webhook override."""

from __future__ import annotations

from .host import read_ambient_event, resolve_repository
from .models import (
    AmbientEventSource,
    GitHubEvent,
    IssueCommentEvent,
    IssuesEvent,
    OverrideEnvelope,
    PullRequestEvent,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    Repository,
)
from .override import apply_webhook_override

__all__ = [
    "AmbientEventSource",
    "GitHubEvent",
    "IssueCommentEvent",
    "IssuesEvent",
    "OverrideEnvelope",
    "PullRequestEvent",
    "PullRequestReviewCommentEvent",
    "PullRequestReviewEvent",
    "Repository",
    "apply_webhook_override",
    "read_ambient_event",
    "resolve_repository",
]
