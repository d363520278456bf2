"""Predicates that narrow a context to one event kind.

Each guard only compares ``event_name`` (and, for assignments,
``event_action``). After a guard passes, type checkers know the concrete
type of ``context.event``::

    if is_pull_request_event(context):
        number = context.event.pull_request.number

"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from trigger_context.context import GitHubContext
    from trigger_context.github.models import (
        IssueCommentEvent,
        IssuesEvent,
        PullRequestEvent,
        PullRequestReviewCommentEvent,
        PullRequestReviewEvent,
    )


def is_issues_event(
    context: GitHubContext[typ.Any],
) -> typ.TypeGuard[GitHubContext[IssuesEvent]]:
    """Return True for ``issues`` events."""
    return context.event_name == "issues"


def is_issue_comment_event(
    context: GitHubContext[typ.Any],
) -> typ.TypeGuard[GitHubContext[IssueCommentEvent]]:
    """Return True for ``issue_comment`` events."""
    return context.event_name == "issue_comment"


def is_pull_request_event(
    context: GitHubContext[typ.Any],
) -> typ.TypeGuard[GitHubContext[PullRequestEvent]]:
    """Return True for ``pull_request`` events."""
    return context.event_name == "pull_request"


def is_pull_request_review_event(
    context: GitHubContext[typ.Any],
) -> typ.TypeGuard[GitHubContext[PullRequestReviewEvent]]:
    """Return True for ``pull_request_review`` events."""
    return context.event_name == "pull_request_review"


def is_pull_request_review_comment_event(
    context: GitHubContext[typ.Any],
) -> typ.TypeGuard[GitHubContext[PullRequestReviewCommentEvent]]:
    """Return True for ``pull_request_review_comment`` events."""
    return context.event_name == "pull_request_review_comment"


def is_issues_assigned_event(
    context: GitHubContext[typ.Any],
) -> typ.TypeGuard[GitHubContext[IssuesEvent]]:
    """Return True for ``issues`` events with the ``assigned`` action."""
    return is_issues_event(context) and context.event_action == "assigned"


__all__ = [
    "is_issue_comment_event",
    "is_issues_assigned_event",
    "is_issues_event",
    "is_pull_request_event",
    "is_pull_request_review_comment_event",
    "is_pull_request_review_event",
]
