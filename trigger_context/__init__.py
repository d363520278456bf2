"""Normalize GitHub trigger events and action inputs into one context.

The package turns the event a workflow step was triggered by, optionally
replaced by a ``WEBHOOK_EVENT`` envelope, plus the step's configuration into
a single :class:`~trigger_context.context.GitHubContext`:

* **Inputs** - :class:`~trigger_context.inputs.InputConfig` reads and
  validates configuration, starting with the behaviour mode.
* **Override** - :func:`~trigger_context.github.apply_webhook_override`
  patches the ambient event from a JSON envelope.
* **Context** - :func:`~trigger_context.context.parse_github_context`
  dispatches on the event name to find the issue or pull request.
* **Guards** - predicates such as
  :func:`~trigger_context.guards.is_issues_assigned_event` narrow the result.

Quick example::

    >>> from trigger_context import parse_github_context
    >>> context = parse_github_context()  # doctest: +SKIP
    >>> context.entity_number, context.is_pr  # doctest: +SKIP
    (42, True)

"""

from __future__ import annotations

from .context import SUPPORTED_EVENTS, GitHubContext, build_context, parse_github_context
from .errors import ConfigurationError, MalformedOverrideWarning
from .guards import (
    is_issue_comment_event,
    is_issues_assigned_event,
    is_issues_event,
    is_pull_request_event,
    is_pull_request_review_comment_event,
    is_pull_request_review_event,
)
from .inputs import (
    InputConfig,
    parse_additional_permissions,
    parse_bool_flag,
    parse_multiline_input,
)
from .modes import DEFAULT_MODE, ModeName

__all__ = [
    "DEFAULT_MODE",
    "SUPPORTED_EVENTS",
    "ConfigurationError",
    "GitHubContext",
    "InputConfig",
    "MalformedOverrideWarning",
    "ModeName",
    "build_context",
    "is_issue_comment_event",
    "is_issues_assigned_event",
    "is_issues_event",
    "is_pull_request_event",
    "is_pull_request_review_comment_event",
    "is_pull_request_review_event",
    "parse_additional_permissions",
    "parse_bool_flag",
    "parse_github_context",
    "parse_multiline_input",
]
