"""Unit tests for applying WEBHOOK_EVENT envelopes."""

from __future__ import annotations

import json
import typing as typ

import pytest

from tests.helpers.events import AMBIENT_REPOSITORY, ambient_event, pull_request_payload
from tests.helpers.fake_logger import FakeLogger
from trigger_context.github import override
from trigger_context.github.models import Repository
from trigger_context.github.override import apply_webhook_override


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    """Replace the override module logger with a recording double."""
    logger = FakeLogger()
    monkeypatch.setattr(override, "logger", logger)
    return logger


def _envelope(**fields: typ.Any) -> str:  # noqa: ANN401
    return json.dumps(fields)


class TestNoOverride:
    """Cases where the ambient event is returned as-is."""

    @pytest.mark.parametrize("text", [None, ""], ids=["absent", "empty"])
    def test_missing_envelope_returns_ambient(
        self, text: str | None, fake_logger: FakeLogger
    ) -> None:
        """No envelope means no change and no logging."""
        ambient = ambient_event()
        assert apply_webhook_override(ambient, text) is ambient
        assert fake_logger.calls == []

    @pytest.mark.parametrize(
        "text",
        ["{not json", "[1, 2]", '"issues"', "null", '{"event": 5}', '{"payload": []}'],
        ids=["invalid-json", "array", "string", "null", "event-not-string", "payload-not-object"],
    )
    def test_malformed_envelope_warns_and_returns_ambient(
        self, text: str, fake_logger: FakeLogger
    ) -> None:
        """Malformed envelopes log a warning and leave the ambient event alone."""
        ambient = ambient_event()

        assert apply_webhook_override(ambient, text) is ambient

        warnings = fake_logger.messages("WARNING")
        assert len(warnings) == 1, "Expected exactly one warning"
        assert "WEBHOOK_EVENT" in warnings[0]

    def test_invalid_json_warning_attaches_decode_error(
        self, fake_logger: FakeLogger
    ) -> None:
        """The decode error travels with the warning as exc_info."""
        apply_webhook_override(ambient_event(), "{not json")
        _, _, exc_info, _ = fake_logger.calls[0]
        assert isinstance(exc_info, Exception)

    def test_empty_object_changes_nothing(self, fake_logger: FakeLogger) -> None:
        """An envelope without fields leaves the source untouched."""
        ambient = ambient_event()
        assert apply_webhook_override(ambient, "{}") is ambient
        assert fake_logger.calls == []


class TestPartialOverride:
    """Each envelope field overrides independently."""

    def test_event_and_sender_override_keeps_repository(
        self, fake_logger: FakeLogger
    ) -> None:
        """Overriding event and actor without a repository keeps the ambient one."""
        ambient = ambient_event("issues")
        text = _envelope(event="pull_request", payload={"sender": {"login": "alice"}})

        result = apply_webhook_override(ambient, text)

        assert result.event_name == "pull_request"
        assert result.actor == "alice"
        assert result.repository == AMBIENT_REPOSITORY
        assert result.payload == {"sender": {"login": "alice"}}
        assert fake_logger.messages("WARNING") == []

    def test_event_only_keeps_payload(self, fake_logger: FakeLogger) -> None:
        """Only eventName changes when the envelope has no payload."""
        ambient = ambient_event("issues")

        result = apply_webhook_override(ambient, _envelope(event="issue_comment"))

        assert result.event_name == "issue_comment"
        assert result.payload is ambient.payload
        assert result.actor == ambient.actor
        assert fake_logger.messages("INFO") == [
            "eventName overridden from webhook event: issue_comment"
        ]

    def test_empty_event_is_ignored(self) -> None:
        """An empty event string does not replace the event name."""
        ambient = ambient_event("issues")
        result = apply_webhook_override(ambient, _envelope(event="", payload={}))
        assert result.event_name == "issues"
        assert result.payload == {}

    def test_payload_replaces_whole_payload(self) -> None:
        """The payload is replaced wholesale, not merged."""
        ambient = ambient_event("issues")
        new_payload = pull_request_payload(99)

        result = apply_webhook_override(ambient, _envelope(payload=new_payload))

        assert result.payload == new_payload
        assert "issue" not in result.payload

    def test_repository_override(self, fake_logger: FakeLogger) -> None:
        """A complete payload.repository replaces the repository."""
        payload = {"repository": {"owner": {"login": "acme"}, "name": "rockets"}}

        result = apply_webhook_override(ambient_event(), _envelope(payload=payload))

        assert result.repository == Repository(owner="acme", repo="rockets")
        assert result.repository.full_name == "acme/rockets"
        assert (
            "repository overridden from webhook event: acme/rockets"
            in fake_logger.messages("INFO")
        )

    @pytest.mark.parametrize(
        "repository",
        [
            {"name": "rockets"},
            {"owner": {"login": "acme"}},
            {"owner": {}, "name": "rockets"},
            {"owner": "acme", "name": "rockets"},
            {"owner": {"login": ""}, "name": "rockets"},
            "acme/rockets",
        ],
        ids=["no-owner", "no-name", "no-login", "owner-string", "empty-login", "string"],
    )
    def test_malformed_repository_keeps_ambient_silently(
        self, repository: object, fake_logger: FakeLogger
    ) -> None:
        """Incomplete repository objects are ignored without a warning."""
        result = apply_webhook_override(
            ambient_event(), _envelope(payload={"repository": repository})
        )

        assert result.repository == AMBIENT_REPOSITORY
        assert fake_logger.messages("WARNING") == []

    @pytest.mark.parametrize(
        "sender",
        [{}, {"login": ""}, {"login": None}, "alice"],
        ids=["no-login", "empty-login", "null-login", "string"],
    )
    def test_sender_without_login_keeps_actor(self, sender: object) -> None:
        """The actor only changes when sender.login is a non-empty string."""
        result = apply_webhook_override(
            ambient_event(actor="octocat"), _envelope(payload={"sender": sender})
        )
        assert result.actor == "octocat"


def test_override_does_not_mutate_ambient() -> None:
    """The ambient source is left exactly as it was."""
    ambient = ambient_event("issues")
    original_payload = dict(ambient.payload)
    text = _envelope(
        event="pull_request",
        payload={
            "repository": {"owner": {"login": "acme"}, "name": "rockets"},
            "sender": {"login": "alice"},
        },
    )

    result = apply_webhook_override(ambient, text)

    assert result is not ambient
    assert ambient.event_name == "issues"
    assert ambient.actor == "octocat"
    assert ambient.repository == AMBIENT_REPOSITORY
    assert ambient.payload == original_payload
