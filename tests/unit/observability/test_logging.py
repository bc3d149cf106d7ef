"""Tests for structured logging setup and PII redaction."""

import json
import uuid

import pytest
import structlog

from itemsapi.config.models.observability import LoggingConfig
from itemsapi.observability.logging import (
    PIIRedactor,
    get_logger,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture(autouse=True)
def reset_structlog() -> None:
    structlog.reset_defaults()


class TestPIIRedactor:
    """Tests for PIIRedactor processor."""

    @pytest.fixture
    def redactor(self) -> PIIRedactor:
        return PIIRedactor()

    def test_redacts_sensitive_keys(self, redactor: PIIRedactor) -> None:
        event = {"event": "login", "password": "hunter2", "Authorization": "Bearer x"}

        result = redactor(None, "info", event)

        assert result["password"] == "[REDACTED]"
        assert result["Authorization"] == "[REDACTED]"
        assert result["event"] == "login"

    def test_redacts_patterns_in_strings(self, redactor: PIIRedactor) -> None:
        event = {"event": "note", "body": "mail jane@example.com or call +1 555 123 4567"}

        result = redactor(None, "info", event)

        assert "jane@example.com" not in result["body"]
        assert "[EMAIL]" in result["body"]
        assert "[PHONE]" in result["body"]

    def test_redacts_ssn(self, redactor: PIIRedactor) -> None:
        result = redactor(None, "info", {"event": "x", "note": "ssn 123-45-6789"})

        assert result["note"] == "ssn [SSN]"

    def test_redacts_nested_values(self, redactor: PIIRedactor) -> None:
        event = {"event": "x", "record": {"token": "t", "items": [{"email": "a@b.io"}]}}

        result = redactor(None, "info", event)

        assert result["record"]["token"] == "[REDACTED]"
        assert result["record"]["items"][0]["email"] == "[REDACTED]"

    def test_uuid_identifiers_survive(self, redactor: PIIRedactor) -> None:
        item_id = "12345678-1234-4234-8234-123456789012"
        event = {
            "event": "item_created",
            "item_id": item_id,
            "request_id": item_id,
            "path": f"/{item_id}",
            "message": f"Item {item_id} not found",
        }

        assert redactor(None, "info", event) == event

    def test_random_uuids_survive_pattern_scan(self, redactor: PIIRedactor) -> None:
        for _ in range(500):
            item_id = str(uuid.uuid4())
            event = {"event": "x", "item_id": item_id, "error": f"Item {item_id} failed"}

            assert redactor(None, "info", event) == event

    @pytest.mark.parametrize(
        "phone", ["+1 555 123 4567", "(555) 123-4567", "555.123.4567", "+44 20 7946 0958"]
    )
    def test_phone_formats_redacted(self, redactor: PIIRedactor, phone: str) -> None:
        result = redactor(None, "info", {"event": "x", "note": f"call {phone} today"})

        assert result["note"] == "call [PHONE] today"

    def test_leaves_other_values(self, redactor: PIIRedactor) -> None:
        event = {"event": "x", "count": 3, "ok": True, "item_id": "abc"}

        assert redactor(None, "info", event) == event


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json")

        get_logger("test").info("item_created", item_id="abc")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["event"] == "item_created"
        assert data["item_id"] == "abc"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json")

        get_logger("test").debug("noisy")

        assert "noisy" not in capsys.readouterr().err

    def test_redaction_applied(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json", redact_pii=True)

        get_logger("test").info("event", email="someone@example.com")

        assert "someone@example.com" not in capsys.readouterr().err

    def test_redaction_disabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json", redact_pii=False)

        get_logger("test").info("event", note="someone@example.com")

        assert "someone@example.com" in capsys.readouterr().err

    def test_from_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging_from_config(LoggingConfig(level="WARNING", format="json"))

        logger = get_logger("test")
        logger.info("hidden")
        logger.warning("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err
