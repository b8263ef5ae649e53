"""
Tests for logging, settings and the error types.
"""

import json
import logging

import pytest


def _record(msg="Test message", **extra):
    record = logging.LogRecord(
        name="promocheck.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogging:
    """Structured logging tests."""

    def test_json_formatter(self):
        from promocheck.logging import JSONFormatter

        parsed = json.loads(JSONFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"
        assert parsed["logger"] == "promocheck.test"
        assert "timestamp" in parsed

    def test_json_formatter_extra_fields(self):
        from promocheck.logging import JSONFormatter

        record = _record("Audit complete", score=72, verdict="needs_review", unrelated="x")
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["score"] == 72
        assert parsed["verdict"] == "needs_review"
        assert "unrelated" not in parsed

    def test_text_formatter_appends_context(self):
        from promocheck.logging import TextFormatter

        line = TextFormatter().format(_record("Analysis complete", issues_count=3))
        assert "promocheck.test: Analysis complete" in line
        assert line.endswith("| issues_count=3")

    def test_get_logger(self):
        from promocheck.logging import get_logger
        assert get_logger("analyzer").name == "promocheck.analyzer"

    def test_setup_logging_replaces_handler(self):
        from promocheck.logging import setup_logging

        logger = setup_logging(level="debug", fmt="text")
        setup_logging(level="debug", fmt="text")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG


class TestSettings:

    def test_defaults(self):
        from promocheck.config import settings
        assert settings.MIN_CONTENT_CHARS == 100
        assert settings.HISTORY_SIZE == 10
        assert settings.AUDIT_FALLBACK == "not_verifiable"

    def test_severity_weights(self):
        from promocheck.config import settings
        assert settings.severity_weights == {
            "critical": 25, "high": 15, "medium": 8, "low": 3, "info": 1,
        }

    def test_frozen(self):
        from dataclasses import FrozenInstanceError
        from promocheck.config import settings
        with pytest.raises(FrozenInstanceError):
            settings.HISTORY_SIZE = 99

    @pytest.mark.parametrize("model", ["AnalyzeRequest", "QualifyRequest"])
    def test_request_limit_follows_settings(self, model):
        from pydantic import ValidationError
        from promocheck.config import settings
        from promocheck.schemas import analysis

        request_model = getattr(analysis, model)
        request_model(content="a" * settings.MAX_CONTENT_CHARS)
        with pytest.raises(ValidationError):
            request_model(content="a" * (settings.MAX_CONTENT_CHARS + 1))


class TestErrors:

    def test_validation_hierarchy(self):
        from promocheck.errors import (
            ContentValidationError, PromocheckError, QualificationRequiredError,
            ValidationFailure,
        )
        assert issubclass(ContentValidationError, ValidationFailure)
        assert issubclass(QualificationRequiredError, ValidationFailure)
        assert issubclass(ValidationFailure, PromocheckError)

    def test_transition_error_message(self):
        from promocheck.errors import InvalidTransitionError
        exc = InvalidTransitionError("upload", "results")
        assert "upload" in str(exc) and "results" in str(exc)
