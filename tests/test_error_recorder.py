"""
Tests for the diagnostic recorder.

The recorder must log the original, unsanitized failure with its request
context, and must never raise into the response path.
"""

import logging
from unittest.mock import patch

from app.shared.errors.classifier import classify
from app.shared.errors.failures import (
    FieldError,
    GenericFailure,
    RequestValidationFailure,
    StorageFailure,
    UnclassifiedFailure,
)
from app.shared.errors.recorder import (
    RequestContext,
    diagnostic_payload,
    record_failure,
)

RECORDER_LOGGER = "app.shared.errors.recorder"
CONTEXT = RequestContext(
    path="/api/v1/students?page=1",
    method="POST",
    body={"username": "jdoe"},
    user="admin-42",
)


class TestDiagnosticPayload:
    """Tests for the operator record contents."""

    def test_contains_original_message_and_request(self) -> None:
        failure = StorageFailure(
            message="E11000 duplicate key error index: email_1",
            stack="Traceback (most recent call last): ...",
            code=11000,
        )
        result = classify(failure)
        payload = diagnostic_payload(failure, result, CONTEXT)

        assert payload == {
            "code": "DUPLICATE_KEY_ERROR",
            "origin": "StorageDuplicateKey",
            "message": "E11000 duplicate key error index: email_1",
            "stack": "Traceback (most recent call last): ...",
            "fieldErrors": [],
            "statusCode": 409,
            "url": "/api/v1/students?page=1",
            "method": "POST",
            "body": {"username": "jdoe"},
            "user": "admin-42",
        }

    def test_request_field_errors_are_recorded(self) -> None:
        failure = RequestValidationFailure(
            message="Validation failed: body.age: Input should be a valid integer",
            errors=(
                FieldError(
                    field="body.age",
                    message="Input should be a valid integer",
                    value="x",
                    kind="int_parsing",
                ),
            ),
        )
        payload = diagnostic_payload(failure, classify(failure), CONTEXT)

        assert payload["code"] == "VALIDATION_PIPE_ERROR"
        assert payload["fieldErrors"] == [
            {
                "field": "body.age",
                "message": "Input should be a valid integer",
                "value": "x",
                "kind": "int_parsing",
            }
        ]


class TestRecordFailure:
    """Tests for emitting the log record."""

    def test_server_error_logged_at_error(self, caplog) -> None:
        failure = GenericFailure(message="socket closed by 10.0.0.3")
        with caplog.at_level(logging.WARNING, logger=RECORDER_LOGGER):
            record_failure(failure, classify(failure), CONTEXT)

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.ERROR
        assert "GENERIC_ERROR" in record.getMessage()
        assert "socket closed by 10.0.0.3" in record.getMessage()
        assert record.diagnostic["message"] == "socket closed by 10.0.0.3"

    def test_client_error_logged_at_warning(self, caplog) -> None:
        failure = StorageFailure(message='dup key: { email: "a@b.com" }', code=11000)
        with caplog.at_level(logging.WARNING, logger=RECORDER_LOGGER):
            record_failure(failure, classify(failure), CONTEXT)

        assert caplog.records[0].levelno == logging.WARNING

    def test_unknown_failures_are_recorded(self, caplog) -> None:
        failure = UnclassifiedFailure(raw_type="NoneType")
        with caplog.at_level(logging.WARNING, logger=RECORDER_LOGGER):
            record_failure(failure, classify(failure), CONTEXT)

        assert caplog.records[0].diagnostic["code"] == "UNKNOWN_ERROR"
        assert caplog.records[0].diagnostic["origin"] == "Unclassified"

    def test_unserializable_body_is_stringified(self, caplog) -> None:
        context = RequestContext(path="/", method="POST", body={"blob": object()})
        failure = GenericFailure(message="boom")
        with caplog.at_level(logging.WARNING, logger=RECORDER_LOGGER):
            record_failure(failure, classify(failure), context)

        assert "object object at" in caplog.records[0].getMessage()

    def test_logging_failure_does_not_propagate(self, capsys) -> None:
        failure = GenericFailure(message="boom")
        with patch(
            "app.shared.errors.recorder.logger.log",
            side_effect=RuntimeError("disk full"),
        ):
            record_failure(failure, classify(failure), CONTEXT)

        assert "Failed to record diagnostic for GENERIC_ERROR" in capsys.readouterr().err
