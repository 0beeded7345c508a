"""
Tests for the error envelope response builder.
"""

import json
from datetime import datetime, timedelta, timezone

from app.shared.errors.classifier import ClassificationResult, classify
from app.shared.errors.envelope import build_envelope, format_timestamp
from app.shared.errors.failures import (
    CastFailure,
    FieldError,
    SchemaValidationFailure,
    StorageFailure,
    TransportFailure,
    WhitelistFailure,
)
from app.shared.errors.schemas import GenericDetail

FIXED_NOW = datetime(2026, 3, 14, 9, 26, 53, 589000, tzinfo=timezone.utc)


class _Opaque:
    def __str__(self) -> str:
        return "opaque-value"


class TestBuildEnvelope:
    """Tests for envelope assembly."""

    def test_copies_classification_and_request(self) -> None:
        result = classify(CastFailure(field="age", value="abc"))
        envelope = build_envelope(result, "/api/v1/students?page=2", "GET", now=FIXED_NOW)
        body = envelope.model_dump(mode="json")

        assert body["success"] is False
        assert body["error"]["code"] == "CAST_ERROR"
        assert body["error"]["message"] == "Invalid data format"
        assert body["error"]["path"] == "/api/v1/students?page=2"
        assert body["error"]["method"] == "GET"
        assert body["error"]["timestamp"] == "2026-03-14T09:26:53.589Z"
        assert body["error"]["details"] == {
            "suggestion": "Please provide a valid format for this field",
            "code": "INVALID_DATA_FORMAT",
            "field": "age",
            "value": "abc",
        }

    def test_details_use_camel_case_keys(self) -> None:
        schema = classify(
            SchemaValidationFailure(
                errors=(FieldError(field="email", message="required", kind="required"),)
            )
        )
        whitelist = classify(WhitelistFailure(message="property foo should not exist"))
        storage = classify(StorageFailure(message="x", code=91))

        schema_details = build_envelope(schema, "/", "POST").error.details
        whitelist_details = build_envelope(whitelist, "/", "POST").error.details
        storage_details = build_envelope(storage, "/", "POST").error.details

        assert schema_details["validationErrors"] == [
            {"field": "email", "message": "required", "value": None, "kind": "required"}
        ]
        assert whitelist_details["invalidProperties"] == ["foo"]
        assert "allowedProperties" in whitelist_details
        assert storage_details["storageCode"] == 91

    def test_collaborator_details_mapping(self) -> None:
        result = classify(
            TransportFailure(
                status=402,
                payload={"message": "Plan expired", "details": {"plan": "basic"}},
            )
        )
        details = build_envelope(result, "/", "GET").error.details
        assert details["plan"] == "basic"
        assert "suggestion" in details

    def test_unserializable_values_rendered_as_text(self) -> None:
        result = classify(CastFailure(field="classId", value=_Opaque()))
        envelope = build_envelope(result, "/", "GET", now=FIXED_NOW)
        assert envelope.error.details["value"] == "opaque-value"
        json.dumps(envelope.model_dump(mode="json"))

    def test_default_timestamp_is_utc_now(self) -> None:
        result = ClassificationResult(
            code="GENERIC_ERROR",
            status=500,
            message="boom",
            details=GenericDetail(suggestion="retry"),
        )
        before = datetime.now(timezone.utc)
        timestamp = build_envelope(result, "/", "GET").error.timestamp
        after = datetime.now(timezone.utc)

        assert timestamp.endswith("Z")
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        assert before.replace(microsecond=0) <= parsed <= after

    def test_build_does_not_mutate_result(self) -> None:
        result = classify(CastFailure(field="age", value="abc"))
        first = build_envelope(result, "/a", "GET", now=FIXED_NOW)
        second = build_envelope(result, "/a", "GET", now=FIXED_NOW)
        assert first == second


class TestFormatTimestamp:
    """Tests for timestamp rendering."""

    def test_converts_to_utc(self) -> None:
        moment = datetime(2026, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2026-01-01T10:00:00.000Z"
