"""
Tests for field display names and message pattern extraction.

Pure functions, no framework or IO involved.
"""

import pytest

from app.shared.errors.extraction import (
    DuplicateKeyMatch,
    extract_duplicate_key,
    extract_invalid_properties,
    invalid_properties_detail,
    mentions_invalid_property,
)
from app.shared.errors.fields import FIELD_DISPLAY_NAMES, display_name
from app.shared.errors.taxonomy import ALLOWED_PROPERTIES_HINT

DUPLICATE_EMAIL = (
    "E11000 duplicate key error collection: school.students index: email_1 "
    'dup key: { email: "a@b.com" }'
)


class TestDisplayName:
    """Tests for the field display resolver."""

    def test_known_field(self) -> None:
        assert display_name("email") == "Email address"
        assert display_name("phoneNumber") == "Phone number"
        assert display_name("registrationNumber") == "Registration number"
        assert display_name("studentId") == "Student ID"

    def test_unknown_field_returned_unchanged(self) -> None:
        """No casing or whitespace normalization on fallback."""
        assert display_name("nickName") == "nickName"
        assert display_name("EMAIL") == "EMAIL"
        assert display_name(" email") == " email"

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            FIELD_DISPLAY_NAMES["email"] = "changed"  # type: ignore[index]
        assert display_name("email") == "Email address"


class TestExtractDuplicateKey:
    """Tests for duplicate-key message parsing."""

    def test_extracts_field_and_value(self) -> None:
        assert extract_duplicate_key(DUPLICATE_EMAIL) == DuplicateKeyMatch(
            field="email", value="a@b.com"
        )

    def test_bare_clause(self) -> None:
        match = extract_duplicate_key('dup key: { username: "jdoe" }')
        assert match is not None
        assert match.field == "username"
        assert match.value == "jdoe"

    def test_unparseable_message_returns_none(self) -> None:
        assert extract_duplicate_key("E11000 duplicate key error") is None
        assert extract_duplicate_key('dup key: { _id: ObjectId("abc") }') is None
        assert extract_duplicate_key("") is None

    def test_non_string_returns_none(self) -> None:
        assert extract_duplicate_key(None) is None
        assert extract_duplicate_key(11000) is None


class TestExtractInvalidProperties:
    """Tests for whitelist violation parsing."""

    def test_list_of_messages(self) -> None:
        messages = [
            "property foo should not exist",
            "property bar should not exist",
        ]
        assert extract_invalid_properties(messages) == ["foo", "bar"]

    def test_single_message_with_several_matches(self) -> None:
        message = "property foo should not exist, property bar should not exist"
        assert extract_invalid_properties(message) == ["foo", "bar"]

    def test_each_property_reported_once(self) -> None:
        messages = [
            "property foo should not exist",
            "property bar should not exist",
            "property foo should not exist",
        ]
        assert extract_invalid_properties(messages) == ["foo", "bar"]

    def test_unrelated_messages_skipped(self) -> None:
        messages = [
            "email must be an email",
            "property extra should not exist",
            42,
        ]
        assert extract_invalid_properties(messages) == ["extra"]

    def test_non_matching_input(self) -> None:
        assert extract_invalid_properties("nothing to see") == []
        assert extract_invalid_properties(None) == []
        assert extract_invalid_properties({"message": "x"}) == []

    def test_mentions_invalid_property(self) -> None:
        assert mentions_invalid_property(["a", "property x should not exist"])
        assert not mentions_invalid_property(["email must be an email"])
        assert not mentions_invalid_property("property x should not exist")


class TestInvalidPropertiesDetail:
    """Tests for the whitelist violation details block."""

    def test_suggestion_lists_properties(self) -> None:
        detail = invalid_properties_detail(["foo", "bar"])
        assert detail.invalid_properties == ["foo", "bar"]
        assert detail.suggestion == (
            "Please remove these properties from your request: foo, bar"
        )
        assert detail.allowed_properties == ALLOWED_PROPERTIES_HINT
        assert detail.code == "INVALID_PROPERTIES"
