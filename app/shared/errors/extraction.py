"""
Structured data extraction from free-form diagnostic messages.

Storage drivers and request validators report field names and offending
properties inside message text. These helpers pull them out with fixed
patterns. They never raise: input that does not match yields an empty
result.
"""

import re
from dataclasses import dataclass
from typing import Any

from app.shared.errors.schemas import InvalidPropertiesDetail
from app.shared.errors.taxonomy import ALLOWED_PROPERTIES_HINT

DUPLICATE_KEY_PATTERN = re.compile(r'dup key: \{ (.+): "(.+)" \}')
INVALID_PROPERTY_PATTERN = re.compile(r"property (\w+) should not exist")
INVALID_PROPERTY_MARKER = "should not exist"


@dataclass(frozen=True)
class DuplicateKeyMatch:
    """Field and value named in a duplicate-key message."""

    field: str
    value: str


def extract_duplicate_key(message: Any) -> DuplicateKeyMatch | None:
    """Parse ``dup key: { <field>: "<value>" }`` out of a driver message.

    Args:
        message: The storage driver's error message.

    Returns:
        The field and value, or None when the message has no such clause.
    """
    if not isinstance(message, str):
        return None
    match = DUPLICATE_KEY_PATTERN.search(message)
    if match is None:
        return None
    return DuplicateKeyMatch(field=match.group(1), value=match.group(2))


def extract_invalid_properties(messages: Any) -> list[str]:
    """Collect property names from ``property <name> should not exist`` texts.

    Accepts a list of per-property messages or one combined message.
    Each distinct name is reported once, in the order first seen.
    """
    if isinstance(messages, str):
        messages = [messages]
    elif not isinstance(messages, (list, tuple)):
        return []

    names: list[str] = []
    for message in messages:
        if not isinstance(message, str):
            continue
        for name in INVALID_PROPERTY_PATTERN.findall(message):
            if name not in names:
                names.append(name)
    return names


def mentions_invalid_property(messages: Any) -> bool:
    """True if any message in a list reports a forbidden property."""
    if not isinstance(messages, (list, tuple)):
        return False
    return any(
        isinstance(message, str) and INVALID_PROPERTY_MARKER in message
        for message in messages
    )


def invalid_properties_detail(properties: list[str]) -> InvalidPropertiesDetail:
    """Build the details block for a whitelist violation."""
    return InvalidPropertiesDetail(
        invalid_properties=properties,
        suggestion=(
            "Please remove these properties from your request: "
            f"{', '.join(properties)}"
        ),
        allowed_properties=ALLOWED_PROPERTIES_HINT,
    )
