"""Shared utilities used across the application."""

import uuid

from dashboard.exceptions import InvalidRequestError


def validate_page_id(value: str, name: str = "page ID") -> str:
    """Validate a Notion page or block id and return it in dashed form.

    Notion accepts ids with or without dashes; both are normalised so that
    they compare equal.

    Args:
        value: Id to validate
        name: Human-readable name for error messages

    Returns:
        Lowercase dashed UUID string

    Raises:
        InvalidRequestError: if the string is not a valid id
    """
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise InvalidRequestError(f"Invalid {name}") from None
