"""
Formatting of Shopify error payloads.
"""

from typing import Any

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


def format_error_message(errors: Any) -> str:
    """
    Turn an upstream ``errors`` value into one display string.

    Shopify returns errors as a plain string, a list of strings, or a list
    that itself contains lists. Lists are flattened one level and joined
    with ". ".

    Args:
        errors: The ``errors`` value from a Shopify response body

    Returns:
        Human-readable message
    """
    if isinstance(errors, str):
        return errors

    if isinstance(errors, (list, tuple)):
        parts = []
        for error in errors:
            if isinstance(error, (list, tuple)):
                parts.append(". ".join(str(e) for e in error))
            else:
                parts.append(str(error))
        return ". ".join(parts)

    return UNKNOWN_ERROR_MESSAGE
