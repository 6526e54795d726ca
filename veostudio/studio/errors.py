"""
Classification of generation failures.

The service reports credential problems only through its error text, so the
classification matches on upstream wording. A change in that wording
silently downgrades a credential failure to a generic one.
"""

__all__ = [
    "GENERIC_ERROR_PREFIX",
    "INVALID_KEY_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "UNKNOWN_ERROR_MESSAGE",
    "classify_error",
]

from ._models import ErrorClassification

NOT_FOUND_MARKER = "Requested entity was not found."
INVALID_KEY_MARKERS = ("API_KEY_INVALID", "API key not valid")
PERMISSION_DENIED_MARKER = "permission denied"

NOT_FOUND_MESSAGE = (
    "Model not found. This can be caused by an invalid API key "
    "or permission issues."
)
INVALID_KEY_MESSAGE = (
    "Your API key is invalid or lacks permissions. "
    "Please select a valid, billing-enabled API key."
)
GENERIC_ERROR_PREFIX = "Video generation failed: "
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


def classify_error(error: BaseException | str | None) -> ErrorClassification:
    """Map a generation failure to a user facing message.

    Args:
        error: The exception raised by the adapter, or its message.

    Returns:
        The message and whether the user should pick a new credential.
    """
    if isinstance(error, BaseException):
        message = str(error) or UNKNOWN_ERROR_MESSAGE
    else:
        message = error or UNKNOWN_ERROR_MESSAGE

    if NOT_FOUND_MARKER in message:
        return ErrorClassification(
            message=NOT_FOUND_MESSAGE, reauthenticate=True
        )
    if (
        any(marker in message for marker in INVALID_KEY_MARKERS)
        or PERMISSION_DENIED_MARKER in message.lower()
    ):
        return ErrorClassification(
            message=INVALID_KEY_MESSAGE, reauthenticate=True
        )
    return ErrorClassification(message=f"{GENERIC_ERROR_PREFIX}{message}")
