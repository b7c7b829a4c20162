"""Chat replies. There is no model behind this yet: the reply echoes the message."""
from typing import Any

from civic_assistant.errors import InvalidInputError

REPLY_PREFIX = "You said: "


def respond(message: Any) -> str:
    """Echo a non-empty string message back, prefixed with "You said: "."""
    if not isinstance(message, str) or not message:
        raise InvalidInputError()
    return f"{REPLY_PREFIX}{message}"
