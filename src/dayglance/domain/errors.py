from __future__ import annotations

from typing import Optional


class ScheduleError(Exception):
    """Base class for every failure that aborts a schedule request.

    ``category`` is stable and caller visible; clients use it to tell
    "fix your request" from "try again later" from "contact support".
    """

    category = "internal"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(ScheduleError):
    """Bad date, bad clock time, unknown timezone or an inverted window."""

    category = "client_input"
    status_code = 400


class DataAccessError(ScheduleError):
    """An upstream query could not complete."""

    category = "upstream_data"
    status_code = 502

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None, source: str = "database") -> None:
        self.upstream_message = message
        self.code = code
        self.source = source
        detail = message or "Unknown database error"
        super().__init__(f"Failed to fetch {source}: {detail} (Code: {code or 'unknown'})")


class ProcessingError(ScheduleError):
    """A single row could not be turned into a timeline item."""

    category = "processing"
    status_code = 500

    def __init__(self, item_title: str, reason: str) -> None:
        self.item_title = item_title
        self.reason = reason
        super().__init__(f'Failed to process item "{item_title}": {reason}')


class RenderingError(ScheduleError):
    category = "rendering"
    status_code = 500


class ConfigurationError(ScheduleError):
    """Required credentials are missing or malformed."""

    category = "configuration"
    status_code = 500


class DecryptionError(ValueError):
    """Raised by the title cipher for ciphertext it cannot open."""
