"""Application-level error signalling.

``AppError`` is the base for every expected, named failure raised by the
Service Layer.  It carries a human-readable ``message``, a stable
machine ``code`` and the HTTP ``status_code`` the API layer should use.
Infrastructure failures (database, network) are never wrapped in it.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base class for domain errors surfaced verbatim to API clients."""

    status_code: int = 400
    default_message: str = "Application error."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        """Snake-case error code derived from the class name."""
        name = type(self).__name__
        return "".join(
            f"_{char.lower()}" if char.isupper() and index else char.lower()
            for index, char in enumerate(name)
        )
