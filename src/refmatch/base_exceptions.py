"""Root of the refmatch exception hierarchy.

Every error raised by the matcher carries a stable ``error_code`` and a
``context`` dict (reference label, offending config key, path, ...) so that
callers can branch on the code and log the context as structured fields.
"""

from typing import Any


class RefmatchException(Exception):
    """Base exception for all refmatch errors.

    Attributes:
        message: Human-readable error message
        error_code: Stable code for programmatic handling, e.g. ``DECODE_FAILED``
        context: Structured details about the failing match or decode
    """

    def __init__(
        self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = dict(context) if context else {}

    def to_dict(self) -> dict[str, Any]:
        """Flatten the error into log fields.

        Context keys never shadow ``error_code`` or ``message``.
        """
        fields: dict[str, Any] = {
            key: value
            for key, value in self.context.items()
            if key not in ("error_code", "message")
        }
        fields["error_code"] = self.error_code or type(self).__name__
        fields["message"] = self.message
        return fields

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, error_code={self.error_code!r})"
