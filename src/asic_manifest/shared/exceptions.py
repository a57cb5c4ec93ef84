"""Fatal errors raised by the manifest codec.

Each error aborts the operation that raised it: no partial manifest is
returned from a failed parse, and nothing is guaranteed about a sink after a
failed write.

Exception hierarchy:
    ManifestError (base)
    ├── MalformedDocumentError
    ├── SerializationError
    └── EntryNotFoundError

Soft validation findings (version or mimetype mismatches) are never raised;
they are collected in the parse result instead.
"""

from typing import Any


class ManifestError(Exception):
    """Base exception for fatal manifest codec failures.

    Carries a stable code so callers can tell a broken document from a failed
    write or an unknown entry without matching on message text.

    Attributes:
        message: Description of the failure
        error_code: Stable identifier of the failure kind
        details: Offending values, such as the entry path or parser position
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Render the error for structured log records.

        The message is stored under "error_message" because "message" is a
        reserved LogRecord attribute.
        """
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code!r}, {self.message!r})"


class MalformedDocumentError(ManifestError):
    """Raised when a manifest document cannot be read.

    This covers:
    - Malformed XML syntax or empty input
    - Missing manifest:full-path or manifest:media-type attributes
    - Unparsable manifest:size values
    - Entries rejected by the entry model
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "MALFORMED_DOCUMENT", details)


class SerializationError(ManifestError):
    """Raised when a manifest cannot be rendered to its byte sink.

    This covers I/O failures of the sink and encoding errors.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "SERIALIZATION_FAILURE", details)


class EntryNotFoundError(ManifestError):
    """Raised when no manifest entry has the requested path."""

    def __init__(self, path: str) -> None:
        """Initialize entry lookup error.

        Args:
            path: Path that was looked up
        """
        super().__init__(f"{path} not found", "ENTRY_NOT_FOUND", {"path": path})
        self.path = path
