"""Shared building blocks for the manifest codec."""

from .config import Settings, get_settings
from .exceptions import (
    ManifestError,
    MalformedDocumentError,
    SerializationError,
    EntryNotFoundError,
)
from .models import ManifestEntry

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ManifestError",
    "MalformedDocumentError",
    "SerializationError",
    "EntryNotFoundError",
    # Models
    "ManifestEntry",
]
