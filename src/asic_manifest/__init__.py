"""Codec for the OASIS manifest.xml document of ASiC/ODF containers."""

from .manifest_codec import MANIFEST_XML, Manifest, ManifestParseResult
from .shared import (
    EntryNotFoundError,
    MalformedDocumentError,
    ManifestEntry,
    ManifestError,
    SerializationError,
)

__version__ = "0.1.0"

__all__ = [
    "MANIFEST_XML",
    "Manifest",
    "ManifestEntry",
    "ManifestParseResult",
    "ManifestError",
    "MalformedDocumentError",
    "SerializationError",
    "EntryNotFoundError",
]
