"""Attribute extraction for manifest:file-entry elements.

This module provides:
- Required attribute lookup with descriptive errors
- Strict parsing of the optional manifest:size attribute
- Conversion of a file-entry element into a ManifestEntry
"""

from xml.dom import minidom

from pydantic import ValidationError

from ..shared.exceptions import MalformedDocumentError
from ..shared.models import MAX_FILE_SIZE, ManifestEntry

ATTR_FULL_PATH = "manifest:full-path"
ATTR_MEDIA_TYPE = "manifest:media-type"
ATTR_SIZE = "manifest:size"
ATTR_VERSION = "manifest:version"


def get_required_attribute(element: minidom.Element, name: str) -> str:
    """Get a required attribute value or raise error.

    An attribute that is present but empty is returned as an empty string.

    Args:
        element: manifest:file-entry element
        name: Qualified attribute name

    Returns:
        Attribute value

    Raises:
        MalformedDocumentError: If the attribute is missing
    """
    if not element.hasAttribute(name):
        raise MalformedDocumentError(
            f"Missing required attribute: {name}",
            {"element": element.tagName, "missing_attribute": name},
        )
    return element.getAttribute(name)


def parse_size(value: str | None, path: str) -> int | None:
    """Parse the manifest:size attribute.

    Args:
        value: Raw attribute value, None if the attribute is absent
        path: Full path of the entry, for error context

    Returns:
        Size in bytes, or None when absent

    Raises:
        MalformedDocumentError: If the value is not a non-negative 64-bit integer
    """
    if value is None:
        return None
    if not (value.isascii() and value.isdigit()) or int(value) > MAX_FILE_SIZE:
        raise MalformedDocumentError(
            f"Invalid {ATTR_SIZE} for {path}: {value!r}",
            {"full_path": path, "size": value},
        )
    return int(value)


def parse_file_entry(element: minidom.Element, full_path: str, media_type: str) -> ManifestEntry:
    """Build a ManifestEntry from a non-root manifest:file-entry element."""
    raw_size = element.getAttribute(ATTR_SIZE) if element.hasAttribute(ATTR_SIZE) else None
    size = parse_size(raw_size, full_path)
    try:
        return ManifestEntry(path=full_path, media_type=media_type, size=size)
    except ValidationError as e:
        raise MalformedDocumentError(
            f"Invalid file entry {full_path!r}: {e.error_count()} validation error(s)",
            {"full_path": full_path, "errors": e.errors(include_url=False)},
        )
