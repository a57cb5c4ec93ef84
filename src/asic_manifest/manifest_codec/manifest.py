"""Read and write OASIS manifest.xml documents.

A manifest lists the files of an ASiC/ODF container. The package itself is
described by a root entry with full path "/", whose media type is kept as
Manifest.mimetype; every other entry becomes a ManifestEntry.

Parsing separates two kinds of problems:
- Fatal: malformed XML, missing required attributes, bad sizes. These raise
  MalformedDocumentError and no manifest is returned.
- Soft: missing or unsupported manifest:version, unexpected package type.
  These are returned alongside the manifest and never raise.

Writing always stamps manifest:version="1.2" and never emits entries below
META-INF/, which hold signatures and container metadata.
"""

from collections.abc import Iterable, Iterator
from io import BytesIO
from typing import BinaryIO, NamedTuple

from aws_lambda_powertools import Logger

from ..shared import xml_dom
from ..shared.exceptions import EntryNotFoundError
from ..shared.models import ManifestEntry
from .validators import (
    SUPPORTED_MANIFEST_VERSION,
    validate_package_mimetype,
    validate_version,
)
from .xml_parser import (
    ATTR_FULL_PATH,
    ATTR_MEDIA_TYPE,
    ATTR_SIZE,
    ATTR_VERSION,
    get_required_attribute,
    parse_file_entry,
)

# Location of the manifest inside a container
MANIFEST_XML = "META-INF/manifest.xml"

MANIFEST_NAMESPACE = "urn:oasis:names:tc:opendocument:xmlns:manifest:1.0"
TAG_MANIFEST = "manifest:manifest"
TAG_FILE_ENTRY = "manifest:file-entry"

ROOT_PATH = "/"
EXCLUDED_PREFIX = "META-INF/"

logger = Logger(service="asic-manifest", child=True)


class ManifestParseResult(NamedTuple):
    """Parsed manifest together with its soft validation errors."""

    manifest: "Manifest"
    errors: list[str]


class Manifest:
    """In-memory model of a manifest.xml document.

    Example:
        >>> manifest = Manifest.create("application/vnd.etsi.asic-e+zip")
        >>> manifest.add_file("doc.xml", "text/xml", 42).add_file("img.png", "image/png")
        >>> xml_bytes = manifest.to_bytes()
    """

    def __init__(
        self,
        mimetype: str | None = None,
        files: Iterable[ManifestEntry] = (),
        errors: Iterable[str] = (),
    ) -> None:
        """Initialize manifest.

        Args:
            mimetype: Media type of the package root entry, if any
            files: Entries in document order
            errors: Soft validation errors found while parsing
        """
        self._mimetype = mimetype
        self._files: list[ManifestEntry] = list(files)
        self._errors: tuple[str, ...] = tuple(errors)

    @classmethod
    def parse(
        cls,
        data: bytes | BinaryIO,
        expected_mimetype: str | None = None,
    ) -> ManifestParseResult:
        """Parse a manifest document.

        Args:
            data: Raw manifest.xml bytes or a readable binary stream
            expected_mimetype: Package media type the root entry should declare

        Returns:
            ManifestParseResult with the manifest and its soft validation errors

        Raises:
            MalformedDocumentError: If the XML is malformed, a file entry lacks
                manifest:full-path or manifest:media-type, or a size is invalid
            TypeError: If data is text or a text stream

        Example:
            >>> with open("META-INF/manifest.xml", "rb") as f:
            ...     manifest, errors = Manifest.parse(f, "application/vnd.etsi.asic-e+zip")
        """
        if isinstance(data, str):
            raise TypeError("Manifest.parse() expects bytes or a binary stream, not str")
        if not isinstance(data, (bytes, bytearray)):
            data = data.read()
            if not isinstance(data, (bytes, bytearray)):
                raise TypeError(
                    f"Manifest.parse() expects a binary stream, got {type(data).__name__} content"
                )

        document = xml_dom.parse_document(bytes(data))
        root = document.documentElement

        errors = validate_version(root.getAttribute(ATTR_VERSION))

        mimetype = None
        files: list[ManifestEntry] = []
        for element in xml_dom.elements_by_tag_name(root, TAG_FILE_ENTRY):
            full_path = get_required_attribute(element, ATTR_FULL_PATH)
            media_type = get_required_attribute(element, ATTR_MEDIA_TYPE)

            if full_path == ROOT_PATH:
                mimetype = media_type
                errors.extend(validate_package_mimetype(media_type, expected_mimetype))
            else:
                files.append(parse_file_entry(element, full_path, media_type))

        logger.debug(
            "Parsed manifest",
            extra={
                "mimetype": mimetype,
                "file_count": len(files),
                "error_count": len(errors),
            },
        )
        if errors:
            logger.warning(
                "Manifest validation warnings",
                extra={"warnings": errors, "mimetype": mimetype},
            )

        return ManifestParseResult(cls(mimetype, files, errors), errors)

    @classmethod
    def create(cls, mimetype: str | None = None) -> "Manifest":
        """Create an empty manifest for a package of the given media type."""
        return cls(mimetype)

    @property
    def errors(self) -> tuple[str, ...]:
        """Soft validation errors found while parsing."""
        return self._errors

    @property
    def mimetype(self) -> str | None:
        return self._mimetype

    @property
    def files(self) -> tuple[ManifestEntry, ...]:
        """Entries in order, as a read-only sequence."""
        return tuple(self._files)

    def set_file_size(self, path: str, size: int | None) -> None:
        """Set the size of the first entry with the given path.

        Args:
            path: Exact entry path
            size: New size in bytes, None to drop the size

        Raises:
            EntryNotFoundError: If no entry has this path
            ValidationError: If the size is negative or too large
        """
        for entry in self._files:
            if entry.path == path:
                entry.size = size
                return
        raise EntryNotFoundError(path)

    def add_file(
        self,
        file: ManifestEntry | str,
        media_type: str | None = None,
        size: int | None = None,
    ) -> "Manifest":
        """Append an entry, either given directly or built from its fields.

        Duplicate paths are not rejected.

        Args:
            file: A ManifestEntry, or the path of a new entry
            media_type: Media type of the new entry (path form only)
            size: Size in bytes of the new entry (path form only)

        Returns:
            This manifest, for chaining

        Raises:
            TypeError: If an entry is combined with field values, or a path is
                given without a media type
        """
        if isinstance(file, ManifestEntry):
            if media_type is not None or size is not None:
                raise TypeError("add_file() takes an entry or a path with media type, not both")
            entry = file
        else:
            if media_type is None:
                raise TypeError(f"add_file() missing media type for {file!r}")
            entry = ManifestEntry(path=file, media_type=media_type, size=size)

        self._files.append(entry)
        return self

    def write(self, sink: BinaryIO, indent: str = "  ") -> None:
        """Write the manifest as XML to a binary sink.

        Args:
            sink: Writable binary stream
            indent: Indentation for each nesting level

        Raises:
            SerializationError: If the document cannot be written
        """
        document = xml_dom.new_document()
        root = xml_dom.append_element(
            document,
            TAG_MANIFEST,
            {
                "xmlns:manifest": MANIFEST_NAMESPACE,
                ATTR_VERSION: SUPPORTED_MANIFEST_VERSION,
            },
        )

        if self._mimetype is not None:
            xml_dom.append_element(
                root,
                TAG_FILE_ENTRY,
                {ATTR_FULL_PATH: ROOT_PATH, ATTR_MEDIA_TYPE: self._mimetype},
            )

        skipped = 0
        for entry in self._files:
            if entry.path.startswith(EXCLUDED_PREFIX):
                skipped += 1
                continue
            attributes = {ATTR_FULL_PATH: entry.path, ATTR_MEDIA_TYPE: entry.media_type}
            if entry.size is not None:
                attributes[ATTR_SIZE] = str(entry.size)
            xml_dom.append_element(root, TAG_FILE_ENTRY, attributes)

        logger.debug(
            "Writing manifest",
            extra={"file_count": len(self._files) - skipped, "skipped_count": skipped},
        )
        xml_dom.serialize_document(document, sink, indent)

    def to_bytes(self, indent: str = "  ") -> bytes:
        """Render the manifest as XML bytes."""
        buffer = BytesIO()
        self.write(buffer, indent)
        return buffer.getvalue()

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(tuple(self._files))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(mimetype={self._mimetype!r}, "
            f"files={len(self._files)}, errors={len(self._errors)})"
        )
