"""Pydantic models for manifest entries.

A manifest lists every file stored in a container together with its media
type and, optionally, its size in bytes. The package root entry (full path
"/") is not modelled here; it is carried by Manifest.mimetype instead.
"""

from pydantic import BaseModel, ConfigDict, Field

# Sizes are 64-bit signed on the wire; absent sizes are None.
MAX_FILE_SIZE = 2**63 - 1


class ManifestEntry(BaseModel):
    """One file entry of a manifest.

    The path identifies the entry within its manifest and cannot be
    reassigned. Media type and size may be updated in place.

    Example:
        >>> entry = ManifestEntry(path="doc.xml", media_type="text/xml", size=42)
        >>> entry.size = 64
    """

    model_config = ConfigDict(validate_assignment=True)

    path: str = Field(
        min_length=1,
        frozen=True,
        description="Archive-relative path of the file",
    )
    media_type: str = Field(
        description="Declared media (MIME) type of the file",
    )
    size: int | None = Field(
        default=None,
        ge=0,
        le=MAX_FILE_SIZE,
        description="File length in bytes, None when unknown",
    )
