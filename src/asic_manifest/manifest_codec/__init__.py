"""Manifest codec module.

This module handles:
- manifest.xml parsing
- Soft validation of version and package media type
- manifest.xml writing
"""

from .manifest import MANIFEST_XML, Manifest, ManifestParseResult
from .validators import validate_package_mimetype, validate_version

__all__ = [
    "MANIFEST_XML",
    "Manifest",
    "ManifestParseResult",
    "validate_package_mimetype",
    "validate_version",
]
