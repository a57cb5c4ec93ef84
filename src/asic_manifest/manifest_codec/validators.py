"""Soft validation checks for parsed manifests.

These checks report findings as messages instead of raising, so a manifest
with a wrong version or package type still parses and stays usable. The
caller decides whether to warn, reject, or ignore.

Full validation against the OASIS RelaxNG grammar is not performed.
"""

SUPPORTED_MANIFEST_VERSION = "1.2"


def validate_version(version: str | None) -> list[str]:
    """Check the manifest:version attribute of the document root.

    Args:
        version: Attribute value, None or empty if absent

    Returns:
        List of error messages (empty if the version is 1.2)
    """
    if not version:
        return ["no manifest:version"]
    if version.lower() != SUPPORTED_MANIFEST_VERSION:
        return [f"manifest:version != {SUPPORTED_MANIFEST_VERSION}"]
    return []


def validate_package_mimetype(media_type: str, expected: str | None) -> list[str]:
    """Compare the package root entry's media type with the expected one.

    The comparison is exact; no expectation means nothing to check.
    """
    if expected is not None and media_type != expected:
        return [f"mime type does not match expected: {expected} vs {media_type}"]
    return []
