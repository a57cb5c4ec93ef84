"""Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup
- Settings cache isolation
- Sample manifest documents (valid, soft-invalid, malformed)
"""

import os
from typing import Generator

import pytest

# Set application environment variables BEFORE importing any application code
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["POWERTOOLS_DEV"] = "true"

from asic_manifest.shared.config import clear_settings_cache  # noqa: E402


ASIC_E_MIMETYPE = "application/vnd.etsi.asic-e+zip"


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Reload settings from the environment for every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def asic_mimetype() -> str:
    """Package media type of an ASiC-E container."""
    return ASIC_E_MIMETYPE


@pytest.fixture
def sample_manifest_xml() -> bytes:
    """Complete valid ASiC-E manifest, including a signature entry."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<manifest:manifest xmlns:manifest="urn:oasis:names:tc:opendocument:xmlns:manifest:1.0" manifest:version="1.2">
    <manifest:file-entry manifest:full-path="/" manifest:media-type="application/vnd.etsi.asic-e+zip"/>
    <manifest:file-entry manifest:full-path="contract.pdf" manifest:media-type="application/pdf" manifest:size="52341"/>
    <manifest:file-entry manifest:full-path="annex/terms.txt" manifest:media-type="text/plain"/>
    <manifest:file-entry manifest:full-path="META-INF/signatures0.xml" manifest:media-type="application/xml" manifest:size="8120"/>
</manifest:manifest>
"""


@pytest.fixture
def minimal_manifest_xml() -> bytes:
    """Manifest using the manifest prefix without declaring its namespace."""
    return (
        b'<manifest:manifest manifest:version="1.2">'
        b'<manifest:file-entry manifest:full-path="/" '
        b'manifest:media-type="application/vnd.etsi.asic-e+zip"/>'
        b'<manifest:file-entry manifest:full-path="doc.xml" '
        b'manifest:media-type="text/xml" manifest:size="42"/>'
        b"</manifest:manifest>"
    )


@pytest.fixture
def unversioned_manifest_xml() -> bytes:
    """Manifest without manifest:version, otherwise valid."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<manifest:manifest xmlns:manifest="urn:oasis:names:tc:opendocument:xmlns:manifest:1.0">
    <manifest:file-entry manifest:full-path="/" manifest:media-type="application/x-test"/>
    <manifest:file-entry manifest:full-path="data.bin" manifest:media-type="application/octet-stream" manifest:size="7"/>
</manifest:manifest>
"""


@pytest.fixture
def malformed_manifest_xml() -> bytes:
    """Malformed XML (syntax error)."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<manifest:manifest manifest:version="1.2">
    <manifest:file-entry manifest:full-path="doc.xml"
    <!-- Missing closing tags -->
"""
