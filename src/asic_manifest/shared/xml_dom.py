"""Generic XML document primitives used by the manifest codec.

The manifest vocabulary is addressed by qualified names
(``manifest:file-entry``, ``manifest:full-path``), DOM Level 1 style. Documents
are therefore parsed with namespace processing switched off, which keeps
prefixes verbatim and also accepts manifests that never declare the
``xmlns:manifest`` namespace.

Rendering escapes tab, newline and carriage return in attribute values as
character references, so they survive attribute-value normalization when the
document is read back.
"""

import re
from typing import BinaryIO
from xml.dom import expatbuilder, minidom
from xml.parsers.expat import ExpatError
from xml.sax.saxutils import escape

from .exceptions import MalformedDocumentError, SerializationError

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Characters outside the XML 1.0 Char production
_ILLEGAL_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)

_ATTRIBUTE_ENTITIES = {
    '"': "&quot;",
    "\t": "&#9;",
    "\n": "&#10;",
    "\r": "&#13;",
}


def parse_document(data: bytes) -> minidom.Document:
    """Parse raw XML bytes into a DOM document.

    Args:
        data: Raw XML document bytes

    Returns:
        Parsed minidom Document

    Raises:
        MalformedDocumentError: If the bytes are not a well-formed XML document,
            or declare an encoding that cannot be decoded
    """
    try:
        return expatbuilder.parseString(data, namespaces=False)
    except ExpatError as e:
        raise MalformedDocumentError(
            f"Invalid XML format: {e}",
            {"parse_error": str(e), "line": e.lineno, "column": e.offset},
        )
    except (LookupError, ValueError) as e:
        raise MalformedDocumentError(
            f"Invalid XML format: {e}",
            {"parse_error": str(e), "line": None, "column": None},
        )


def new_document() -> minidom.Document:
    """Create an empty, mutable DOM document."""
    return minidom.Document()


def append_element(
    parent: minidom.Node,
    tag: str,
    attributes: dict[str, str] | None = None,
) -> minidom.Element:
    """Create an element, set its attributes in order, and append it to parent.

    Args:
        parent: Document or element receiving the new child
        tag: Qualified tag name
        attributes: Attribute values keyed by qualified name

    Returns:
        The appended element
    """
    document = parent if parent.nodeType == parent.DOCUMENT_NODE else parent.ownerDocument
    element = document.createElement(tag)
    for name, value in (attributes or {}).items():
        element.setAttribute(name, value)
    parent.appendChild(element)
    return element


def elements_by_tag_name(tree: minidom.Node, name: str) -> list[minidom.Element]:
    """Return all descendant elements with the given qualified name.

    Elements are returned in document order; the node passed in is not
    itself included.
    """
    return list(tree.getElementsByTagName(name))


def _check_chars(value: str, context: str) -> None:
    match = _ILLEGAL_XML_CHARS.search(value)
    if match:
        raise SerializationError(
            f"Character {match.group()!r} cannot be written to XML in {context}",
            {"context": context, "position": match.start()},
        )


def _render_element(element: minidom.Element, lines: list[str], indent: str, depth: int) -> None:
    _check_chars(element.tagName, "element name")
    parts = [f"{indent * depth}<{element.tagName}"]
    for name, value in element.attributes.items():
        _check_chars(value, f"attribute {name}")
        parts.append(f' {name}="{escape(value, _ATTRIBUTE_ENTITIES)}"')

    children = [n for n in element.childNodes if n.nodeType == n.ELEMENT_NODE]
    if not children:
        lines.append("".join(parts) + "/>")
        return

    lines.append("".join(parts) + ">")
    for child in children:
        _render_element(child, lines, indent, depth + 1)
    lines.append(f"{indent * depth}</{element.tagName}>")


def serialize_document(
    document: minidom.Document,
    sink: BinaryIO,
    indent: str = "  ",
) -> None:
    """Render a DOM document as UTF-8 XML into a binary sink.

    Only element nodes and their attributes are rendered; manifests carry no
    text content.

    Args:
        document: Document to render
        sink: Writable binary stream
        indent: Indentation for each nesting level

    Raises:
        SerializationError: If a value holds characters XML cannot represent,
            or the sink cannot be written
    """
    lines = [XML_DECLARATION]
    if document.documentElement is not None:
        _render_element(document.documentElement, lines, indent, 0)

    try:
        sink.write(("\n".join(lines) + "\n").encode("utf-8"))
    except (OSError, ValueError) as e:
        raise SerializationError(
            f"Failed to write XML document: {e}",
            {"error": str(e), "error_type": type(e).__name__},
        )
