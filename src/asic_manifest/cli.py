"""Command line tool for inspecting and creating manifest.xml documents.

Usage:
    # Show entries and validation findings of a manifest
    asic-manifest check META-INF/manifest.xml

    # Require a specific package type and fail on any finding
    asic-manifest check manifest.xml --expected-mimetype application/vnd.etsi.asic-e+zip --strict

    # Create a manifest for two files
    asic-manifest create --mimetype application/vnd.etsi.asic-e+zip \\
        --file doc.xml:text/xml:42 --file image.png:image/png -o manifest.xml

Exit codes:
    0  manifest parsed (and, in strict mode, no validation findings)
    1  validation findings in strict mode
    2  manifest could not be read or written
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from .manifest_codec import Manifest
from .shared.config import get_settings
from .shared.exceptions import ManifestError
from .shared.models import ManifestEntry

EXIT_OK = 0
EXIT_VALIDATION = 1
EXIT_ERROR = 2

# Logs go to stderr so they never mix with manifest or JSON output
logger = Logger(service="asic-manifest", stream=sys.stderr)


def parse_file_argument(value: str) -> ManifestEntry:
    """Parse a PATH:TYPE[:SIZE] command line value into an entry.

    The media type is taken from the last colon-separated field, or the one
    before it when the last field is a size, so paths may contain colons.
    """
    parts = value.split(":")
    size = None
    if len(parts) >= 3 and parts[-1].isdigit():
        size = int(parts.pop())
    if len(parts) < 2:
        raise argparse.ArgumentTypeError(f"expected PATH:TYPE[:SIZE], got {value!r}")

    media_type = parts.pop()
    path = ":".join(parts)
    try:
        return ManifestEntry(path=path, media_type=media_type, size=size)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(f"invalid file entry {value!r}: {e.errors()[0]['msg']}")


def manifest_summary(manifest: Manifest, errors: list[str]) -> dict[str, Any]:
    """Build a JSON-friendly summary of a parsed manifest."""
    return {
        "mimetype": manifest.mimetype,
        "files": [entry.model_dump() for entry in manifest.files],
        "errors": errors,
    }


def check_manifest(args: argparse.Namespace) -> int:
    """Parse a manifest and report its entries and validation findings."""
    settings = get_settings()
    expected = args.expected_mimetype or settings.expected_mimetype
    strict = args.strict or settings.strict

    try:
        if args.manifest == "-":
            data = sys.stdin.buffer.read()
        else:
            data = Path(args.manifest).read_bytes()
        manifest, errors = Manifest.parse(data, expected)
    except OSError as e:
        print(f"Error: cannot read {args.manifest}: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ManifestError as e:
        logger.error(
            "Manifest could not be parsed",
            extra={"error": e.to_dict(), "manifest": args.manifest},
        )
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.json:
        print(json.dumps(manifest_summary(manifest, errors), indent=2))
    else:
        print(f"Package mimetype: {manifest.mimetype or '(none)'}")
        print(f"Files: {len(manifest)}")
        for entry in manifest:
            size = "-" if entry.size is None else str(entry.size)
            print(f"  {entry.path}  {entry.media_type}  {size}")
        for message in errors:
            print(f"Error: {message}")

    if strict and errors:
        return EXIT_VALIDATION
    return EXIT_OK


def create_manifest(args: argparse.Namespace) -> int:
    """Write a new manifest built from command line entries."""
    settings = get_settings()
    manifest = Manifest.create(args.mimetype)
    for entry in args.files:
        manifest.add_file(entry)

    try:
        if args.output:
            with open(args.output, "wb") as f:
                manifest.write(f, settings.output_indent)
        else:
            manifest.write(sys.stdout.buffer, settings.output_indent)
            sys.stdout.buffer.flush()
    except OSError as e:
        print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ManifestError as e:
        logger.error("Manifest could not be written", extra={"error": e.to_dict()})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    logger.info(
        "Created manifest",
        extra={"output": args.output or "<stdout>", "file_count": len(manifest)},
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asic-manifest",
        description="Inspect and create OASIS manifest.xml documents",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Parse and validate a manifest")
    check.add_argument(
        "manifest",
        help="Path to manifest.xml, or - for stdin",
    )
    check.add_argument(
        "--expected-mimetype",
        help="Package media type the root entry must declare",
    )
    check.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when validation findings are present",
    )
    check.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    check.set_defaults(func=check_manifest)

    create = subparsers.add_parser("create", help="Write a new manifest")
    create.add_argument(
        "--mimetype",
        help="Package media type for the root entry",
    )
    create.add_argument(
        "--file",
        dest="files",
        action="append",
        default=[],
        type=parse_file_argument,
        metavar="PATH:TYPE[:SIZE]",
        help="File entry to add (repeatable)",
    )
    create.add_argument(
        "-o",
        "--output",
        help="Output file (default: stdout)",
    )
    create.set_defaults(func=create_manifest)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_ERROR

    logger.setLevel(settings.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
