"""Command-line driver: generate previews for every file under a directory.

Loads the directory into an in-memory document store (relative POSIX
path -> ``{"contents": bytes}``), runs the preview transform over it and
prints one JSON line per previewed document.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Settings
from .exceptions import PreviewError
from .logging_config import setup_logging
from .plugin import preview

logger = logging.getLogger(__name__)


def load_documents(source: Path) -> Dict[str, Dict[str, Any]]:
    """Read every regular file below ``source`` into a document store."""
    files: Dict[str, Dict[str, Any]] = {}
    for path in sorted(source.rglob("*")):
        if path.is_file():
            files[path.relative_to(source).as_posix()] = {"contents": path.read_bytes()}
    logger.info("Loaded %d document(s) from %s", len(files), source)
    return files


def build_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate parsed arguments into plugin options; unset flags keep defaults."""
    options: Dict[str, Any] = {
        "key": args.key,
        "ignoreExistingKey": args.ignore_existing_key,
        "trim": args.trim,
    }
    if args.pattern:
        options["pattern"] = args.pattern
    if args.continue_indicator is not None:
        options["continueIndicator"] = args.continue_indicator
    if args.words is not None:
        options["words"] = args.words
    if args.characters is not None:
        options["characters"] = args.characters
    marker = {}
    if args.marker_start is not None:
        marker["start"] = args.marker_start
    if args.marker_end is not None:
        marker["end"] = args.marker_end
    if marker:
        options["marker"] = marker
    return options


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-preview",
        description="Attach short content previews to a directory of documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s site/ --pattern "**/*.md" --words 40
  %(prog)s site/ --characters 120 --trim
  %(prog)s site/ --write-contents
        """,
    )
    parser.add_argument("source", type=Path, help="Directory holding the documents")
    parser.add_argument(
        "--pattern",
        action="append",
        default=[],
        help="Glob selecting documents (repeatable, prefix with ! to exclude; default: all)",
    )
    parser.add_argument("--key", default="preview", help="Metadata key for the preview")
    parser.add_argument("--words", type=int, default=None, help="Word limit")
    parser.add_argument("--characters", type=int, default=None, help="Character limit")
    parser.add_argument("--marker-start", default=None, help="Marker opening the preview")
    parser.add_argument("--marker-end", default=None, help="Marker closing the preview")
    parser.add_argument(
        "--continue-indicator",
        default=None,
        help="Suffix appended to every preview (default: ...)",
    )
    parser.add_argument("--trim", action="store_true", help="Trim whitespace around the preview")
    parser.add_argument(
        "--ignore-existing-key",
        action="store_true",
        help="Overwrite previews that already exist",
    )
    parser.add_argument(
        "--write-contents",
        action="store_true",
        help="Write bodies changed by marker removal back to disk",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = _parser().parse_args(argv)

    settings = Settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    if not args.source.is_dir():
        logger.error("Source is not a directory: %s", args.source)
        return 1

    files = load_documents(args.source)
    originals = {path: data["contents"] for path, data in files.items()}

    try:
        preview(build_options(args))(files, None, lambda err: None)
    except PreviewError as exc:
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1

    for path, data in files.items():
        if args.key in data:
            print(json.dumps({"path": path, args.key: data[args.key]}))
        if args.write_contents and data["contents"] != originals[path]:
            (args.source / path).write_bytes(data["contents"])
            logger.info("Rewrote %s", path, extra={"path": path})

    return 0


if __name__ == "__main__":
    sys.exit(main())
