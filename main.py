#!/usr/bin/env python3
"""
sigsniff: Entry Point.

Usage:
    python main.py photo.jpg archive.bin        # classify files
    python main.py --stream --json *.dat        # stream mode, JSON output
    cat blob | python main.py -                 # classify stdin
    python main.py --list --category Image      # list known types

Exit codes:
    0  every input was recognised
    1  at least one input had an unknown type
    3  at least one input could not be read (wins over 1)
"""

APP_VERSION = "0.1.0"

import sys
import json
import logging
import argparse
from typing import Optional

from sigsniff import get_default, ALL_CATEGORIES, IMAGE
from sigsniff.imaging import describe_image, has_pillow
from sigsniff.registry import BUILTIN_TYPES

logger = logging.getLogger("sigsniff")

EXIT_OK = 0
EXIT_UNKNOWN = 1
EXIT_UNREADABLE = 3

STDIN_PATH = "-"


def _classify_one(path: str, use_stream: bool):
    sniffer = get_default()
    if path == STDIN_PATH:
        stdin = sys.stdin.buffer
        if use_stream:
            return sniffer.classify_stream(stdin)
        return sniffer.classify(stdin.read(sniffer.prefix_limit))
    if use_stream:
        with open(path, "rb") as f:
            return sniffer.classify_stream(f)
    return sniffer.classify_path(path)


def _result_record(path: str, kind, details) -> dict:
    record = {
        "path": path,
        "media_type": kind.media_type if kind else None,
        "extension": kind.extension if kind else None,
        "category": kind.category if kind else None,
    }
    if details is not None:
        record["image"] = {
            "format": details.format,
            "width": details.width,
            "height": details.height,
            "mode": details.mode,
            "frames": details.frames,
        }
    return record


def _print_line(record: dict):
    if record["media_type"] is None:
        print(f"{record['path']}: unknown")
        return
    line = (f"{record['path']}: {record['media_type']} "
            f".{record['extension']} [{record['category']}]")
    image = record.get("image")
    if image:
        line += f"  {image['format']} {image['width']}x{image['height']} {image['mode']}"
    print(line)


def classify_paths(paths: list[str], use_stream: bool = False,
                   as_json: bool = False, details: bool = False) -> int:
    status = EXIT_OK
    records = []

    if details and not has_pillow():
        logger.warning("--details needs Pillow; image details skipped")

    for path in paths:
        try:
            kind = _classify_one(path, use_stream)
        except OSError as e:
            logger.error("Cannot read %s: %s", path, e)
            status = EXIT_UNREADABLE
            continue

        if kind is None and status == EXIT_OK:
            status = EXIT_UNKNOWN

        image_details = None
        if details and kind is not None and kind.category == IMAGE and path != STDIN_PATH:
            image_details = describe_image(path)

        record = _result_record(path, kind, image_details)
        if as_json:
            records.append(record)
        else:
            _print_line(record)

    if as_json:
        print(json.dumps(records, indent=2))
    return status


def list_types(category: Optional[str] = None, as_json: bool = False) -> int:
    kinds = [k for k in BUILTIN_TYPES if category is None or k.category == category]
    if as_json:
        print(json.dumps([
            {"extension": k.extension, "media_type": k.media_type,
             "category": k.category, "stream": k.supports_stream}
            for k in kinds
        ], indent=2))
        return EXIT_OK

    print(f"  {'Ext':8s} {'Category':12s} {'Stream':6s}  Media type")
    print(f"  {'-'*8} {'-'*12} {'-'*6}  {'-'*10}")
    for k in kinds:
        stream = "yes" if k.supports_stream else "-"
        print(f"  {k.extension:8s} {k.category:12s} {stream:6s}  {k.media_type}")
    print(f"\n  Total: {len(kinds)} type(s)")
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Identify file types from their magic numbers.")
    parser.add_argument("paths", nargs="*", metavar="PATH",
                        help="Files to classify ('-' for stdin)")
    parser.add_argument("-s", "--stream", action="store_true",
                        help="Sniff from an open stream instead of a prefix buffer")
    parser.add_argument("--json", action="store_true", help="JSON output")
    parser.add_argument("--details", action="store_true",
                        help="Add image format and dimensions (needs Pillow)")
    parser.add_argument("--list", action="store_true", help="List known types")
    parser.add_argument("--category", choices=ALL_CATEGORIES,
                        help="Restrict --list to one category")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {APP_VERSION}")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.list:
        return list_types(args.category, args.json)
    if not args.paths:
        parser.error("at least one PATH is required (or use --list)")

    return classify_paths(args.paths, args.stream, args.json, args.details)


if __name__ == "__main__":
    sys.exit(main())
