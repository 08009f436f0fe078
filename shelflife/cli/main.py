#!/usr/bin/env python3

import argparse
import os
from collections.abc import Sequence

from shelflife.cli import receipt as receipt_commands

DEFAULT_OCR_URL = "http://localhost:3000"


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="shelflife",
        description="Receipt OCR text to pantry line items",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <text-file|->        Parse OCR text into line items
  lines <text-file|->        Show the manual line-selection checklist
  scan <image>               OCR a receipt image, then parse it
  serve [--host] [--port]    Start the receipt parser HTTP server

Notes:
  Items with no price are kept with price 0 and flagged [needs price].
  A detected total that does not match the items sum is a warning only.
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse OCR text into line items")
    parse_parser.add_argument("text_file", help="Path to OCR text file, or - for stdin")
    parse_parser.add_argument("--json", action="store_true", help="Print JSON instead of a review block")

    lines_parser = subparsers.add_parser("lines", help="Show the manual line-selection checklist")
    lines_parser.add_argument("text_file", help="Path to OCR text file, or - for stdin")

    scan_parser = subparsers.add_parser("scan", help="OCR a receipt image, then parse it")
    scan_parser.add_argument("image", help="Path to receipt image")
    scan_parser.add_argument(
        "--ocr-url",
        default=os.environ.get("OCR_SERVICE_URL", DEFAULT_OCR_URL),
        help=f"OCR service URL (default: $OCR_SERVICE_URL or {DEFAULT_OCR_URL})",
    )
    scan_parser.add_argument("--json", action="store_true", help="Print JSON instead of a review block")

    serve_parser = subparsers.add_parser("serve", help="Start the receipt parser HTTP server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        return receipt_commands.cmd_parse(args)
    if args.command == "lines":
        return receipt_commands.cmd_lines(args)
    if args.command == "scan":
        return receipt_commands.cmd_scan(args)
    if args.command == "serve":
        return receipt_commands.cmd_serve(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
