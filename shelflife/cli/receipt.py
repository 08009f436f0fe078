"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path

from shelflife.application.receipts.scan import ReceiptScanRequest, ReceiptScanResult, run_receipt_scan
from shelflife.domain.receipt import ParsedReceipt
from shelflife.receipt.formatter import format_parsed_receipt, parsed_receipt_to_dict
from shelflife.receipt.receipt_text_parser import parse_receipt
from shelflife.runtime import get_logger, load_receipt_parser_settings

logger = get_logger(__name__)


def _print_parsed(parsed: ParsedReceipt, as_json: bool) -> None:
    if as_json:
        print(json.dumps(parsed_receipt_to_dict(parsed), indent=2, ensure_ascii=False))
        return
    print(format_parsed_receipt(parsed, currency_symbol=load_receipt_parser_settings().display_currency))


def _parse_source(text_file: str) -> ReceiptScanResult:
    if text_file == "-":
        text = sys.stdin.read()
        if not text.strip():
            return ReceiptScanResult(status="no_text", error="No OCR text on stdin.")
        return ReceiptScanResult(status="parsed", parsed=parse_receipt(text, load_receipt_parser_settings()))
    return run_receipt_scan(ReceiptScanRequest(source_path=Path(text_file)))


def _report_failure(result: ReceiptScanResult) -> int:
    logger.error("%s", result.error)
    if result.status == "ocr_unavailable":
        print(f"OCR service unavailable: {result.error}")
        print("Make sure the OCR service is running before scanning receipts.")
    else:
        print(f"Error: {result.error}")
    return 1


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse an OCR text file (or stdin) and print the items for review."""
    result = _parse_source(args.text_file)
    if result.status != "parsed" or result.parsed is None:
        return _report_failure(result)
    _print_parsed(result.parsed, args.json)
    return 0


def cmd_lines(args: argparse.Namespace) -> int:
    """Print the manual line-selection checklist; priced lines start ticked."""
    result = _parse_source(args.text_file)
    if result.status != "parsed" or result.parsed is None:
        return _report_failure(result)

    parsed = result.parsed
    preselected = set(parsed.preselected)
    for i, line in enumerate(parsed.lines):
        mark = "x" if i in preselected else " "
        print(f"[{mark}] {i}: {line}")
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    """Send a receipt image to the OCR service and print the parsed items."""
    result = run_receipt_scan(ReceiptScanRequest(source_path=Path(args.image), ocr_url=args.ocr_url))
    if result.status != "parsed" or result.parsed is None:
        return _report_failure(result)
    _print_parsed(result.parsed, args.json)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI receipt parser server."""
    import uvicorn

    from shelflife.runtime import receipt_server as server

    print(f"Starting receipt parser on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/parse-text | /filter-lines | /parse-selected")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
    return 0
