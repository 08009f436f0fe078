"""FastAPI server that turns receipt OCR text into line items."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shelflife.receipt.formatter import parsed_receipt_to_dict
from shelflife.receipt.receipt_text_parser import parse_receipt
from shelflife.receipt.selection import parse_selected_lines
from shelflife.receipt.text_parser import filter_receipt_lines, preselect_priced_lines
from shelflife.runtime import get_logger, load_receipt_parser_settings

logger = get_logger(__name__)

app = FastAPI(title="ShelfLife Receipt Parser")


def _error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


async def _json_body(request: Request) -> dict[str, Any] | None:
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _string_list(value: Any) -> list[str] | None:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return None
    return [v.strip() for v in value if v.strip()]


@app.post("/parse-text")
async def parse_text(request: Request) -> JSONResponse:
    """Parse raw OCR text: items, detected total, checklist lines, warnings."""
    body = await _json_body(request)
    if body is None or not isinstance(body.get("text"), str):
        return _error('Expected JSON body {"text": "..."}')

    parsed = parse_receipt(body["text"], load_receipt_parser_settings())
    logger.info("Parsed %d items (%d candidate lines)", len(parsed.items), len(parsed.lines))
    return JSONResponse({"status": "success", **parsed_receipt_to_dict(parsed)})


@app.post("/filter-lines")
async def filter_lines(request: Request) -> JSONResponse:
    """Filter OCR lines down to the manual selection checklist."""
    body = await _json_body(request)
    lines = _string_list(body.get("lines")) if body is not None else None
    if lines is None:
        return _error('Expected JSON body {"lines": ["..."]}')

    patterns = load_receipt_parser_settings().build_patterns()
    kept = filter_receipt_lines(lines, patterns)
    return JSONResponse(
        {
            "status": "success",
            "lines": kept,
            "preselected": preselect_priced_lines(kept, patterns),
        }
    )


@app.post("/parse-selected")
async def parse_selected(request: Request) -> JSONResponse:
    """Parse user-selected checklist lines into items."""
    body = await _json_body(request)
    lines = _string_list(body.get("lines")) if body is not None else None
    if lines is None:
        return _error('Expected JSON body {"lines": ["..."]}')
    if not lines:
        return _error("No lines selected")

    items = parse_selected_lines(lines, load_receipt_parser_settings().build_patterns())
    return JSONResponse({"status": "success", "items": [item.to_dict() for item in items]})


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
