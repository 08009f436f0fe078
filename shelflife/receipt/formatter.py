"""Format parsed receipt data for review output."""

from decimal import Decimal
from typing import Any

from shelflife.domain.receipt import ParsedReceipt, ReceiptLineItem, ReceiptWarning


def format_item_label(item: ReceiptLineItem, currency_symbol: str = "£") -> str:
    """Checklist label, e.g. "2 × Milk - £1.50"; unpriced items omit the amount."""
    if item.price > 0:
        return f"{item.quantity} × {item.name} - {currency_symbol}{item.price:.2f}"
    return f"{item.quantity} × {item.name}"


def _warning_lines(warnings: list[ReceiptWarning], after_index: int | None) -> list[str]:
    return [f"  ! {w.message}" for w in warnings if w.after_item_index == after_index]


def format_parsed_receipt(parsed: ParsedReceipt, currency_symbol: str = "£") -> str:
    """
    Render a plain-text review block for a parsed receipt.

    Warnings are printed right after the item they are anchored to;
    unanchored warnings go at the end.
    """
    lines: list[str] = []
    lines.append("=" * 60)
    lines.append("PARSED RECEIPT")
    lines.append("=" * 60)

    if parsed.items:
        lines.append(f"Items ({len(parsed.items)}):")
        for i, item in enumerate(parsed.items):
            suffix = "  [needs price]" if item.needs_price else ""
            lines.append(f"  {i + 1}. {format_item_label(item, currency_symbol)}{suffix}")
            lines.extend(_warning_lines(parsed.warnings, i))
    else:
        lines.append("No items detected; select lines manually:")
        preselected = set(parsed.preselected)
        for i, line in enumerate(parsed.lines):
            mark = "x" if i in preselected else " "
            lines.append(f"  [{mark}] {i}: {line}")

    lines.append("-" * 60)
    lines.append(f"Items sum: {currency_symbol}{parsed.items_sum:.2f}")
    if parsed.total is not None:
        lines.append(f"Detected total: {currency_symbol}{parsed.total:.2f}")
    else:
        lines.append("Detected total: not found")
    lines.extend(_warning_lines(parsed.warnings, None))
    lines.append("=" * 60)
    return "\n".join(lines)


def _amount(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def parsed_receipt_to_dict(parsed: ParsedReceipt) -> dict[str, Any]:
    """JSON-ready view of a parsed receipt."""
    return {
        "items": [item.to_dict() for item in parsed.items],
        "total": _amount(parsed.total),
        "items_sum": float(parsed.items_sum),
        "lines": list(parsed.lines),
        "preselected": list(parsed.preselected),
        "skipped": [{"line": s.line, "reason": s.reason} for s in parsed.skipped],
        "warnings": [{"message": w.message, "after_item_index": w.after_item_index} for w in parsed.warnings],
    }
