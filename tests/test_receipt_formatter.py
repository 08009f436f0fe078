from decimal import Decimal

from shelflife.domain.receipt import ParsedReceipt, ReceiptLineItem, ReceiptWarning, SkippedLine
from shelflife.receipt.formatter import format_item_label, format_parsed_receipt, parsed_receipt_to_dict


def test_format_item_label() -> None:
    assert format_item_label(ReceiptLineItem(name="Milk", price=Decimal("1.5"), quantity=2)) == "2 × Milk - £1.50"
    assert format_item_label(ReceiptLineItem(name="Brot", price=Decimal("1.2")), "€") == "1 × Brot - €1.20"
    assert format_item_label(ReceiptLineItem(name="Bananas", price=Decimal("0"))) == "1 × Bananas"


def test_warnings_follow_their_anchor_item() -> None:
    parsed = ParsedReceipt(
        items=[
            ReceiptLineItem(name="Milk", price=Decimal("1.50")),
            ReceiptLineItem(name="Bread", price=Decimal("1.20")),
        ],
        total=Decimal("5.00"),
        warnings=[ReceiptWarning(message="check this", after_item_index=0), ReceiptWarning(message="overall")],
    )

    lines = format_parsed_receipt(parsed).splitlines()

    assert lines.index("  ! check this") == lines.index("  1. 1 × Milk - £1.50") + 1
    assert "Items sum: £2.70" in lines
    assert "Detected total: £5.00" in lines
    assert lines[-2] == "  ! overall"


def test_empty_receipt_shows_checklist() -> None:
    parsed = ParsedReceipt(lines=["12 Something", "£4.00"], preselected=[1])

    out = format_parsed_receipt(parsed)

    assert "[ ] 0: 12 Something" in out
    assert "[x] 1: £4.00" in out
    assert "Detected total: not found" in out


def test_parsed_receipt_to_dict() -> None:
    parsed = ParsedReceipt(
        items=[ReceiptLineItem(name="Milk", price=Decimal("1.50"), quantity=2)],
        total=None,
        skipped=[SkippedLine(line="TOTAL £3.00", reason="financial_summary")],
    )

    assert parsed_receipt_to_dict(parsed) == {
        "items": [{"name": "Milk", "quantity": 2, "price": 1.5}],
        "total": None,
        "items_sum": 3.0,
        "lines": [],
        "preselected": [],
        "skipped": [{"line": "TOTAL £3.00", "reason": "financial_summary"}],
        "warnings": [],
    }
