import pytest
from shelflife.receipt.text_parser import (
    filter_receipt_lines,
    is_ignored_line,
    preselect_priced_lines,
    rejection_reason,
    split_receipt_lines,
)


def test_split_receipt_lines_trims_and_drops_blanks() -> None:
    assert split_receipt_lines("  Milk £1.50 \r\n\r\n\tBread\n   \n") == ["Milk £1.50", "Bread"]
    assert split_receipt_lines("") == []


@pytest.mark.parametrize(
    ("line", "reason"),
    [
        ("TOTAL £45.00", "financial_summary"),
        ("Subtotal: £12.00", "financial_summary"),
        ("Sub-Total 12.00", "financial_summary"),
        ("VISA £45.00", "financial_summary"),
        ("Change Due £0.00", "financial_summary"),
        ("Card Payment 12.00", "financial_summary"),
        ("Total Due £12.00", "financial_summary"),
        ("Total to pay: £12.00", "financial_summary"),
        ("VAT £2.00", "financial_summary"),
        ("Balance -£3.00", "financial_summary"),
        ("Contactless", "boilerplate"),
        ("Chip & PIN verified", "boilerplate"),
        ("THANK YOU", "boilerplate"),
        ("Customer Copy", "boilerplate"),
        ("Service Charge £2.00", "boilerplate"),
        ("www.example.co.uk", "contact_metadata"),
        ("Visit us at tesco.com", "contact_metadata"),
        ("Tel: 0123 456789", "contact_metadata"),
        ("Store 2041", "contact_metadata"),
        ("Cashier: Sam", "operational_metadata"),
        ("Ref: 88231", "operational_metadata"),
        ("Order #1234", "operational_metadata"),
        ("Auth Code 123456", "operational_metadata"),
        ("01/02/2024", "date_time"),
        ("14:32", "date_time"),
        ("2024-02-01", "date_time"),
        ("5012345678900", "code_only"),
        ("(0123) 456-789", "code_only"),
        ("FRESH PRODUCE", "uppercase_header"),
        ("*****", "decoration"),
        ("=-=-=-", "decoration"),
        ("Description", "column_header"),
        ("Quantity", "column_header"),
        ("Opening Balance", "column_header"),
        ("ab", "too_short"),
    ],
)
def test_rejection_reason(line: str, reason: str) -> None:
    assert rejection_reason(line) == reason
    assert is_ignored_line(line)


@pytest.mark.parametrize(
    "line",
    [
        "Refried Beans £1.20",
        "Tipo 00 Flour £1.80",
        "Cashew Nuts £2.00",
        "Tillamook Cheddar £4.00",
        "Total Greek Yoghurt",
        "Total Greek Yoghurt £1.50",
        "Card Birthday Mum £2.50",
        "Cash Crunch Cereal 2.50",
        "Change Bag 0.10",
        "Tax Free Gift Card £10.00",
        "Carrots",
        "£1.20",
        "2 x Milk £1.50",
    ],
)
def test_item_lines_are_not_rejected(line: str) -> None:
    assert rejection_reason(line) is None


def test_filter_keeps_words_and_prices_only() -> None:
    lines = [
        "TESCO STORES",
        "2 x Milk £1.50",
        "Bread",
        "£1.20",
        "12",
        "x1",
        "a1b2c",
        "TOTAL £3.00",
        "--- ---",
    ]

    assert filter_receipt_lines(lines) == ["2 x Milk £1.50", "Bread", "£1.20"]


def test_preselect_marks_priced_lines() -> None:
    assert preselect_priced_lines(["2 x Milk £1.50", "Bread", "£1.20"]) == [0, 2]
    assert preselect_priced_lines([]) == []
