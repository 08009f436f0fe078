"""Receipt line items and the review payload built around them."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class ReceiptLineItem:
    """A single line item recovered from receipt text."""

    name: str
    price: Decimal  # Unit price; 0 means no price was found on the receipt
    quantity: int = 1

    @property
    def needs_price(self) -> bool:
        return self.price == 0

    @property
    def total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity, "price": float(self.price)}


@dataclass(frozen=True)
class SkippedLine:
    """A receipt line the parser dropped, with the rule that dropped it."""

    line: str
    reason: str


@dataclass
class ReceiptWarning:
    """Review warning attached to a nearby item position."""

    message: str
    # Printed after this item; None prints it below the totals
    after_item_index: int | None = None


@dataclass
class ParsedReceipt:
    """Parsed receipt data for one scan."""

    items: list[ReceiptLineItem] = field(default_factory=list)
    total: Decimal | None = None
    lines: list[str] = field(default_factory=list)  # Candidate lines for manual selection
    preselected: list[int] = field(default_factory=list)  # Indexes into lines carrying a price
    skipped: list[SkippedLine] = field(default_factory=list)
    warnings: list[ReceiptWarning] = field(default_factory=list)
    raw_text: str = ""

    @property
    def items_sum(self) -> Decimal:
        return sum((item.total for item in self.items), Decimal("0"))
