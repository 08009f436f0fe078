"""Advisory checks run before parsed items are committed to the pantry."""

from dataclasses import dataclass
from decimal import Decimal

from shelflife.domain.receipt import ReceiptLineItem, ReceiptWarning

DEFAULT_ABSOLUTE_TOLERANCE = Decimal("0.01")
DEFAULT_RELATIVE_TOLERANCE = Decimal("0.02")
DEFAULT_HIGH_QUANTITY_THRESHOLD = 20


@dataclass(frozen=True)
class TotalReconciliation:
    """Sum of item lines compared with the total printed on the receipt."""

    items_sum: Decimal
    detected_total: Decimal
    tolerance: Decimal

    @property
    def difference(self) -> Decimal:
        return abs(self.items_sum - self.detected_total)

    @property
    def matches(self) -> bool:
        return self.difference <= self.tolerance


def reconcile_total(
    items: list[ReceiptLineItem],
    detected_total: Decimal | None,
    absolute_tolerance: Decimal = DEFAULT_ABSOLUTE_TOLERANCE,
    relative_tolerance: Decimal = DEFAULT_RELATIVE_TOLERANCE,
) -> TotalReconciliation | None:
    """
    Compare sum(price * quantity) against the detected total.

    Returns None when there is nothing to compare: no total was found, or
    every item still needs a price. Tolerance is the larger of the absolute
    tolerance and the relative share of the total (1p or 2% by default).
    """
    if detected_total is None:
        return None
    items_sum = sum((item.total for item in items), Decimal("0"))
    if items_sum <= 0:
        return None
    tolerance = max(absolute_tolerance, detected_total * relative_tolerance)
    return TotalReconciliation(items_sum=items_sum, detected_total=detected_total, tolerance=tolerance)


def review_warnings(
    items: list[ReceiptLineItem],
    reconciliation: TotalReconciliation | None,
    currency_symbol: str = "£",
    high_quantity_threshold: int = DEFAULT_HIGH_QUANTITY_THRESHOLD,
) -> list[ReceiptWarning]:
    """Collect review hints: implausible quantities and a total mismatch."""
    warnings: list[ReceiptWarning] = []
    for i, item in enumerate(items):
        if item.quantity > high_quantity_threshold:
            warnings.append(
                ReceiptWarning(
                    message=f'quantity {item.quantity} for "{item.name}" looks high; check for a misread code',
                    after_item_index=i,
                )
            )

    if reconciliation is not None and not reconciliation.matches:
        warnings.append(
            ReceiptWarning(
                message=(
                    f"sum of items ({currency_symbol}{reconciliation.items_sum:.2f}) does not match "
                    f"the detected total ({currency_symbol}{reconciliation.detected_total:.2f}); "
                    "this could be due to discounts, taxes, or missed items"
                ),
                after_item_index=(len(items) - 1) if items else None,
            )
        )
    return warnings
