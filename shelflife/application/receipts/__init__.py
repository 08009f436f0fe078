"""Receipt workflows."""

from shelflife.application.receipts.review import (
    ManualSelectionRequest,
    ReviewConfirmationRequest,
    run_manual_selection,
    run_review_confirmation,
)
from shelflife.application.receipts.scan import ReceiptScanRequest, run_receipt_scan

__all__ = [
    "ManualSelectionRequest",
    "ReceiptScanRequest",
    "ReviewConfirmationRequest",
    "run_manual_selection",
    "run_receipt_scan",
    "run_review_confirmation",
]
