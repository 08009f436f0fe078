"""Core domain models for the shelflife project.

This module provides the data models shared by the parser, the review
workflow and the outer surfaces (CLI, HTTP server):
- ReceiptLineItem: a single extracted receipt line item
- ParsedReceipt: everything recovered from one OCR scan

Usage:
    from shelflife.domain import ParsedReceipt, ReceiptLineItem
"""

from shelflife.domain.receipt import ParsedReceipt, ReceiptLineItem, ReceiptWarning, SkippedLine

__all__ = [
    "ParsedReceipt",
    "ReceiptLineItem",
    "ReceiptWarning",
    "SkippedLine",
]
