"""Receipt line classification: boilerplate rejection and candidate line filtering."""

import re

from .patterns import HAS_WORD, ReceiptPatterns, default_receipt_patterns

MIN_LINE_LENGTH = 3

_LINE_BREAK = re.compile(r"\r?\n")


def split_receipt_lines(text: str) -> list[str]:
    """Split raw OCR text into trimmed, non-empty lines."""
    if not text:
        return []
    return [line.strip() for line in _LINE_BREAK.split(text) if line.strip()]


def rejection_reason(line: str, patterns: ReceiptPatterns | None = None) -> str | None:
    """
    Return why a line can never be an item line, or None if it might be one.

    Reasons are the rule names from the pattern table (``financial_summary``,
    ``date_time``, ``uppercase_header`` ...) plus ``too_short``.
    """
    if patterns is None:
        patterns = default_receipt_patterns()
    reason = patterns.ignore_reason(line)
    if reason is not None:
        return reason
    if len(line) < MIN_LINE_LENGTH:
        return "too_short"
    return None


def is_ignored_line(line: str, patterns: ReceiptPatterns | None = None) -> bool:
    """Return True if the line matches any boilerplate rejection rule."""
    return rejection_reason(line, patterns) is not None


def filter_receipt_lines(lines: list[str], patterns: ReceiptPatterns | None = None) -> list[str]:
    """
    Keep the lines worth offering in a manual line-selection checklist.

    A line survives when no rejection rule matches and it carries either a
    word (two or more consecutive letters) or a price.

    Args:
        lines: Trimmed receipt lines, in receipt order
        patterns: Pattern table; defaults to £/€/$ with a dot separator

    Returns:
        The surviving lines in their original order
    """
    if patterns is None:
        patterns = default_receipt_patterns()
    kept: list[str] = []
    for line in lines:
        if rejection_reason(line, patterns) is not None:
            continue
        if HAS_WORD.search(line) or patterns.has_price(line):
            kept.append(line)
    return kept


def preselect_priced_lines(lines: list[str], patterns: ReceiptPatterns | None = None) -> list[int]:
    """Return indexes of lines carrying a price; these start out ticked for review."""
    if patterns is None:
        patterns = default_receipt_patterns()
    return [i for i, line in enumerate(lines) if patterns.has_price(line)]
