from __future__ import annotations

from ..models.values import CellValue, ValueKind

"""Number and cell formatting for the context document.

Large amounts use Indian-system suffixes:

    |n| >= 10,000,000  ->  n / 10,000,000, 2 decimals, " Cr"
    |n| >= 100,000     ->  n / 100,000,    2 decimals, " L"
    |n| >= 1,000       ->  n / 1,000,      1 decimal,  "K"
    otherwise          ->  n, 0 decimals

Table cells are abbreviated only for NUMBER values strictly above 1,000 in
magnitude; dates and free text are never reinterpreted as numbers.
"""

__all__ = [
    "CRORE",
    "LAKH",
    "THOUSAND",
    "ABBREVIATE_ABOVE",
    "format_amount",
    "format_percent",
    "format_cell",
    "flatten_cell",
]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000
ABBREVIATE_ABOVE = 1_000

EMPTY_CELL = "-"


def format_amount(n: float) -> str:
    """
    >>> format_amount(125000)
    '1.25 L'
    >>> format_amount(35000000)
    '3.50 Cr'
    >>> format_amount(4500)
    '4.5K'
    >>> format_amount(999)
    '999'
    """
    magnitude = abs(n)
    if magnitude >= CRORE:
        return f"{n / CRORE:.2f} Cr"
    if magnitude >= LAKH:
        return f"{n / LAKH:.2f} L"
    if magnitude >= THOUSAND:
        return f"{n / THOUSAND:.1f}K"
    return f"{n:.0f}"


def format_percent(numerator: float, denominator: float) -> str:
    return f"{numerator / denominator * 100:.1f}%"


def flatten_cell(text: str) -> str:
    """Keep one table row per line: no newlines, no column separators."""
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ").replace("|", "/")


def format_cell(value: CellValue | None, *, abbreviate: bool = True) -> str:
    if value is None or value.is_missing:
        return EMPTY_CELL
    if abbreviate and value.kind is ValueKind.NUMBER:
        num = value.as_float()
        if num is not None and abs(num) > ABBREVIATE_ABOVE:
            return format_amount(num)
    return flatten_cell(value.text or "")
