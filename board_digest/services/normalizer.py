from __future__ import annotations

import math
import re

from ..config.loader import PipelineConfig
from ..models.values import MISSING, CellValue

"""Cell value normalization.

Rules, evaluated in order:
1. None / empty / error sentinel (``#VALUE!``)  -> MISSING
2. trimmed text empty                           -> MISSING
3. column title mentions a date keyword         -> parse_date
4. column title mentions a numeric keyword      -> parse_number
5. otherwise                                    -> TEXT (trimmed)

Numeric dates are read day-first (DD/MM/YYYY) only. Month-first input such as
``12/31/2024`` therefore yields month 31; it is not re-guessed by magnitude.
"""

__all__ = [
    "normalize_value",
    "parse_date",
    "parse_number",
    "canonical_number",
]

_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}", re.ASCII)
_DAY_FIRST = re.compile(r"^(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})$", re.ASCII)
# plain decimal or exponent notation; no underscores, no non-ASCII digits
_PLAIN_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
_NUMERIC_NOISE = re.compile(r"[₹$€£¥,\s]")

_DEFAULT_CONFIG = PipelineConfig()


def parse_date(text: str) -> CellValue:
    if _ISO_PREFIX.match(text):
        return CellValue.of_date(text[:10])
    m = _DAY_FIRST.match(text)
    if m:
        day, month, year = m.groups()
        return CellValue.of_date(f"{year}-{month.zfill(2)}-{day.zfill(2)}")
    return CellValue.of_text(text)


def canonical_number(num: float) -> str:
    """Shortest decimal form: ``125000.0`` -> ``"125000"``, ``1.5`` -> ``"1.5"``."""
    if num.is_integer() and abs(num) < 1e21:
        return str(int(num))
    return repr(num)


def parse_number(text: str) -> CellValue:
    cleaned = _NUMERIC_NOISE.sub("", text)
    if not _PLAIN_NUMBER.match(cleaned):
        return CellValue.of_text(text)
    num = float(cleaned)
    if not math.isfinite(num):
        return CellValue.of_text(text)
    return CellValue.of_number(canonical_number(num))


def normalize_value(raw_text: str | None, column_title: str, config: PipelineConfig | None = None) -> CellValue:
    """Normalize one raw cell given its column title. Never raises on bad data."""
    cfg = config or _DEFAULT_CONFIG
    if raw_text is None or raw_text == "":
        return MISSING
    text = raw_text.strip()
    if text == "" or text.upper() in cfg.null_sentinels:
        return MISSING

    lower = column_title.lower()
    if any(k in lower for k in cfg.date_keywords):
        return parse_date(text)
    if any(k in lower for k in cfg.numeric_keywords):
        return parse_number(text)
    return CellValue.of_text(text)
