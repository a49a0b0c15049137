"""Market-cap label parsing ("1.2B", "500M") for numeric sorting."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

_MARKET_CAP_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)([BM])")

_UNIT_SCALE = {
    "B": Decimal(1_000_000_000),
    "M": Decimal(1_000_000),
}


def parse_market_cap(label: str | None) -> int:
    """Return the market cap in units, or 0 if the label is not ``<number><B|M>``.

    The whole label must match; unit letters are case-sensitive. Unparseable
    labels sort as smallest.
    """
    if not label:
        return 0
    match = _MARKET_CAP_RE.fullmatch(label)
    if match is None:
        return 0
    try:
        value = Decimal(match.group(1))
    except InvalidOperation:
        return 0
    return int(value * _UNIT_SCALE[match.group(2)])
