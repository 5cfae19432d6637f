"""Product reference normalization.

The Admin API only accepts global ids (gid://shopify/Product/123). Theme
forms post whatever the Liquid template had at hand, usually the bare
numeric id, so anything that is not already a gid is parsed as a number
and embedded.
"""

import math
from typing import Any


def product_gid_prefix(namespace: str = "shopify") -> str:
    return f"gid://{namespace}/Product/"


def _parse_number(value: Any) -> int | float | None:
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    # No digit grouping: "1_000" is not a product id
    if "_" in text:
        return None
    # Digit strings stay exact; product ids outgrow float precision
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def to_product_gid(value: Any, namespace: str = "shopify") -> str | None:
    if value is None or isinstance(value, bool):
        return None

    prefix = product_gid_prefix(namespace)
    if str(value).startswith(prefix):
        return str(value)

    n = _parse_number(value)
    if n is None or n <= 0:
        return None
    # Integers beyond float range count as infinite
    try:
        if not math.isfinite(n):
            return None
    except OverflowError:
        return None

    # Integral floats lose their ".0"; fractional ones go through unrounded
    if isinstance(n, float) and n.is_integer():
        n = int(n)
    return f"{prefix}{n}"
