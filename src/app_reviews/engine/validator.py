"""Submission validation.

Checks run in a fixed order and stop at the first failure:
1. shop present
2. product reference normalizes to a gid
3. rating is a whole number in 1..5

Free-text fields are passed through as-is; length and content rules belong
to the metaobject definition on the store.
"""

import math
from typing import Any

from ..logging import logger
from ..schemas.outcome import Failure, FailureReason
from ..schemas.submission import Submission, ValidatedReview
from .identifiers import to_product_gid

MIN_RATING = 1
MAX_RATING = 5


def parse_rating(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    text = value if isinstance(value, (int, float)) else str(value).strip()
    if isinstance(text, str) and "_" in text:
        return None
    try:
        n = float(text)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(n) or not n.is_integer():
        return None
    rating = int(n)
    if rating < MIN_RATING or rating > MAX_RATING:
        return None
    return rating


def validate_submission(
    submission: Submission, namespace: str = "shopify"
) -> ValidatedReview | Failure:
    if not submission.shop.strip():
        logger.info("Submission rejected: missing shop")
        return Failure(reason=FailureReason.MISSING_TENANT)

    product_gid = to_product_gid(submission.product_ref, namespace)
    if product_gid is None:
        logger.info(
            f"Submission rejected: shop={submission.shop} "
            f"invalid product reference {submission.product_ref!r}"
        )
        return Failure(
            reason=FailureReason.INVALID_PRODUCT_REFERENCE,
            detail=f"product_ref={submission.product_ref!r}",
        )

    rating = parse_rating(submission.rating)
    if rating is None:
        logger.info(
            f"Submission rejected: shop={submission.shop} invalid rating {submission.rating!r}"
        )
        return Failure(reason=FailureReason.INVALID_RATING, detail=f"rating={submission.rating!r}")

    return ValidatedReview(
        shop=submission.shop.strip(),
        product_gid=product_gid,
        rating=rating,
        title=submission.title,
        body=submission.body,
        author=submission.author,
        email=submission.email,
    )
