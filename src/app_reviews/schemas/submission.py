"""
Schemas for inbound review submissions.

The storefront form arrives as a loose field bag (form post, JSON body or
query string, depending on how the theme submits it). `Submission` is the
one place where that bag is turned into typed fields; everything past the
boundary works on `Submission` and `ValidatedReview`.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

SHOP_DOMAIN_HEADER = "x-shopify-shop-domain"


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _scalar(value: Any) -> str | int | float | None:
    # JSON bodies may carry real numbers; booleans are not numbers here
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return _first(_text(value))


class Submission(BaseModel):
    shop: str = ""
    product_ref: str | int | float | None = None
    rating: str | int | float | None = None
    title: str = ""
    body: str = ""
    author: str = ""
    email: str = ""
    return_to: str = "/"

    @classmethod
    def from_request_fields(
        cls,
        fields: Mapping[str, Any],
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, Any] | None = None,
    ) -> "Submission":
        """Map the raw proxy request onto a Submission.

        The shop comes from the signed query string first, then the shop
        domain header, then the body. Review fields come from the body and
        fall back to the query string.
        """
        query = query or {}
        headers = headers or {}

        def pick(*keys: str) -> Any:
            return _first(*(fields.get(k) for k in keys), *(query.get(k) for k in keys))

        shop = _first(query.get("shop"), headers.get(SHOP_DOMAIN_HEADER), fields.get("shop"))
        product_ref = pick("product_id", "productId")
        rating = pick("rating")

        return cls(
            shop=_text(shop).strip(),
            product_ref=_scalar(product_ref),
            rating=_scalar(rating),
            title=_text(pick("title")),
            body=_text(pick("body")),
            author=_text(pick("author")),
            email=_text(pick("email")),
            return_to=_text(pick("return_to")) or "/",
        )


class ValidatedReview(BaseModel):
    shop: str
    product_gid: str
    rating: int
    title: str = ""
    body: str = ""
    author: str = ""
    email: str = ""
