"""App proxy signature dependency.

Storefront requests reach us through the platform's app proxy, which adds a
`signature` query parameter: hex HMAC-SHA256, keyed with the app's API
secret, over the other query parameters sorted by name and rendered as
`name=value` (repeated names joined with commas) with no separator.

Verification is enabled with APP_REVIEWS_VERIFY_PROXY_SIGNATURE. Rejected
requests receive a 401 with a structured error body.
"""

import hashlib
import hmac
from collections.abc import Iterable

from fastapi import HTTPException, Request

from .config import settings
from .logging import logger

SIGNATURE_PARAM = "signature"


def proxy_signature(params: Iterable[tuple[str, str]], secret: str) -> str:
    grouped: dict[str, list[str]] = {}
    for key, value in params:
        if key == SIGNATURE_PARAM:
            continue
        grouped.setdefault(key, []).append(value)
    message = "".join(f"{key}={','.join(values)}" for key, values in sorted(grouped.items()))
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def is_valid_proxy_request(params: Iterable[tuple[str, str]], secret: str) -> bool:
    params = list(params)
    provided = next((v for k, v in params if k == SIGNATURE_PARAM), "")
    if not provided or not secret:
        return False
    return hmac.compare_digest(proxy_signature(params, secret), provided)


async def verify_proxy_signature(request: Request) -> None:
    if not settings.verify_proxy_signature:
        return
    if not is_valid_proxy_request(request.query_params.multi_items(), settings.api_secret):
        logger.warning(f"Rejected unsigned or mis-signed proxy request to {request.url.path}")
        raise HTTPException(
            status_code=401,
            detail={"code": "INVALID_SIGNATURE", "message": "Invalid or missing proxy signature"},
        )
