"""Admin API response classification.

A metaobjectCreate response ends up in exactly one bucket:
- body is not JSON                       -> REMOTE_UNPARSEABLE
- userErrors is a nonempty list          -> REMOTE_VALIDATION_ERROR
- metaobject.id present                  -> Success
- anything else (top-level GraphQL errors, auth error bodies, missing
  payload)                               -> REMOTE_UNPARSEABLE

userErrors are logged field by field for the operator; the shopper only
sees the generic message picked by the reporter.
"""

import json
from typing import Any

from ..config import settings
from ..logging import logger, truncate
from ..schemas.admin_api import GraphQLRequest, RemoteResponse
from ..schemas.credential import Credential
from ..schemas.outcome import Failure, FailureReason, Outcome, Success
from .admin_client import AdminApiClient, TransportError


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def classify_response(response: RemoteResponse, shop: str = "") -> Outcome:
    body_excerpt = truncate(response.text, settings.response_log_limit)
    logger.info(f"Admin API status={response.status_code} shop={shop} body={body_excerpt}")

    try:
        data = json.loads(response.text)
    except ValueError:
        logger.warning(f"Admin API returned non-JSON for {shop} (status {response.status_code})")
        return Failure(
            reason=FailureReason.REMOTE_UNPARSEABLE,
            detail=f"status={response.status_code} body={body_excerpt}",
        )

    user_errors = _dig(data, "data", "metaobjectCreate", "userErrors") or []
    if isinstance(user_errors, list) and user_errors:
        for err in user_errors:
            field = _dig(err, "field")
            message = _dig(err, "message")
            logger.warning(f"Admin API userError for {shop}: field={field} message={message}")
        return Failure(
            reason=FailureReason.REMOTE_VALIDATION_ERROR,
            detail=f"{len(user_errors)} userError(s): {truncate(json.dumps(user_errors), settings.response_log_limit)}",
        )

    metaobject_id = _dig(data, "data", "metaobjectCreate", "metaobject", "id")
    if isinstance(metaobject_id, str) and metaobject_id:
        return Success(id=metaobject_id)

    logger.warning(
        f"Admin API response for {shop} carried no metaobject id "
        f"(status {response.status_code}): {body_excerpt}"
    )
    return Failure(
        reason=FailureReason.REMOTE_UNPARSEABLE,
        detail=f"status={response.status_code} body={body_excerpt}",
    )


async def submit_review(
    client: AdminApiClient,
    credential: Credential,
    payload: GraphQLRequest,
    shop: str,
) -> Outcome:
    try:
        response = await client.execute(shop, credential.access_token, payload)
    except TransportError as e:
        return Failure(reason=FailureReason.TRANSPORT_ERROR, detail=str(e))
    return classify_response(response, shop)
