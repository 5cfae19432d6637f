"""
Async Admin GraphQL client built on httpx.

One POST per call to https://<shop>/admin/api/<version>/graphql.json with
the offline access token in X-Shopify-Access-Token. No retries: a failed
call is final for the submission and the shopper has to resubmit.
"""

import httpx

from ..config import settings
from ..logging import logger
from ..schemas.admin_api import GraphQLRequest, RemoteResponse

ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


class TransportError(Exception):
    """The Admin API could not be reached or the exchange was cut short."""


class AdminApiClient:
    def __init__(self, http_client: httpx.AsyncClient | None = None):
        self.client = http_client or httpx.AsyncClient(timeout=settings.remote_timeout)
        self.api_version = settings.api_version

    def endpoint(self, shop: str) -> str:
        return f"https://{shop}/admin/api/{self.api_version}/graphql.json"

    async def execute(self, shop: str, access_token: str, payload: GraphQLRequest) -> RemoteResponse:
        try:
            response = await self.client.post(
                self.endpoint(shop),
                headers={
                    ACCESS_TOKEN_HEADER: access_token,
                    "Content-Type": "application/json",
                },
                json=payload.model_dump(),
            )
        except httpx.HTTPError as e:
            logger.error(f"Admin API call failed for {shop}: {e!r}")
            raise TransportError(str(e) or e.__class__.__name__) from e

        return RemoteResponse(status_code=response.status_code, text=response.text)

    async def aclose(self) -> None:
        await self.client.aclose()
