"""Shop to offline access token resolution.

Each submission does exactly one store lookup, on a worker thread so file
or network backed stores never block the event loop. Nothing is cached
here; freshness is the store's responsibility.
"""

import asyncio

from ..logging import logger
from ..schemas.credential import Credential
from ..schemas.outcome import Failure, FailureReason
from .store import CredentialStore, CredentialStoreError


class CredentialResolver:
    def __init__(self, store: CredentialStore):
        self.store = store

    async def resolve(self, shop: str) -> Credential | Failure:
        try:
            credential = await asyncio.to_thread(self.store.find_offline, shop)
        except CredentialStoreError as e:
            logger.error(f"Credential lookup failed for {shop}: {e}")
            return Failure(reason=FailureReason.UNAUTHORIZED, detail=f"store error: {e}")

        if credential is None or not credential.access_token or not credential.is_offline:
            logger.warning(f"No offline token for {shop}")
            return Failure(reason=FailureReason.UNAUTHORIZED, detail="no offline session")
        return credential
