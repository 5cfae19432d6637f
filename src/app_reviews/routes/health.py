"""
Liveness endpoints: /reviews/ping (plain text, reachable through the app
proxy) and /health (JSON readiness).
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter()

PING_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route("/reviews/ping", methods=PING_METHODS, response_class=PlainTextResponse)
async def ping() -> str:
    return "ok from /reviews/ping"


@router.get("/health")
async def health(request: Request) -> dict:
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        return {
            "status": "ok",
            "pipeline": "unavailable",
            "credential_stores": 0,
            "admin_api": "unavailable",
        }

    store = pipeline.resolver.store
    # A chain reports its members; any other store counts as one
    stores = getattr(store, "stores", [store])

    return {
        "status": "ok",
        "pipeline": "ready",
        "credential_stores": len(stores),
        "admin_api": f"ready ({pipeline.client.api_version})",
    }
