"""FastAPI application entry point.

The lifespan handler builds the credential store chain, the Admin API
client and the submission pipeline, and stores the pipeline on app.state
for the submit route. The HTTP client is closed on shutdown.

Every response carries frame-ancestors headers so the admin can embed the
app; unknown paths get a JSON 404.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .credentials.resolver import CredentialResolver
from .credentials.store import build_credential_store
from .engine.admin_client import AdminApiClient
from .engine.pipeline import ReviewPipeline
from .logging import logger, print_settings
from .routes import admin_router, health_router, submit_router

logger.info("Starting App Reviews service")

# Print settings with sensitive data masked
print_settings(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = build_credential_store(settings)
    client = AdminApiClient()
    app.state.pipeline = ReviewPipeline(CredentialResolver(store), client)
    logger.info(f"Admin API client initialized: version {settings.api_version}")

    yield

    await client.aclose()


# Initialize FastAPI app
app = FastAPI(title="App Reviews", version="0.1.0", lifespan=lifespan)


@app.middleware("http")
async def allow_admin_embedding(request: Request, call_next):
    response = await call_next(request)
    response.headers["Content-Security-Policy"] = f"frame-ancestors {settings.frame_ancestors};"
    response.headers["X-Frame-Options"] = "ALLOWALL"
    return response


@app.exception_handler(404)
async def not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": f"No route: {request.method} {request.url.path}"},
    )


# Include routers
app.include_router(health_router)
app.include_router(admin_router)
app.include_router(submit_router)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
