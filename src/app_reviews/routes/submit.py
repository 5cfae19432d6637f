"""
/reviews/submit endpoint, the target of the storefront app proxy
(/apps/app-reviews/submit).

Accepts a form post, a JSON body or a plain query string, runs the
submission pipeline and always answers 200 with the confirmation page;
the page redirects the shopper back to return_to. Failures are told apart
only by the short message on that page.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ..auth import verify_proxy_signature
from ..engine.reporter import report
from ..logging import get_request_id, logger, request_id_ctx
from ..rendering.html import render_confirmation
from ..schemas.outcome import Failure, FailureReason
from ..schemas.submission import Submission

router = APIRouter()


async def read_fields(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "")
    if request.method in ("GET", "HEAD"):
        return {}
    if "application/json" in content_type:
        try:
            data = await request.json()
        except ValueError:
            logger.warning("Submission body is not valid JSON; ignoring it")
            return {}
        return data if isinstance(data, dict) else {}
    if "form" in content_type:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    return {}


@router.api_route("/reviews/submit", methods=["GET", "POST"], response_class=HTMLResponse)
async def submit(
    request: Request,
    _signed: None = Depends(verify_proxy_signature),
) -> HTMLResponse:
    rid = request.headers.get("x-request-id") or get_request_id()
    request_id_ctx.set(rid)
    logger.info(f"[{request.method}] /reviews/submit query={dict(request.query_params)}")

    submission = Submission(return_to=request.query_params.get("return_to") or "/")
    try:
        fields = await read_fields(request)
        submission = Submission.from_request_fields(fields, request.query_params, request.headers)

        pipeline = getattr(request.app.state, "pipeline", None)
        if pipeline is None:
            logger.error("Submission pipeline not initialized")
            directive = report(Failure(reason=FailureReason.TRANSPORT_ERROR), submission.return_to)
        else:
            directive = await pipeline.run(submission)
    except Exception:
        logger.exception(f"Unhandled error while submitting review for {submission.shop or '-'}")
        directive = report(Failure(reason=FailureReason.TRANSPORT_ERROR), submission.return_to)

    return HTMLResponse(render_confirmation(directive))
