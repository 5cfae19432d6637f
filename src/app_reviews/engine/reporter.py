"""Outcome to rendering directive mapping.

Pure: the same Outcome and return target always give the same directive.
Failure messages are short and fixed so nothing from the Admin API or the
credential store ever reaches the shopper.
"""

from ..schemas.outcome import Failure, FailureReason, Outcome, RenderDirective

FAILURE_MESSAGES: dict[FailureReason, str] = {
    FailureReason.MISSING_TENANT: "Missing shop",
    FailureReason.INVALID_PRODUCT_REFERENCE: "Invalid product id",
    FailureReason.INVALID_RATING: "Rating must be 1..5",
    FailureReason.UNAUTHORIZED: "App not authorized for this shop",
    FailureReason.REMOTE_VALIDATION_ERROR: "Validation error",
    FailureReason.REMOTE_UNPARSEABLE: "API returned non-JSON",
    FailureReason.TRANSPORT_ERROR: "Server error",
}


def report(outcome: Outcome, return_to: str = "/") -> RenderDirective:
    return_to = return_to or "/"
    if isinstance(outcome, Failure):
        return RenderDirective(
            ok=False,
            return_to=return_to,
            message=FAILURE_MESSAGES[outcome.reason],
        )
    return RenderDirective(ok=True, return_to=return_to, id=outcome.id)
