"""Review submission pipeline orchestration.

Coordinates the full submission flow:
1. Validate and normalize the submission (shop, product gid, rating)
2. Resolve the shop's offline access token
3. Build the metaobjectCreate mutation
4. Call the Admin API and classify the response
5. Map the outcome to a rendering directive

Steps 1 and 2 fail fast: an invalid submission never touches the
credential store, and an unauthorized shop never reaches the network.
Every failure is logged with the shop and failure kind before it is
reported.
"""

from collections.abc import Callable
from datetime import datetime, timezone

from ..config import settings
from ..credentials.resolver import CredentialResolver
from ..logging import logger
from ..schemas.outcome import Failure, Outcome, RenderDirective, Success
from ..schemas.submission import Submission
from .admin_client import AdminApiClient
from .mutation import build_mutation
from .reporter import report
from .submitter import submit_review
from .validator import validate_submission


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReviewPipeline:
    def __init__(
        self,
        resolver: CredentialResolver,
        client: AdminApiClient,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.resolver = resolver
        self.client = client
        self.clock = clock

    async def submit(self, submission: Submission) -> Outcome:
        validated = validate_submission(submission, settings.gid_namespace)
        if isinstance(validated, Failure):
            return validated

        credential = await self.resolver.resolve(validated.shop)
        if isinstance(credential, Failure):
            return credential

        payload = build_mutation(
            validated,
            self.clock(),
            status=settings.review_status,
            metaobject_type=settings.metaobject_type,
        )
        return await submit_review(self.client, credential, payload, validated.shop)

    async def run(self, submission: Submission) -> RenderDirective:
        outcome = await self.submit(submission)

        if isinstance(outcome, Success):
            logger.info(f"Review created: shop={submission.shop} id={outcome.id}")
        else:
            logger.warning(
                f"Submission failed: shop={submission.shop or '-'} "
                f"reason={outcome.reason.value} detail={outcome.detail or '-'}"
            )

        return report(outcome, submission.return_to)
