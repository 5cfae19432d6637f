"""Admin API mutation construction for a review metaobject."""

from datetime import datetime, timezone

from ..schemas.admin_api import GraphQLRequest, MetaobjectField
from ..schemas.submission import ValidatedReview

CREATE_REVIEW_MUTATION = """
mutation CreateReview($fields: [MetaobjectFieldInput!]!) {
  metaobjectCreate(metaobject: { type: "%s", fields: $fields }) {
    metaobject { id }
    userErrors { field message }
  }
}"""


def format_timestamp(now: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2025-01-02T03:04:05.678Z."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def build_fields(review: ValidatedReview, now: datetime, status: str = "approved") -> list[MetaobjectField]:
    # Every review is published immediately; there is no moderation queue
    values = [
        ("product", review.product_gid),
        ("rating", str(review.rating)),
        ("title", review.title),
        ("body", review.body),
        ("author", review.author),
        ("email", review.email),
        ("status", status),
        ("created", format_timestamp(now)),
    ]
    return [MetaobjectField(key=key, value=value) for key, value in values]


def build_mutation(
    review: ValidatedReview,
    now: datetime,
    status: str = "approved",
    metaobject_type: str = "review",
) -> GraphQLRequest:
    fields = build_fields(review, now, status)
    return GraphQLRequest(
        query=CREATE_REVIEW_MUTATION % metaobject_type,
        variables={"fields": [f.model_dump() for f in fields]},
    )
