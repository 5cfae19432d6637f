from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FailureReason(str, Enum):
    MISSING_TENANT = "missing_tenant"
    INVALID_PRODUCT_REFERENCE = "invalid_product_reference"
    INVALID_RATING = "invalid_rating"
    UNAUTHORIZED = "unauthorized"
    REMOTE_VALIDATION_ERROR = "remote_validation_error"
    REMOTE_UNPARSEABLE = "remote_unparseable"
    TRANSPORT_ERROR = "transport_error"


class Success(BaseModel):
    kind: Literal["success"] = "success"
    id: str


class Failure(BaseModel):
    kind: Literal["failure"] = "failure"
    reason: FailureReason
    # Operator-facing context; never rendered to the shopper
    detail: str | None = None


Outcome = Success | Failure


class RenderDirective(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    return_to: str = Field(default="/", serialization_alias="returnTo")
    id: str | None = None
    message: str | None = None
