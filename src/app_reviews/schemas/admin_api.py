from typing import Any

from pydantic import BaseModel, Field


class MetaobjectField(BaseModel):
    key: str
    value: str


class GraphQLRequest(BaseModel):
    query: str
    variables: dict[str, Any] = Field(default_factory=dict)


class RemoteResponse(BaseModel):
    status_code: int
    text: str
