from datetime import datetime

from pydantic import BaseModel


class Credential(BaseModel):
    shop: str
    access_token: str
    is_online: bool = False
    updated_at: datetime | None = None

    @property
    def is_offline(self) -> bool:
        return not self.is_online


class SessionsFile(BaseModel):
    """On-disk layout written by the install/OAuth flow."""

    sessions: list[Credential] = []
