from __future__ import annotations

import enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from cloudflare_purge.errors import PurgeError

CF_API_ROOT = "https://api.cloudflare.com/client/v4"


class PurgeMethod(enum.StrEnum):
    POST = "POST"
    DELETE = "DELETE"


class TokenAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["token"] = "token"
    bearer_token: str

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.bearer_token}"}


class KeyAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["key"] = "key"
    email: str
    api_key: str

    def headers(self) -> dict[str, str]:
        return {"X-Auth-Email": self.email, "X-Auth-Key": self.api_key}


PurgeCredentials = Annotated[Union[TokenAuth, KeyAuth], Field(discriminator="kind")]


class PurgeConfig(BaseModel):
    """Zone, credentials and request options for cache purges."""

    model_config = ConfigDict(frozen=True)

    zone_id: str = ""
    credentials: PurgeCredentials | None = None
    strict: bool = True
    method: PurgeMethod = PurgeMethod.POST
    timeout: float = 10.0

    @classmethod
    def from_values(
        cls,
        zone_id: str | None = None,
        bearer_token: str | None = None,
        auth_email: str | None = None,
        auth_key: str | None = None,
        **options,
    ) -> PurgeConfig:
        """
        Build a config from raw option values.
        A non-empty token wins over the email/key pair; both of the pair must be set.
        """
        credentials: TokenAuth | KeyAuth | None = None
        if bearer_token:
            credentials = TokenAuth(bearer_token=bearer_token)
        elif auth_email and auth_key:
            credentials = KeyAuth(email=auth_email, api_key=auth_key)

        return cls(zone_id=zone_id or "", credentials=credentials, **options)

    @property
    def enabled(self) -> bool:
        return bool(self.zone_id) and self.credentials is not None

    @property
    def endpoint(self) -> str:
        return f"{CF_API_ROOT}/zones/{self.zone_id}/purge_cache"


class PurgeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str

    def payload(self) -> dict[str, list[str]]:
        return {"files": [self.url]}


class PurgeResult(BaseModel):
    success: bool
    error_messages: list[str] = Field(default_factory=list)


class PurgeOutcome(BaseModel):
    """What happened to one purge call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str
    configured: bool = True
    status_code: int | None = None
    result: PurgeResult | None = None
    error: PurgeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> PurgeOutcome:
        """Raise the recorded error, if any."""
        if self.error is not None:
            raise self.error
        return self
