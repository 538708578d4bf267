"""Data models for the authorization exchange and the membership fan-out.

The models are implemented using :mod:`pydantic` so that the Discord OAuth2
responses are validated when they are parsed and the fan-out report can be
logged or serialised without extra glue.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TokenGrant(BaseModel):
    """Access credential returned by ``POST /oauth2/token``.

    Attributes
    ----------
    access_token:
        Bearer token authorising calls on behalf of the user.
    token_type:
        Always ``"Bearer"`` for Discord.
    expires_in:
        Lifetime of the token in seconds.
    refresh_token:
        Token for renewing the grant. Never used; the credential lives only for
        one fan-out.
    scope:
        Space separated list of granted scopes.

    """

    model_config = ConfigDict(extra="ignore")

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    scope: str = ""

    @property
    def scopes(self) -> set[str]:
        return set(self.scope.split())


class AuthorizedUser(BaseModel):
    """The Discord user that approved the grant."""

    model_config = ConfigDict(extra="ignore")

    id: int
    username: str = ""


class Authorization(BaseModel):
    """Response of ``GET /oauth2/@me``."""

    model_config = ConfigDict(extra="ignore")

    user: AuthorizedUser
    scopes: list[str] = Field(default_factory=list)


class AuthorizedMember(BaseModel):
    """A hub member resolved from a grant, ready to be propagated."""

    credential: TokenGrant
    user_id: int
    member: Any
    role_name: str
    nickname: str | None = None


class OutcomeStatus(str, Enum):
    ADDED = "added"
    ALREADY_MEMBER = "already_member"
    SKIPPED = "skipped"
    FAILED = "failed"


class SatelliteOutcome(BaseModel):
    """Result of propagating a membership to one satellite guild."""

    guild_id: int
    guild_name: str
    status: OutcomeStatus
    detail: str | None = None


class FanoutReport(BaseModel):
    """Per-satellite outcomes of one fan-out."""

    user_id: int
    role_name: str
    outcomes: list[SatelliteOutcome] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        """``True`` when every satellite with a matching role succeeded.

        Skipped satellites are anomalies and do not fail the report.
        """
        return all(o.status is not OutcomeStatus.FAILED for o in self.outcomes)

    def with_status(self, status: OutcomeStatus) -> list[SatelliteOutcome]:
        return [o for o in self.outcomes if o.status is status]
