"""Tests for the Pydantic models."""

from hub_bot.core.models import (
    Authorization,
    FanoutReport,
    OutcomeStatus,
    SatelliteOutcome,
    TokenGrant,
)


def test_token_grant_defaults() -> None:
    """Unspecified fields on ``TokenGrant`` use sensible defaults."""
    grant = TokenGrant(access_token="abc")
    assert grant.token_type == "Bearer"
    assert grant.refresh_token is None
    assert grant.scopes == set()


def test_authorization_accepts_snowflake_strings() -> None:
    """Discord sends ids as strings; they are parsed to ``int``."""
    auth = Authorization.model_validate(
        {"user": {"id": "80351110224678912", "username": "nelly", "avatar": None}}
    )
    assert auth.user.id == 80351110224678912
    assert auth.scopes == []


def test_report_success_ignores_skipped_satellites() -> None:
    report = FanoutReport(
        user_id=1,
        role_name="judge",
        outcomes=[
            SatelliteOutcome(guild_id=2, guild_name="S1", status=OutcomeStatus.ADDED),
            SatelliteOutcome(guild_id=3, guild_name="S2", status=OutcomeStatus.SKIPPED),
        ],
    )
    assert report.success
    report.outcomes.append(
        SatelliteOutcome(guild_id=4, guild_name="S3", status=OutcomeStatus.FAILED)
    )
    assert not report.success
    assert [o.guild_id for o in report.with_status(OutcomeStatus.FAILED)] == [4]
