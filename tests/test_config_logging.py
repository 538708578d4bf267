import logging

import pytest

from hub_bot.config import DEFAULT_TOURNAMENT_ROLES, load_settings, parse_roles
from hub_bot.errors import ConfigError
from hub_bot.logging_config import NOISY_LIBRARIES, quiet_libraries, setup_logging

REQUIRED = {
    "CLIENT_ID": "123",
    "CLIENT_SECRET": "shh",
    "REDIRECT_URI": "http://localhost:5000/callback",
    "BOT_TOKEN": "abc123",
    "HUB_SERVER_NAME": "Hub",
    "TOURNAMENT_NAME": "Spring Open",
}


@pytest.fixture()
def env(monkeypatch):
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    for name in ("TOURNAMENT_ROLES", "PORT", "HOST", "REPLY_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_load_settings(env):
    s = load_settings()
    assert s.bot_token == "abc123"
    assert s.hub_server_name == "Hub"
    assert s.tournament_roles == DEFAULT_TOURNAMENT_ROLES
    assert s.port == 5000
    assert s.host == "0.0.0.0"
    assert s.reply_timeout == 86400.0


def test_load_settings_overrides(env):
    env.setenv("TOURNAMENT_ROLES", "judge, coach,,")
    env.setenv("PORT", "8080")
    env.setenv("REPLY_TIMEOUT_SECONDS", "0")
    s = load_settings()
    assert s.tournament_roles == ("judge", "coach")
    assert s.port == 8080
    assert s.reply_timeout is None


def test_missing_settings_are_listed(env):
    env.setenv("CLIENT_SECRET", "")
    env.delenv("BOT_TOKEN")
    with pytest.raises(ConfigError) as exc_info:
        load_settings()
    assert "CLIENT_SECRET" in str(exc_info.value)
    assert "BOT_TOKEN" in str(exc_info.value)


def test_malformed_port(env):
    env.setenv("PORT", "http")
    with pytest.raises(ConfigError):
        load_settings()


def test_parse_roles():
    assert parse_roles("") == ()
    assert parse_roles(" judge ,spectator") == ("judge", "spectator")


def test_setup_logging_idempotent():
    logger1 = setup_logging(logging.DEBUG)
    logger2 = setup_logging(logging.DEBUG)
    assert logger1 is logger2
    assert logger1.handlers  # at least one handler installed


def test_quiet_libraries_only_outside_debug():
    httpx_logger = logging.getLogger("httpx")
    httpx_logger.setLevel(logging.NOTSET)
    quiet_libraries(logging.DEBUG)
    assert httpx_logger.level == logging.NOTSET
    quiet_libraries(logging.INFO)
    assert all(logging.getLogger(name).level == logging.WARNING for name in NOISY_LIBRARIES)
