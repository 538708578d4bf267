import os
from dataclasses import dataclass, field

from .errors import ConfigError

DEFAULT_TOURNAMENT_ROLES: tuple[str, ...] = ("judge", "competitor", "spectator")

_REQUIRED = {
    "client_id": "CLIENT_ID",
    "client_secret": "CLIENT_SECRET",
    "redirect_uri": "REDIRECT_URI",
    "bot_token": "BOT_TOKEN",
    "hub_server_name": "HUB_SERVER_NAME",
    "tournament_name": "TOURNAMENT_NAME",
}


@dataclass(frozen=True)
class Settings:
    client_id: str
    client_secret: str
    redirect_uri: str
    bot_token: str
    hub_server_name: str
    tournament_name: str
    tournament_roles: tuple[str, ...] = field(default=DEFAULT_TOURNAMENT_ROLES)
    host: str = "0.0.0.0"
    port: int = 5000
    # Seconds to wait for each DM reply; ``None`` waits forever
    reply_timeout: float | None = 86400.0


def parse_roles(raw: str) -> tuple[str, ...]:
    """Split a comma separated role list, dropping blank entries."""
    return tuple(r.strip() for r in raw.split(",") if r.strip())


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def load_settings() -> Settings:
    """Build :class:`Settings` from the environment.

    Raises :class:`ConfigError` naming every required variable that is unset.
    """
    values = {attr: os.getenv(env, "").strip() for attr, env in _REQUIRED.items()}
    missing = [_REQUIRED[attr] for attr, value in values.items() if not value]
    if missing:
        raise ConfigError(
            f"{', '.join(missing)} must be set in the environment"
        )

    roles = parse_roles(os.getenv("TOURNAMENT_ROLES", ""))
    timeout = _int_env("REPLY_TIMEOUT_SECONDS", 86400)
    return Settings(
        **values,
        tournament_roles=roles or DEFAULT_TOURNAMENT_ROLES,
        host=os.getenv("HOST", "").strip() or "0.0.0.0",
        port=_int_env("PORT", 5000),
        reply_timeout=float(timeout) if timeout > 0 else None,
    )
