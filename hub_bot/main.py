from __future__ import annotations

import asyncio

import httpx
import uvicorn

from .adapters.discord import DiscordAdapter, DiscordOAuth
from .bot import HubBot
from .config import load_settings
from .core.exchange import AuthorizationExchange
from .core.fanout import MembershipFanout
from .errors import ConfigError
from .logging_config import setup_logging
from .web.callback import create_app


def main() -> int:
    log = setup_logging()
    try:
        settings = load_settings()
    except ConfigError as exc:
        log.error("%s. Export it in your environment before running.", exc)
        return 2
    bot = HubBot(settings)

    async def runner() -> int:
        http_client = httpx.AsyncClient(timeout=30.0)
        adapter = DiscordAdapter(settings.bot_token, client=http_client)
        oauth = DiscordOAuth(
            settings.client_id,
            settings.client_secret,
            settings.redirect_uri,
            client=http_client,
        )
        app = create_app(
            AuthorizationExchange(oauth, bot.communities, settings.tournament_roles),
            MembershipFanout(adapter, bot.communities),
        )
        server = uvicorn.Server(
            uvicorn.Config(app, host=settings.host, port=settings.port, log_config=None)
        )

        async def run_bot() -> None:
            try:
                async with bot:
                    await bot.start(settings.bot_token)
            finally:
                server.should_exit = True

        async def serve() -> None:
            try:
                await server.serve()
            finally:
                if not bot.is_closed():
                    await bot.close()

        try:
            await asyncio.gather(run_bot(), serve())
        finally:
            await http_client.aclose()
        return 2 if bot.startup_error else 0

    try:
        return asyncio.run(runner())
    except KeyboardInterrupt:
        log.info("Shutting down...")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
