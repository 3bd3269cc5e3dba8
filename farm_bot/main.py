from __future__ import annotations

import asyncio

from .adapters.discord import DiscordPlatform
from .bot import FarmBot
from .commands.interactions import FarmInteractions
from .commands.register import register_commands
from .config import load_settings
from .core.controller import FarmController
from .core.registry import FarmRegistry
from .logging_config import setup_logging


def main() -> int:
    log = setup_logging()
    settings = load_settings()
    if not settings.token:
        log.error(
            "DISCORD_BOT_TOKEN is not set. "
            "Export it in your environment before running."
        )
        return 2

    registry = FarmRegistry()
    app_id = str(settings.application_id) if settings.application_id else None

    async def runner():
        platform = DiscordPlatform(settings.token, bot_user_id=app_id)
        controller = FarmController(registry, platform, settings.policy())
        bot = FarmBot(
            FarmInteractions(controller, settings.organizer_roles),
            platform,
            application_id=settings.application_id,
        )
        register_commands(bot, controller, settings)
        try:
            async with bot:
                await bot.start(settings.token)
        except KeyboardInterrupt:
            log.info("Shutting down...")
        return 0

    return asyncio.run(runner())


if __name__ == "__main__":
    raise SystemExit(main())
