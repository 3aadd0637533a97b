"""
Shiva - Entry Point
Validates configuration, then runs the Discord client.
"""

import asyncio
import logging
import sys

# Suppress verbose logging from libraries
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
    datefmt='%H:%M:%S'
)
logging.getLogger('discord').setLevel(logging.WARNING)
logging.getLogger('discord.http').setLevel(logging.WARNING)
logging.getLogger('discord.gateway').setLevel(logging.WARNING)
logging.getLogger('aiohttp').setLevel(logging.WARNING)

from config import DISCORD_TOKEN, BOT_NAME, METRICS_PORT
from bot_instance import BotInstance
from prometheus_metrics import metrics_manager
import logger as log


async def run_bot():
    """Run the configured bot until it disconnects."""
    if not DISCORD_TOKEN:
        log.error("DISCORD_TOKEN not set!")
        return

    log.startup(f"Starting {BOT_NAME}...")
    log.divider()

    metrics_manager.start_metrics_server(METRICS_PORT)

    bot = BotInstance(name=BOT_NAME, token=DISCORD_TOKEN)
    try:
        await bot.start()
    finally:
        log.info("Shutting down...")
        await bot.close()


# --- Entry Point ---

def main():
    from startup import validate_startup

    if not validate_startup(interactive=sys.stdin.isatty()):
        log.error("Startup validation failed. Please fix the issues above.")
        sys.exit(1)

    log.divider()
    try:
        asyncio.run(run_bot())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
