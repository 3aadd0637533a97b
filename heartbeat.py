"""
Shiva - Status Heartbeat
Tells the operator's status page that the bot came online.
"""

from datetime import datetime, timezone

import aiohttp

from config import STATUS_ENDPOINT_URL
from constants import HEARTBEAT_TIMEOUT
import logger as log


def build_payload(name: str, avatar_url: str) -> dict:
    return {
        "name": name,
        "avatarUrl": avatar_url,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def announce_online(name: str, avatar_url: str, endpoint: str = STATUS_ENDPOINT_URL) -> bool:
    """POST the online ping. Never raises; returns whether the endpoint accepted it."""
    if not endpoint:
        return False

    try:
        timeout = aiohttp.ClientTimeout(total=HEARTBEAT_TIMEOUT)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(endpoint, json=build_payload(name, avatar_url)) as response:
                if response.status < 400:
                    log.debug(f"Status ping accepted ({response.status})", name)
                    return True
                log.debug(f"Status ping rejected ({response.status})", name)
    except Exception as e:
        log.debug(f"Status ping failed: {e}", name)
    return False
