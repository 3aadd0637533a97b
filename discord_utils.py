"""
Shiva - Discord Utilities
Helper functions for Discord interactions.
"""

import base64
from typing import List, Optional, Tuple

import aiohttp
import discord

from constants import MAX_MESSAGE_LENGTH, IMAGE_EXTENSIONS, IMAGE_DOWNLOAD_TIMEOUT
import logger as log


def get_user_display_name(user: discord.User | discord.Member) -> str:
    """Get display name for a user."""
    if hasattr(user, 'display_name') and user.display_name:
        return user.display_name
    elif hasattr(user, 'global_name') and user.global_name:
        return user.global_name
    return user.name


# --- Message Splitting ---

def split_message(content: str, max_length: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """Split a long message into Discord-sized chunks at fixed offsets, in order."""
    if not content:
        return []
    return [content[i:i + max_length] for i in range(0, len(content), max_length)]


async def send_chunked(message: discord.Message, content: str) -> list:
    """Reply with content, one message per chunk."""
    sent_messages = []
    for chunk in split_message(content):
        sent_messages.append(await message.reply(chunk))
    return sent_messages


# --- Media Handling ---

# Global aiohttp session for reuse
_http_session: Optional[aiohttp.ClientSession] = None


async def get_http_session() -> aiohttp.ClientSession:
    """Get or create a reusable HTTP session."""
    global _http_session
    if _http_session is None or _http_session.closed:
        _http_session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=IMAGE_DOWNLOAD_TIMEOUT))
    return _http_session


async def close_http_session():
    global _http_session
    if _http_session is not None and not _http_session.closed:
        await _http_session.close()
    _http_session = None


def is_image_attachment(attachment) -> bool:
    """Check an attachment's content type (or file extension if Discord gave none)."""
    content_type = getattr(attachment, 'content_type', None)
    if content_type:
        return content_type.lower().startswith('image/')
    filename = (getattr(attachment, 'filename', '') or '').lower()
    return filename.endswith(IMAGE_EXTENSIONS)


def image_attachments(message: discord.Message) -> list:
    return [a for a in message.attachments if is_image_attachment(a)]


def guess_mime_type(attachment) -> str:
    content_type = getattr(attachment, 'content_type', None)
    if content_type:
        # Discord may append parameters, e.g. "image/png; charset=..."
        return content_type.split(';')[0].strip()
    ext = (attachment.filename or '').rsplit('.', 1)[-1].lower()
    return "image/jpeg" if ext == "jpg" else f"image/{ext}"


async def download_image_as_base64(url: str) -> Optional[str]:
    """Download an image and convert to base64."""
    try:
        session = await get_http_session()
        async with session.get(url) as response:
            if response.status == 200:
                data = await response.read()
                return base64.b64encode(data).decode('utf-8')
            log.warn(f"Image download returned HTTP {response.status}: {url}")
    except Exception as e:
        log.warn(f"Failed to download image: {e}")
    return None


async def download_images(attachments: list, downloader=download_image_as_base64) -> List[Tuple[str, str]]:
    """Download image attachments as (mime_type, base64) pairs, skipping failures."""
    images = []
    for attachment in attachments:
        data = await downloader(attachment.url)
        if data:
            images.append((guess_mime_type(attachment), data))
    return images
