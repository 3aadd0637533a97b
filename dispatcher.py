"""
Shiva - Message Dispatcher
Runs each inbound message through canned answers, activation, and AI composition.
"""

import discord

from activation import ChannelActivationCache
from canned import CannedResponseGate
from composer import ResponseComposer
from config import BOT_NAME
from constants import DISPATCH_ERROR_REPLY
from conversation import ConversationStore, USER, BOT
from discord_utils import (
    get_user_display_name, image_attachments, download_images,
    download_image_as_base64, send_chunked
)
from prometheus_metrics import metrics_manager
import logger as log

# Outcomes returned by MessageDispatcher.handle
IGNORED = "ignored"
CANNED = "canned"
INACTIVE = "inactive"
VISION = "vision"
TEXT = "text"
FAILED = "failed"


class MessageDispatcher:
    """Sequences the handling of one inbound message.

    Identity questions are answered before the activation check, so they
    work even in channels without AI chat.
    """

    def __init__(
        self,
        gate: CannedResponseGate,
        activation: ChannelActivationCache,
        conversations: ConversationStore,
        composer: ResponseComposer,
        bot_name: str = BOT_NAME,
        image_downloader=download_image_as_base64
    ):
        self.gate = gate
        self.activation = activation
        self.conversations = conversations
        self.composer = composer
        self.bot_name = bot_name
        self.image_downloader = image_downloader

    async def handle(self, message: discord.Message) -> str:
        """Handle one message; never raises."""
        if message.author.bot or message.guild is None or message.channel is None:
            return IGNORED

        metrics_manager.record_message(self.bot_name)

        try:
            canned = self.gate.classify(message.content)
            if canned:
                metrics_manager.record_canned_answer(self.bot_name, canned.category)
                log.debug(f"Canned '{canned.category}' answer in #{message.channel.id}", self.bot_name)
                await message.reply(canned.reply)
                return CANNED

            if not await self.activation.is_active(message.channel.id, message.guild.id):
                return INACTIVE

            outcome = await self._respond(message)
            if outcome != IGNORED:
                metrics_manager.record_response(self.bot_name, outcome)
            return outcome
        except Exception as e:
            log.exception("Error in AI chat response", e, self.bot_name)
            metrics_manager.record_error(self.bot_name, type(e).__name__)
            try:
                await message.reply(DISPATCH_ERROR_REPLY)
            except Exception as reply_error:
                log.error(f"Could not send apology: {reply_error}", self.bot_name)
            return FAILED

    async def _send_typing(self, channel):
        try:
            await channel.typing()
        except Exception as e:
            log.debug(f"Typing indicator failed: {e}", self.bot_name)

    async def _respond(self, message: discord.Message) -> str:
        await self._send_typing(message.channel)

        channel_id = message.channel.id
        user_name = get_user_display_name(message.author)
        prompt = message.content

        attachments = image_attachments(message)
        if attachments:
            images = await download_images(attachments, self.image_downloader)
            if images:
                log.info(f"Vision request with {len(images)} image(s) from {user_name}", self.bot_name)
                reply = await self.composer.compose_reply(prompt, channel_id, user_name, images=images)
                await send_chunked(message, reply)
                return VISION
            log.warn("All image downloads failed, answering text only", self.bot_name)

        if not prompt or not prompt.strip():
            return IGNORED

        self.conversations.append(channel_id, USER, prompt)
        reply = await self.composer.compose_reply(prompt, channel_id, user_name)
        self.conversations.append(channel_id, BOT, reply)
        metrics_manager.update_conversation_channels(self.bot_name, self.conversations.channel_count())

        await send_chunked(message, reply)
        return TEXT
