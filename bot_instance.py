"""
Shiva - Bot Instance
Encapsulates the Discord client together with the services it dispatches to.
"""

import asyncio
from typing import Optional

import discord
from discord import app_commands

from activation import ChannelActivationCache
from canned import CannedResponseGate
from channels import ActiveChannelStore
from composer import ResponseComposer
from config import BOT_NAME, OWNER_NAME, BOT_TONE, BOT_AVATAR_URL, PERSONALITY_ENABLED
from conversation import ConversationStore
from discord_utils import close_http_session
from dispatcher import MessageDispatcher
from gemini import GeminiClient
from heartbeat import announce_online
from persona import PersonaTransform
import logger as log


class BotInstance:
    """One Discord client plus its conversation, activation and AI services.

    State is owned here and handed to the dispatcher, so a second instance
    (or a test) never shares history or cache entries with this one.
    """

    def __init__(
        self,
        name: str,
        token: str,
        channel_store: Optional[ActiveChannelStore] = None,
        gemini_client: Optional[GeminiClient] = None,
        personality_enabled: bool = PERSONALITY_ENABLED
    ):
        self.name = name
        self.token = token

        # Create intents
        intents = discord.Intents.default()
        intents.message_content = True

        # Create client and tree
        self.client = discord.Client(intents=intents)
        self.tree = app_commands.CommandTree(self.client)

        # Services
        self.channel_store = channel_store or ActiveChannelStore()
        self.gemini = gemini_client or GeminiClient()
        self.conversations = ConversationStore()
        self.activation = ChannelActivationCache(self.channel_store.find_active_channel)
        self.gate = CannedResponseGate(BOT_NAME, OWNER_NAME)
        self.persona = PersonaTransform() if personality_enabled else None
        self.composer = ResponseComposer(
            self.gemini, self.conversations, self.persona,
            bot_name=BOT_NAME, owner_name=OWNER_NAME, tone=BOT_TONE
        )
        self.dispatcher = MessageDispatcher(
            self.gate, self.activation, self.conversations, self.composer, bot_name=self.name
        )

        # Set up events and commands
        self._setup_events()
        self._setup_commands()

    def _setup_events(self):
        """Register event handlers."""

        @self.client.event
        async def on_ready():
            try:
                synced = await self.tree.sync()
                log.ok(f"Synced {len(synced)} commands", self.name)
            except Exception as e:
                log.error(f"Command sync failed: {e}", self.name)

            avatar_url = BOT_AVATAR_URL
            if not avatar_url and self.client.user and self.client.user.display_avatar:
                avatar_url = self.client.user.display_avatar.url
            asyncio.create_task(announce_online(self.name, avatar_url))

            log.online(f"{self.client.user} is online!", self.name)

        @self.client.event
        async def on_message(message: discord.Message):
            if message.author == self.client.user:
                return
            await self.dispatcher.handle(message)

    def _setup_commands(self) -> None:
        """Register slash commands from commands module."""
        from commands import setup_all_commands
        setup_all_commands(self)

    async def start(self):
        """Start the bot."""
        await self.client.start(self.token)

    async def close(self):
        """Close the bot connection and HTTP sessions."""
        await self.client.close()
        await self.gemini.close()
        await close_http_session()
