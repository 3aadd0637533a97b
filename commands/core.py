"""
Shiva - Core Commands
Channel management commands: aichat, clear, status
"""

import discord
from discord import app_commands

from discord_utils import get_user_display_name
import logger as log


async def handle_aichat_command(bot_instance, interaction: discord.Interaction, action: str) -> None:
    """Switch AI chat on or off for the channel the command was used in."""
    guild_id = interaction.guild_id
    channel_id = interaction.channel_id
    if guild_id is None:
        await interaction.response.send_message("❌ AI chat only works in servers", ephemeral=True)
        return

    if action == "enable":
        bot_instance.channel_store.enable(guild_id, channel_id, enabled_by=get_user_display_name(interaction.user))
        msg = "✅ AI chat enabled in this channel"
    else:
        if bot_instance.channel_store.disable(guild_id, channel_id):
            msg = "✅ AI chat disabled in this channel"
        else:
            msg = "ℹ️ AI chat was not enabled here"

    # Make the change visible now instead of after the cache TTL
    bot_instance.activation.invalidate(guild_id, channel_id)
    log.info(f"AI chat {action}d in {guild_id}/{channel_id} by {interaction.user}", bot_instance.name)
    await interaction.response.send_message(msg, ephemeral=True)


async def handle_status_command(bot_instance, interaction: discord.Interaction) -> None:
    """Show the AI chat state for this channel."""
    active = False
    if interaction.guild_id is not None:
        active = await bot_instance.activation.is_active(interaction.channel_id, interaction.guild_id)

    turns = len(bot_instance.conversations.get(interaction.channel_id))
    lines = [
        f"**{bot_instance.name} Status**",
        f"• AI chat here: {'✅ enabled' if active else '❌ disabled'}",
        f"• Remembered turns: {turns}/{bot_instance.conversations.capacity}",
        f"• Persona: {'on' if bot_instance.persona else 'off'}",
    ]
    await interaction.response.send_message("\n".join(lines), ephemeral=True)


def setup_core_commands(bot_instance) -> None:
    """Register core channel management commands."""
    tree = bot_instance.tree

    @tree.command(name="aichat", description="Turn AI chat on or off in this channel")
    @app_commands.describe(action="enable or disable")
    @app_commands.choices(action=[
        app_commands.Choice(name="enable", value="enable"),
        app_commands.Choice(name="disable", value="disable"),
    ])
    @app_commands.guild_only()
    @app_commands.default_permissions(manage_channels=True)
    async def cmd_aichat(interaction: discord.Interaction, action: app_commands.Choice[str]) -> None:
        await handle_aichat_command(bot_instance, interaction, action.value)

    @tree.command(name="clear", description="Clear the conversation history for this channel")
    async def cmd_clear(interaction: discord.Interaction) -> None:
        bot_instance.conversations.clear(interaction.channel_id)
        await interaction.response.send_message("🗑️ Conversation history cleared", ephemeral=True)

    @tree.command(name="status", description="Show AI chat status for this channel")
    async def cmd_status(interaction: discord.Interaction) -> None:
        await handle_status_command(bot_instance, interaction)
