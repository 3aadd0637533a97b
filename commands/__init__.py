"""
Shiva - Commands Package
Organizes slash commands into logical groups.
"""

from .core import setup_core_commands


def setup_all_commands(bot_instance):
    """Register all commands for a bot instance."""
    setup_core_commands(bot_instance)
