"""
SelfRoleBot - discord.py bot client.

Manages the bot lifecycle:
- Builds the command context (bot identity, command channel, alias table)
  once at startup, after login
- Loads the RolesCog that handles `.iam` / `.iamnot` / `.help`
"""

from __future__ import annotations

import discord
from discord.ext import commands

from selfrole.bot.commands import BotContext, CommandDispatcher
from selfrole.config.logging import get_logger
from selfrole.config.settings import Settings
from selfrole.roles.aliases import RoleAliasTable
from selfrole.roles.discord_gateway import DiscordRoleGateway
from selfrole.roles.service import RoleMutator

logger = get_logger(__name__)


class SelfRoleBot(commands.Bot):
    """
    Discord bot for self-assignable roles.

    The prefix commands are parsed by CommandDispatcher rather than the
    discord.ext command framework, so the built-in help command is disabled
    to leave `.help` to the dispatcher.

    Args:
        settings: Full application settings (token, command channel, aliases)
    """

    def __init__(self, settings: Settings) -> None:
        intents = discord.Intents.default()
        intents.message_content = True  # Required to read command text
        super().__init__(
            command_prefix=settings.bot.command_prefix,
            intents=intents,
            help_command=None,
        )
        self.settings = settings
        self.aliases = RoleAliasTable(settings.roles.aliases)
        self.dispatcher: CommandDispatcher | None = None

    async def setup_hook(self) -> None:
        """
        Called after login, before connecting to the Gateway.

        `self.user` is known at this point, so the context is built here.
        """
        context = self.build_context(self.user.id)
        self.dispatcher = CommandDispatcher(context, RoleMutator(DiscordRoleGateway(self)))

        if context.command_channel_id is None:
            logger.warning(
                "BOT__COMMAND_CHANNEL_ID is not set - every command will be ignored"
            )
        else:
            logger.info(f"Listening for commands in channel {context.command_channel_id}")

        from selfrole.bot.cogs.roles import RolesCog
        await self.add_cog(RolesCog(self, self.dispatcher))
        logger.info(f"Cogs loaded ({len(self.aliases)} role aliases)")

    def build_context(self, bot_user_id: int) -> BotContext:
        """Assemble the dispatcher context from settings."""
        return BotContext(
            bot_user_id=bot_user_id,
            command_channel_id=self.settings.bot.command_channel_id,
            aliases=self.aliases,
            prefix=self.settings.bot.command_prefix,
        )

    async def on_ready(self) -> None:
        """Called when the bot successfully connects to Discord."""
        logger.info(f"Logged in as {self.user} (id: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    async def close(self) -> None:
        logger.info("Shutting down SelfRole...")
        await super().close()
