"""
RolesCog - `.iam` / `.iamnot` / `.help` text commands.

Listens to every message, narrows it to an IncomingMessage and hands it to
the CommandDispatcher. Whatever text the dispatcher returns is posted back
to the same channel as plain text.
"""

from __future__ import annotations

import discord
from discord.ext import commands

from selfrole.bot.commands import CommandDispatcher, IncomingMessage
from selfrole.config.logging import get_logger

logger = get_logger(__name__)


def to_incoming(message: discord.Message) -> IncomingMessage:
    """Extract the fields the dispatcher needs from a discord.py message."""
    return IncomingMessage(
        author_id=message.author.id,
        channel_id=message.channel.id,
        guild_id=message.guild.id if message.guild is not None else None,
        content=message.content,
    )


class RolesCog(commands.Cog):
    """Self-assignable roles via text commands in the command channel."""

    def __init__(self, bot, dispatcher: CommandDispatcher) -> None:
        self.bot = bot
        self.dispatcher = dispatcher

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        reply = await self.dispatcher.dispatch(to_incoming(message))
        if reply is None:
            return

        try:
            await message.channel.send(reply)
        except discord.HTTPException as e:
            logger.warning(f"Could not post reply in channel {message.channel.id}: {e}")
