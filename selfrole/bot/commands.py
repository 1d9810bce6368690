"""
Text command parsing and dispatch.

Recognizes three commands typed in the command channel:

    .iam <role>      assign a role
    .iamnot <role>   remove a role
    .help            list commands and roles

Anything else is ignored without a reply: messages from the bot itself,
messages outside the command channel or outside a guild, text without the
prefix, and unknown command words.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from selfrole.roles.aliases import RoleAliasTable
from selfrole.roles.service import RoleMutator


class IncomingMessage(BaseModel):
    """The parts of a chat message the dispatcher looks at."""

    author_id: int = Field(description="Author user ID")
    channel_id: int = Field(description="Channel the message was posted in")
    guild_id: int | None = Field(None, description="Guild ID (None for direct messages)")
    content: str = Field(description="Raw message text")

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class BotContext:
    """Startup configuration shared by every dispatch."""

    bot_user_id: int
    command_channel_id: int | None
    aliases: RoleAliasTable
    prefix: str = "."


@dataclass(frozen=True)
class ParsedCommand:
    name: str
    args: list[str]


def parse_command(content: str, prefix: str = ".") -> ParsedCommand | None:
    """
    Split prefixed text into a lowercased command name and its arguments.

    Returns None if the text does not start with the prefix.
    """
    if not content.startswith(prefix):
        return None
    parts = content.split()
    if not parts:
        return None
    return ParsedCommand(name=parts[0][len(prefix):].lower(), args=parts[1:])


class CommandDispatcher:
    """
    Routes command messages to their handlers and returns the reply text.

    Args:
        context: Bot identity, command channel, prefix and alias table
        mutator: Performs the role changes
    """

    def __init__(self, context: BotContext, mutator: RoleMutator) -> None:
        self.context = context
        self.mutator = mutator
        self._handlers = {
            "iam": self._handle_iam,
            "iamnot": self._handle_iamnot,
            "help": self._handle_help,
        }

    def accepts(self, message: IncomingMessage) -> bool:
        """True if the message was posted by someone else in the command channel."""
        ctx = self.context
        if message.author_id == ctx.bot_user_id:
            return False
        if ctx.command_channel_id is None or message.channel_id != ctx.command_channel_id:
            return False
        return message.guild_id is not None

    async def dispatch(self, message: IncomingMessage) -> str | None:
        """
        Handle one message.

        Returns:
            The text to post back to the channel, or None to stay silent
        """
        if not self.accepts(message):
            return None

        command = parse_command(message.content, self.context.prefix)
        if command is None:
            return None

        handler = self._handlers.get(command.name)
        if handler is None:
            return None
        return await handler(message, command.args)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _handle_iam(self, message: IncomingMessage, args: list[str]) -> str:
        if not args:
            return self._usage("iam")
        role_name = self.context.aliases.resolve(args)
        if role_name is None:
            return self._unknown_role(args)
        return await self.mutator.assign(message.guild_id, message.author_id, role_name)

    async def _handle_iamnot(self, message: IncomingMessage, args: list[str]) -> str:
        if not args:
            return self._usage("iamnot")
        role_name = self.context.aliases.resolve(args)
        if role_name is None:
            return self._unknown_role(args)
        return await self.mutator.remove(message.guild_id, message.author_id, role_name)

    async def _handle_help(self, message: IncomingMessage, args: list[str]) -> str:
        return build_help_text(self.context.aliases, self.context.prefix)

    # ------------------------------------------------------------------
    # Reply text
    # ------------------------------------------------------------------

    def _available(self) -> str:
        return ", ".join(self.context.aliases.labels())

    def _usage(self, command: str) -> str:
        return f"Usage: `{self.context.prefix}{command} <role>` - Available roles: {self._available()}"

    def _unknown_role(self, args: list[str]) -> str:
        typed = " ".join(args)
        return f"❌ Role `{typed}` not found. Available roles: {self._available()}"


def build_help_text(aliases: RoleAliasTable, prefix: str = ".") -> str:
    """Command syntax, the alias table and a few worked examples."""
    entries = list(aliases)
    role_lines = "\n".join(f"`{alias.label}` → {alias.display_name}" for alias in entries)

    first = entries[0]
    second = entries[1] if len(entries) > 1 else first
    examples = "\n".join([
        f"`{prefix}iam {first.label}` - Assigns \"{first.display_name}\" role",
        f"`{prefix}iam {second.label}` - Assigns \"{second.display_name}\" role",
        f"`{prefix}iamnot {first.label}` - Removes \"{first.display_name}\" role",
    ])

    return (
        "**Bot Commands:**\n\n"
        f"`{prefix}iam <role>` - Assign yourself a role\n"
        f"`{prefix}iamnot <role>` - Remove a role from yourself\n"
        f"`{prefix}help` - Show this help message\n\n"
        "**Available Roles:**\n"
        f"{role_lines}\n\n"
        "**Examples:**\n"
        f"{examples}"
    )
