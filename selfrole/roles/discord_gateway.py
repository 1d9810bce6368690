"""
DiscordRoleGateway - RoleGateway backed by a discord.py client.

Role lists and members are fetched over HTTP on every call. Only the Guild
handle itself may come from the client's gateway cache, since it is just
the object the fetch methods hang off.

discord.py raises HTTPException for error responses but lets transport
failures (dropped connections, timeouts) through as aiohttp/OS errors;
both kinds are turned into RoleServiceError here.
"""

from __future__ import annotations

import asyncio

import aiohttp
import discord

from selfrole.roles.base import GuildRole, RoleGateway, RoleServiceError

AUDIT_REASON = "Self-assigned via role command"

TRANSPORT_ERRORS = (aiohttp.ClientError, OSError, asyncio.TimeoutError)


def _wrap(error: Exception) -> RoleServiceError:
    if isinstance(error, discord.HTTPException):
        return RoleServiceError(str(error), status=error.status)
    return RoleServiceError(str(error) or type(error).__name__)


class DiscordRoleGateway(RoleGateway):
    """
    Args:
        client: Logged-in discord.py client (usually the bot itself)
    """

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    async def fetch_guild_roles(self, guild_id: int) -> list[GuildRole]:
        try:
            guild = await self._guild(guild_id)
            roles = await guild.fetch_roles()
        except (discord.HTTPException, *TRANSPORT_ERRORS) as e:
            raise _wrap(e) from e
        return [GuildRole(id=role.id, name=role.name) for role in roles]

    async def fetch_member_role_ids(self, guild_id: int, member_id: int) -> list[int]:
        """
        IDs of the member's roles as resolved by discord.py.

        `Member.roles` maps the member's role IDs through the Guild's role
        cache, so it includes @everyone and drops any ID the cache does not
        know yet. Membership checks for roles that exist in the guild are
        unaffected.
        """
        member = await self._member(guild_id, member_id)
        return [role.id for role in member.roles]

    async def add_role(self, guild_id: int, member_id: int, role_id: int) -> None:
        member = await self._member(guild_id, member_id)
        try:
            await member.add_roles(discord.Object(id=role_id), reason=AUDIT_REASON)
        except (discord.HTTPException, *TRANSPORT_ERRORS) as e:
            raise _wrap(e) from e

    async def remove_role(self, guild_id: int, member_id: int, role_id: int) -> None:
        member = await self._member(guild_id, member_id)
        try:
            await member.remove_roles(discord.Object(id=role_id), reason=AUDIT_REASON)
        except (discord.HTTPException, *TRANSPORT_ERRORS) as e:
            raise _wrap(e) from e

    async def _guild(self, guild_id: int) -> discord.Guild:
        guild = self._client.get_guild(guild_id)
        if guild is None:
            guild = await self._client.fetch_guild(guild_id)
        return guild

    async def _member(self, guild_id: int, member_id: int) -> discord.Member:
        try:
            guild = await self._guild(guild_id)
            return await guild.fetch_member(member_id)
        except (discord.HTTPException, *TRANSPORT_ERRORS) as e:
            raise _wrap(e) from e
