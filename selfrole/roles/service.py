"""
RoleMutator - checks and changes a member's role membership.

Each call walks the same sequence and stops at the first failure:

    fetch guild roles -> find target role -> fetch member roles
        -> check membership -> add/remove -> confirm

Guild and member state are fetched fresh on every call. Every outcome,
including failures from the chat platform, is returned as the text to post
back to the channel; nothing is raised to the caller.
"""

from __future__ import annotations

from enum import Enum

from selfrole.config.logging import get_logger
from selfrole.roles.base import GuildRole, RoleGateway, RoleServiceError

logger = get_logger(__name__)

GUILD_UNAVAILABLE = "Error: Could not access server information."
MEMBER_UNAVAILABLE = "Error: Could not access your member information."


class RoleAction(str, Enum):
    """Direction of a role change."""

    ASSIGN = "assign"
    REMOVE = "remove"

    @property
    def past_tense(self) -> str:
        return "assigned to" if self is RoleAction.ASSIGN else "removed from"

    @property
    def gerund(self) -> str:
        return "assigning" if self is RoleAction.ASSIGN else "removing"


def find_role(roles: list[GuildRole], role_name: str) -> GuildRole | None:
    """Return the first role whose name matches case-insensitively."""
    wanted = role_name.casefold()
    for role in roles:
        if role.name.casefold() == wanted:
            return role
    return None


class RoleMutator:
    """
    Assigns and removes roles through a RoleGateway.

    Args:
        gateway: Platform access used for every fetch and mutation
    """

    def __init__(self, gateway: RoleGateway) -> None:
        self._gateway = gateway

    async def assign(self, guild_id: int, member_id: int, role_name: str) -> str:
        """Give the member the named role. Returns the reply text."""
        return await self._apply(RoleAction.ASSIGN, guild_id, member_id, role_name)

    async def remove(self, guild_id: int, member_id: int, role_name: str) -> str:
        """Take the named role away from the member. Returns the reply text."""
        return await self._apply(RoleAction.REMOVE, guild_id, member_id, role_name)

    async def _apply(
        self,
        action: RoleAction,
        guild_id: int,
        member_id: int,
        role_name: str,
    ) -> str:
        try:
            roles = await self._gateway.fetch_guild_roles(guild_id)
        except RoleServiceError as e:
            logger.warning(f"Error getting guild {guild_id}: {e}")
            return GUILD_UNAVAILABLE

        target = find_role(roles, role_name)
        if target is None:
            return f"❌ Role `{role_name}` not found."

        try:
            held = await self._gateway.fetch_member_role_ids(guild_id, member_id)
        except RoleServiceError as e:
            logger.warning(f"Error getting member {member_id} in guild {guild_id}: {e}")
            return MEMBER_UNAVAILABLE

        has_role = target.id in held
        if action is RoleAction.ASSIGN and has_role:
            return f"✅ You already have the role `{role_name}`!"
        if action is RoleAction.REMOVE and not has_role:
            return f"❌ You don't have the role `{role_name}`."

        try:
            if action is RoleAction.ASSIGN:
                await self._gateway.add_role(guild_id, member_id, target.id)
            else:
                await self._gateway.remove_role(guild_id, member_id, target.id)
        except RoleServiceError as e:
            logger.warning(f"Error {action.gerund} role {target.name!r} for member {member_id}: {e}")
            if e.is_permission_error:
                return (
                    f"❌ Error: Bot doesn't have permission to {action.value} this role. "
                    "Please make sure the bot's role is higher than the target role "
                    "in the server settings."
                )
            return f"❌ Error {action.gerund} role: {e}"

        logger.info(f"Role {target.name!r} {action.past_tense} member {member_id} in guild {guild_id}")
        return f"✅ Role `{role_name}` has been {action.past_tense} you!"
