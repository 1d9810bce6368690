"""
Role Layer.

Alias resolution, the role gateway interface and the mutator that checks and
changes a member's roles:

    "frontend"  ->  RoleAliasTable.resolve()  ->  "Frontend Developer"
                                                        ↓
                    RoleMutator.assign(guild, member, "Frontend Developer")
                                                        ↓
                    RoleGateway (discord.py in production, a fake in tests)
"""

from selfrole.roles.aliases import RoleAlias, RoleAliasTable
from selfrole.roles.base import GuildRole, RoleGateway, RoleServiceError
from selfrole.roles.service import RoleAction, RoleMutator

__all__ = [
    "GuildRole",
    "RoleAction",
    "RoleAlias",
    "RoleAliasTable",
    "RoleGateway",
    "RoleMutator",
    "RoleServiceError",
]
