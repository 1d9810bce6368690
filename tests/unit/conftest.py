"""
Shared fixtures for unit tests.

FakeRoleGateway keeps guild roles and member role IDs in memory, records
every call, and can be told to fail any method with a RoleServiceError.
"""

from __future__ import annotations

import pytest

from selfrole.roles.base import GuildRole, RoleGateway, RoleServiceError

GUILD_ID = 1000


class FakeRoleGateway(RoleGateway):
    def __init__(self) -> None:
        self.guild_roles: dict[int, list[GuildRole]] = {}
        self.member_roles: dict[tuple[int, int], set[int]] = {}
        self.failures: dict[str, RoleServiceError] = {}
        self.calls: list[tuple] = []

    def add_guild_role(self, role_id: int, name: str, guild_id: int = GUILD_ID) -> None:
        self.guild_roles.setdefault(guild_id, []).append(GuildRole(id=role_id, name=name))

    def fail(self, method: str, text: str, status: int | None = None) -> None:
        self.failures[method] = RoleServiceError(text, status=status)

    def calls_to(self, method: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == method]

    def _record(self, method: str, *args) -> None:
        self.calls.append((method, *args))
        if method in self.failures:
            raise self.failures[method]

    async def fetch_guild_roles(self, guild_id: int) -> list[GuildRole]:
        self._record("fetch_guild_roles", guild_id)
        return list(self.guild_roles.get(guild_id, []))

    async def fetch_member_role_ids(self, guild_id: int, member_id: int) -> list[int]:
        self._record("fetch_member_role_ids", guild_id, member_id)
        return sorted(self.member_roles.get((guild_id, member_id), set()))

    async def add_role(self, guild_id: int, member_id: int, role_id: int) -> None:
        self._record("add_role", guild_id, member_id, role_id)
        self.member_roles.setdefault((guild_id, member_id), set()).add(role_id)

    async def remove_role(self, guild_id: int, member_id: int, role_id: int) -> None:
        self._record("remove_role", guild_id, member_id, role_id)
        self.member_roles.setdefault((guild_id, member_id), set()).discard(role_id)


@pytest.fixture
def gateway() -> FakeRoleGateway:
    """Gateway for a guild that has every default developer role."""
    fake = FakeRoleGateway()
    fake.add_guild_role(11, "Frontend Developer")
    fake.add_guild_role(12, "Backend Developer")
    fake.add_guild_role(13, "Fullstack Developer")
    fake.add_guild_role(14, "Mobile Developer")
    fake.add_guild_role(15, "Student")
    return fake


@pytest.fixture
def empty_gateway() -> FakeRoleGateway:
    """Gateway for a guild with no roles at all."""
    return FakeRoleGateway()
