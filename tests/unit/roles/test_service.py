"""
Tests for RoleMutator.

Covers each step of the assign/remove sequence against an in-memory
gateway, including the halt-on-first-failure behaviour and the permission
error translation.
"""

from __future__ import annotations

import pytest

from selfrole.roles.base import GuildRole
from selfrole.roles.service import (
    GUILD_UNAVAILABLE,
    MEMBER_UNAVAILABLE,
    RoleAction,
    RoleMutator,
    find_role,
)

GUILD = 1000
MEMBER = 2000


class TestFindRole:
    def test_matches_case_insensitively(self):
        roles = [GuildRole(id=1, name="@everyone"), GuildRole(id=2, name="frontend developer")]
        assert find_role(roles, "Frontend Developer").id == 2

    def test_returns_first_match(self):
        roles = [GuildRole(id=1, name="Student"), GuildRole(id=2, name="STUDENT")]
        assert find_role(roles, "student").id == 1

    def test_no_match(self):
        assert find_role([GuildRole(id=1, name="Mod")], "Student") is None


class TestAssign:
    @pytest.mark.asyncio
    async def test_adds_role_and_confirms(self, gateway):
        mutator = RoleMutator(gateway)
        reply = await mutator.assign(GUILD, MEMBER, "Frontend Developer")

        assert gateway.calls_to("add_role") == [("add_role", GUILD, MEMBER, 11)]
        assert reply == "✅ Role `Frontend Developer` has been assigned to you!"

    @pytest.mark.asyncio
    async def test_second_assign_is_a_no_op(self, gateway):
        mutator = RoleMutator(gateway)
        await mutator.assign(GUILD, MEMBER, "Frontend Developer")
        reply = await mutator.assign(GUILD, MEMBER, "Frontend Developer")

        assert len(gateway.calls_to("add_role")) == 1
        assert reply.startswith("✅")
        assert "already have" in reply

    @pytest.mark.asyncio
    async def test_role_missing_from_guild_halts_before_member_fetch(self, empty_gateway):
        mutator = RoleMutator(empty_gateway)
        reply = await mutator.assign(GUILD, MEMBER, "Backend Developer")

        assert reply == "❌ Role `Backend Developer` not found."
        assert empty_gateway.calls_to("fetch_member_role_ids") == []
        assert empty_gateway.calls_to("add_role") == []

    @pytest.mark.asyncio
    async def test_guild_fetch_failure(self, gateway):
        gateway.fail("fetch_guild_roles", "404 Not Found (error code: 10004): Unknown Guild", 404)
        reply = await RoleMutator(gateway).assign(GUILD, MEMBER, "Student")

        assert reply == GUILD_UNAVAILABLE
        assert gateway.calls_to("fetch_member_role_ids") == []

    @pytest.mark.asyncio
    async def test_member_fetch_failure(self, gateway):
        gateway.fail("fetch_member_role_ids", "404 Not Found (error code: 10007): Unknown Member", 404)
        reply = await RoleMutator(gateway).assign(GUILD, MEMBER, "Student")

        assert reply == MEMBER_UNAVAILABLE
        assert gateway.calls_to("add_role") == []

    @pytest.mark.asyncio
    async def test_permission_failure_gives_hierarchy_guidance(self, gateway):
        gateway.fail("add_role", "403 Forbidden (error code: 50013): Missing Permissions", 403)
        reply = await RoleMutator(gateway).assign(GUILD, MEMBER, "Student")

        assert reply.startswith("❌ Error: Bot doesn't have permission to assign this role.")
        assert "higher than the target role" in reply

    @pytest.mark.asyncio
    async def test_permission_failure_detected_from_text_alone(self, gateway):
        gateway.fail("add_role", "Missing Permissions")
        reply = await RoleMutator(gateway).assign(GUILD, MEMBER, "Student")
        assert "doesn't have permission" in reply

    @pytest.mark.asyncio
    async def test_other_failure_includes_details(self, gateway):
        gateway.fail("add_role", "503 Service Unavailable", 503)
        reply = await RoleMutator(gateway).assign(GUILD, MEMBER, "Student")
        assert reply == "❌ Error assigning role: 503 Service Unavailable"

    @pytest.mark.asyncio
    async def test_failed_mutation_is_not_retried(self, gateway):
        gateway.fail("add_role", "503 Service Unavailable", 503)
        await RoleMutator(gateway).assign(GUILD, MEMBER, "Student")
        assert len(gateway.calls_to("add_role")) == 1


class TestRemove:
    @pytest.mark.asyncio
    async def test_removes_held_role(self, gateway):
        gateway.member_roles[(GUILD, MEMBER)] = {12}
        reply = await RoleMutator(gateway).remove(GUILD, MEMBER, "Backend Developer")

        assert gateway.calls_to("remove_role") == [("remove_role", GUILD, MEMBER, 12)]
        assert reply == "✅ Role `Backend Developer` has been removed from you!"
        assert gateway.member_roles[(GUILD, MEMBER)] == set()

    @pytest.mark.asyncio
    async def test_role_not_held_is_a_no_op(self, gateway):
        reply = await RoleMutator(gateway).remove(GUILD, MEMBER, "Mobile Developer")

        assert gateway.calls_to("remove_role") == []
        assert reply == "❌ You don't have the role `Mobile Developer`."

    @pytest.mark.asyncio
    async def test_permission_failure(self, gateway):
        gateway.member_roles[(GUILD, MEMBER)] = {15}
        gateway.fail("remove_role", "403 Forbidden", 403)
        reply = await RoleMutator(gateway).remove(GUILD, MEMBER, "Student")
        assert reply.startswith("❌ Error: Bot doesn't have permission to remove this role.")

    @pytest.mark.asyncio
    async def test_other_failure(self, gateway):
        gateway.member_roles[(GUILD, MEMBER)] = {15}
        gateway.fail("remove_role", "500 Internal Server Error", 500)
        reply = await RoleMutator(gateway).remove(GUILD, MEMBER, "Student")
        assert reply == "❌ Error removing role: 500 Internal Server Error"


def test_role_action_wording():
    assert RoleAction.ASSIGN.past_tense == "assigned to"
    assert RoleAction.REMOVE.gerund == "removing"
