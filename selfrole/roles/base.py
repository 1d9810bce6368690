"""
Base classes and data structures for role management.

- GuildRole: a role as it exists in a guild (id + display name)
- RoleServiceError: an external-service failure raised by a gateway
- RoleGateway: abstract capability interface over the chat platform
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field

# Lowercased markers that identify an authorization failure in error text
PERMISSION_ERROR_MARKERS = ("403", "forbidden", "missing permissions")


class GuildRole(BaseModel):
    """A role defined in a guild."""

    id: int = Field(description="Role snowflake ID")
    name: str = Field(description="Role display name")

    model_config = ConfigDict(frozen=True)


class RoleServiceError(Exception):
    """
    Raised by a RoleGateway when a call to the chat platform fails.

    Args:
        text: Human-readable error details from the platform
        status: HTTP status code, if the failure came from an HTTP response
    """

    def __init__(self, text: str, status: int | None = None) -> None:
        super().__init__(text)
        self.text = text
        self.status = status

    @property
    def is_permission_error(self) -> bool:
        """True if the platform refused the call for lack of permissions."""
        if self.status == 403:
            return True
        lowered = self.text.lower()
        return any(marker in lowered for marker in PERMISSION_ERROR_MARKERS)


class RoleGateway(ABC):
    """
    Narrow interface over the guild/member/role calls the bot needs.

    Every method is a fresh round trip; implementations must not cache.
    All methods raise RoleServiceError on failure.
    """

    @abstractmethod
    async def fetch_guild_roles(self, guild_id: int) -> list[GuildRole]:
        """Return every role defined in the guild."""
        pass

    @abstractmethod
    async def fetch_member_role_ids(self, guild_id: int, member_id: int) -> list[int]:
        """Return the IDs of the roles the member currently holds."""
        pass

    @abstractmethod
    async def add_role(self, guild_id: int, member_id: int, role_id: int) -> None:
        """Attach a role to a member."""
        pass

    @abstractmethod
    async def remove_role(self, guild_id: int, member_id: int, role_id: int) -> None:
        """Detach a role from a member."""
        pass
