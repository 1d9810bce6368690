"""
Role alias table.

Maps short, human-typed keys ("frontend") to the display name of the guild
role they stand for ("Frontend Developer"). The table is built once at
startup and never mutated; iteration is always in ascending key order so
help and error text are stable.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field


class RoleAlias(BaseModel):
    """A short alias and the role display name it resolves to."""

    key: str = Field(description="Lowercase alias typed by members")
    display_name: str = Field(description="Exact (case-insensitive) guild role name")

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        """Alias rendered for humans, e.g. "frontend" -> "Frontend"."""
        return self.key.title()


def normalize_key(tokens: Iterable[str]) -> str:
    """Join argument tokens with single spaces and lowercase the result."""
    return " ".join(tokens).lower()


class RoleAliasTable:
    """
    Immutable, case-insensitive alias lookup.

    Args:
        aliases: Mapping of alias key -> role display name

    Raises:
        ValueError: If the mapping is empty, a key is blank, or two keys
            collide once lowercased
    """

    def __init__(self, aliases: Mapping[str, str]) -> None:
        if not aliases:
            raise ValueError("at least one alias is required")
        entries: dict[str, RoleAlias] = {}
        for key, display_name in aliases.items():
            normalized = normalize_key(key.split())
            if not normalized:
                raise ValueError("alias keys must not be blank")
            if normalized in entries:
                raise ValueError(f"duplicate alias {normalized!r}")
            entries[normalized] = RoleAlias(key=normalized, display_name=display_name)
        self._entries = {key: entries[key] for key in sorted(entries)}

    def resolve(self, tokens: Iterable[str]) -> str | None:
        """Return the display name for the given argument tokens, or None."""
        alias = self._entries.get(normalize_key(tokens))
        return alias.display_name if alias else None

    def labels(self) -> list[str]:
        """Title-cased alias keys in table order."""
        return [alias.label for alias in self]

    def __iter__(self) -> Iterator[RoleAlias]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RoleAliasTable({[alias.key for alias in self]!r})"
