"""
Discord Bot Layer.

Handles message intake, command parsing and reply posting for the SelfRole
bot.
"""

from selfrole.bot.client import SelfRoleBot

__all__ = ["SelfRoleBot"]
