"""
SelfRole - Discord bot for self-assignable server roles.

Members type `.iam <role>` or `.iamnot <role>` in a designated channel to
add or remove one of a small set of predefined roles.
"""

__version__ = "0.1.0"
