"""
SelfRole CLI entry point.

Provides command-line interface for running the bot and inspecting its
configuration.
"""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from selfrole import __version__
from selfrole.config.logging import get_logger, setup_logging
from selfrole.config.settings import Settings, load_settings
from selfrole.roles.aliases import RoleAliasTable


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="selfrole",
        description="Discord bot for self-assignable server roles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"SelfRole {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "run",
        help="Connect to Discord and start handling role commands",
    )

    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    subparsers.add_parser(
        "roles",
        help="List the configured role aliases",
    )

    return parser


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== SelfRole Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nBot Name: {settings.bot.name}")
    logger.info(f"Bot Token: {'Set' if settings.bot.token else 'Not set'}")
    logger.info(f"Command Prefix: {settings.bot.command_prefix}")
    logger.info(f"Command Channel: {settings.bot.command_channel_id or 'Not set (commands ignored)'}")
    logger.info(f"\nRole Aliases: {len(settings.roles.aliases)}")

    return 0


def cmd_roles(settings: Settings) -> int:
    """Print the alias table, one `alias -> role` pair per line."""
    table = RoleAliasTable(settings.roles.aliases)
    width = max(len(alias.key) for alias in table)
    for alias in table:
        print(f"{alias.key.ljust(width)}  ->  {alias.display_name}")
    return 0


def cmd_run(settings: Settings) -> int:
    """Start the Discord bot."""
    logger = get_logger(__name__)

    if not settings.bot.token:
        logger.error(
            "Discord bot token not set. Add BOT__TOKEN=<your-token> to your .env file."
        )
        return 1

    if settings.bot.command_channel_id is None:
        logger.warning(
            "Command channel not set (BOT__COMMAND_CHANNEL_ID). "
            "The bot will start but ignore every command."
        )

    from selfrole.bot import SelfRoleBot

    bot = SelfRoleBot(settings)
    logger.info(f"Starting {settings.bot.name}...")
    # log_handler=None: disable discord.py's default logging setup and use ours
    bot.run(settings.bot.token, log_handler=None)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except ValidationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)

    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "run":
        return cmd_run(settings)
    elif args.command == "roles":
        return cmd_roles(settings)
    else:
        # Default: show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
