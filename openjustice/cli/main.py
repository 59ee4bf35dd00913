"""
Main CLI entry point for the openjustice SDK.
"""

import argparse
import logging
import sys

from rich.logging import RichHandler

from openjustice import __version__

from .._config import ClientConfig
from .._exceptions import ConfigurationError, OpenJusticeError
from ..client import OpenJustice
from .base import Command
from .commands import COMMANDS
from .util import graceful_main


def configure_logging(verbose: bool) -> None:
    """Route SDK logs through rich when --verbose is given; stay quiet otherwise."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=verbose, show_path=False)],
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def create_client(args: argparse.Namespace) -> OpenJustice:
    """Build the client from environment variables and command-line overrides."""
    config = ClientConfig.from_env(
        api_key=args.api_key,
        api_url=args.api_url,
        dialog_flow_id=args.flow_id,
        conversation_id=args.conversation_id,
        pdf_server_url=args.pdf_server_url,
    )
    return OpenJustice(config)


def build_parser() -> tuple[argparse.ArgumentParser, dict[str, Command]]:
    parser = argparse.ArgumentParser(
        prog="openjustice",
        description="OpenJustice dialog flows from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--api-key", help="OpenJustice API key (or set OPENJUSTICE_API_KEY environment variable)"
    )
    parser.add_argument("--api-url", help="API base URL (or OPENJUSTICE_API_URL)")
    parser.add_argument("--flow-id", help="Dialog flow ID (or OPENJUSTICE_DIALOG_FLOW_ID)")
    parser.add_argument(
        "--conversation-id", help="Conversation ID (or OPENJUSTICE_CONVERSATION_ID)"
    )
    parser.add_argument(
        "--pdf-server-url", help="Document signing service URL (or OPENJUSTICE_PDF_SERVER_URL)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logs")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    commands: dict[str, Command] = {}
    for command_cls in COMMANDS:
        command = command_cls()
        subparser = subparsers.add_parser(
            command.name, aliases=command.aliases, help=command.description
        )
        command.add_arguments(subparser)
        for name in command.get_all_names():
            commands[name] = command
    return parser, commands


def _real_main(argv: list[str]) -> int:
    """Parse arguments and run the selected command."""
    parser, commands = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose)
    client = create_client(args)
    try:
        return commands[args.command].execute(args, client)
    except ConfigurationError as e:
        print(f"❌ {e}")
        print("💡 Set the OPENJUSTICE_* environment variables or pass the matching flags")
        return 1
    except (OpenJusticeError, FileNotFoundError) as e:
        print(f"❌ {e}")
        return 1
    finally:
        client.close()


def main() -> None:
    """Main CLI entry point with graceful interrupt handling."""
    code = graceful_main(_real_main, sys.argv[1:])
    raise SystemExit(code)


if __name__ == "__main__":
    main()
