#!/usr/bin/env python3

import argparse
import os
import sys
from typing import List, Optional
from colorama import Fore, Style

from .. import __version__
from ..core.errors import AvmError
from ..core.manager import VersionManager
from ..core.operations import (
    install_version,
    use_version,
    show_bin,
    list_versions,
    show_current,
)
from ..utils.config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_PACKAGE,
    ensure_user_config_dir,
    create_default_config,
)
from ..utils.log import configure_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        prog="avm",
        description=f"AVM v{__version__} - Manage {DEFAULT_PACKAGE} versions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        help=f"Configuration file (default: search for {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--version",
        dest="show_version",
        action="store_true",
        help="Show the version and exit",
    )

    # Shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-d", "--debug", action="store_true", help="enable debug mode"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    install = subparsers.add_parser(
        "install", parents=[common], help="install a specific version"
    )
    install.add_argument("version", help="version to install")

    use = subparsers.add_parser(
        "use", parents=[common], help="use a specific version"
    )
    use.add_argument("version", help="version to use")
    use.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="install a missing version without asking",
    )

    subparsers.add_parser("bin", parents=[common], help="get the binary directory")
    subparsers.add_parser("list", parents=[common], help="list installed versions")
    subparsers.add_parser("current", parents=[common], help="show the active version")
    subparsers.add_parser(
        "init",
        parents=[common],
        help="initialize a default config file in the user's config directory",
    )

    args = parser.parse_args(argv)
    if not args.show_version and not args.command:
        parser.print_help()
        parser.exit(1)
    return args


def handle_init_command() -> None:
    """Handle the init command to create a default config file"""
    user_config_dir = ensure_user_config_dir()
    user_config_path = os.path.join(user_config_dir, DEFAULT_CONFIG_PATH)

    if os.path.isfile(user_config_path):
        print(
            f"{Fore.YELLOW}Config file already exists at {user_config_path}{Style.RESET_ALL}"
        )
        return

    create_default_config(user_config_path)
    print(f"{Fore.GREEN}Created default config file at {user_config_path}{Style.RESET_ALL}")


def report_error(error: AvmError, debug: bool = False) -> None:
    """Print a single red line, plus the underlying cause in debug mode"""
    print(f"{Fore.RED}{error.message}{Style.RESET_ALL}", file=sys.stderr)
    if debug and error.cause is not None:
        print(repr(error.cause), file=sys.stderr)


def run_cli(argv: Optional[List[str]] = None) -> None:
    """Run the command-line interface"""
    args = parse_args(argv)

    # Show version and exit if requested
    if args.show_version:
        print(f"AVM v{__version__}")
        return

    debug = getattr(args, "debug", False)
    configure_logging(debug)

    try:
        if args.command == "init":
            handle_init_command()
            return

        manager = VersionManager(args.config)

        if args.command == "install":
            install_version(manager, args.version)
        elif args.command == "use":
            use_version(manager, args.version, assume_yes=args.yes)
        elif args.command == "bin":
            show_bin(manager)
        elif args.command == "list":
            list_versions(manager)
        elif args.command == "current":
            show_current(manager)

    except AvmError as e:
        report_error(e, debug)
        sys.exit(1)
    except KeyboardInterrupt:
        print(f"\n{Fore.YELLOW}Cancelled{Style.RESET_ALL}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run_cli()
