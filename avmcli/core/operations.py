#!/usr/bin/env python3

import logging
from colorama import Fore, Style

from ..utils.prompt import confirm
from .manager import VersionManager

logger = logging.getLogger(__name__)


def install_version(manager: VersionManager, specifier: str) -> str:
    """Resolve a specifier and install that version"""
    version = manager.resolve_version(specifier)

    if manager.is_installed(version):
        print(
            f"{Fore.GREEN}{manager.package}@{version} is already installed{Style.RESET_ALL}"
        )
        return version

    print(f"📦 Installing {manager.package}@{version}...")
    manager.install(version)
    print(f"{Fore.CYAN}Installed {manager.package}@{version}{Style.RESET_ALL}")
    return version


def use_version(manager: VersionManager, specifier: str, assume_yes: bool = False) -> bool:
    """
    Resolve a specifier, install it if needed, and make it the active version.

    Returns False when the user declines to install a missing version.
    """
    version = manager.resolve_version(specifier)

    # if binary is not installed, prompt for install
    if not manager.is_installed(version):
        message = f"{manager.package}@{version} is not installed. Install now?"
        if not assume_yes and not confirm(message):
            logger.debug("Install of %s declined", version)
            return False
        print(f"📦 Installing {manager.package}@{version}...")
        manager.install(version)

    manager.switch_to(version)
    print(f"{Fore.CYAN}Now using {manager.package}@{version}{Style.RESET_ALL}")
    return True


def show_bin(manager: VersionManager) -> None:
    """Print the directory holding the active binary"""
    print(manager.bin_dir)


def list_versions(manager: VersionManager) -> None:
    """List installed versions, marking the active one"""
    versions = manager.list_installed()

    if not versions:
        print(f"{Fore.YELLOW}No versions installed{Style.RESET_ALL}")
        return

    current = manager.current_version()
    print(f"{Fore.CYAN}Installed versions:{Style.RESET_ALL}")
    for version in versions:
        if version == current:
            print(f"\t{Fore.GREEN}{version} (active){Style.RESET_ALL}")
        else:
            print(f"\t{version}")


def show_current(manager: VersionManager) -> None:
    """Print the active version"""
    current = manager.current_version()
    if current:
        print(current)
    else:
        print(f"{Fore.YELLOW}No version is active{Style.RESET_ALL}")
