#!/usr/bin/env python3

import logging
import os
from pathlib import Path
from typing import Optional

from .errors import SymlinkSwapFailed

logger = logging.getLogger(__name__)


class Switcher:
    """Owns the single active-binary symlink"""

    def __init__(self, bin_dir: str, bin_name: str, versions_dir: str):
        self.bin_dir = bin_dir
        self.bin_name = bin_name
        self.versions_dir = versions_dir

    @property
    def active_path(self) -> str:
        return os.path.join(self.bin_dir, self.bin_name)

    def switch_to(self, version: str, binary_path: str) -> None:
        """
        Point the active path at binary_path.

        The new link is created under a temporary name next to the active
        path and renamed over it, so the active path never goes missing.
        On failure the previous link is left as it was.
        """
        temp_link = os.path.join(self.bin_dir, f".{self.bin_name}.{os.getpid()}.tmp")
        logger.debug("Linking %s -> %s", self.active_path, binary_path)

        try:
            os.makedirs(self.bin_dir, exist_ok=True)
            if os.path.lexists(temp_link):
                os.unlink(temp_link)
            os.symlink(binary_path, temp_link)
            os.replace(temp_link, self.active_path)
        except OSError as e:
            if os.path.lexists(temp_link):
                try:
                    os.unlink(temp_link)
                except OSError:
                    logger.debug("Could not remove %s", temp_link)
            raise SymlinkSwapFailed("Failed to create symlink", cause=e)

        logger.debug("Active binary is now %s", version)

    def current_version(self) -> Optional[str]:
        """The version the active link points into, if any"""
        link = Path(self.active_path)
        if not link.is_symlink():
            return None

        target = Path(os.readlink(link))
        if not target.is_absolute():
            target = link.parent / target

        try:
            relative = Path(os.path.abspath(target)).relative_to(
                os.path.abspath(self.versions_dir)
            )
        except ValueError:
            return None

        return relative.parts[0] if relative.parts else None
