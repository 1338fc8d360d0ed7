#!/usr/bin/env python3

import logging
import os
from typing import Any, Dict, List, Optional

from ..utils.config import ConfigDict, find_config_file, load_config
from .errors import VersionNotInstalled
from .installer import Installer
from .registry import RegistryClient, RegistryMetadata
from .resolver import resolve, validate_specifier
from .switcher import Switcher

logger = logging.getLogger(__name__)


class VersionManager:
    """Core class wiring the registry, installer and switcher together"""

    def __init__(self, config_path: Optional[str] = None, config: Optional[ConfigDict] = None):
        if config is None:
            self.config_path = find_config_file(config_path)
            config = load_config(self.config_path)
        else:
            self.config_path = config_path
        self.config = config

        options = self.options
        self.package: str = options["package"]
        self.versions_dir: str = options["versions_dir"]
        self.bin_dir: str = options["bin_dir"]
        self.bin_name: str = options["bin_name"]

        self.registry = RegistryClient(
            options["registry_url"], self.package, timeout=options["request_timeout"]
        )
        self.installer = Installer(
            self.versions_dir,
            self.bin_name,
            options["download_url"],
            self.package,
            timeout=options["request_timeout"],
            show_progress=options["show_progress"],
        )
        self.switcher = Switcher(self.bin_dir, self.bin_name, self.versions_dir)

        logger.debug(
            "Using config %s (versions in %s, binary in %s)",
            self.config_path or "<defaults>",
            self.versions_dir,
            self.bin_dir,
        )

    @property
    def options(self) -> Dict[str, Any]:
        return self.config["options"]

    def resolve_version(self, specifier: str) -> str:
        """Validate, fetch registry data, and resolve to an exact version"""
        value = validate_specifier(specifier)
        metadata: RegistryMetadata = self.registry.fetch_metadata()
        return resolve(value, metadata)

    def is_installed(self, version: str) -> bool:
        return self.installer.is_installed(version)

    def install(self, version: str) -> str:
        return self.installer.install(version)

    def switch_to(self, version: str) -> None:
        if not self.is_installed(version):
            raise VersionNotInstalled(f"{self.package}@{version} is not installed")
        self.switcher.switch_to(version, self.installer.binary_path(version))

    def current_version(self) -> Optional[str]:
        return self.switcher.current_version()

    def list_installed(self) -> List[str]:
        """Installed versions in directory listing order"""
        if not os.path.isdir(self.versions_dir):
            return []

        return [
            item
            for item in os.listdir(self.versions_dir)
            if not item.startswith(".")
            and os.path.isdir(os.path.join(self.versions_dir, item))
        ]
