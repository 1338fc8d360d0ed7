#!/usr/bin/env python3

"""
AVM - A Python utility for managing @aws-amplify/cli versions
Features:
- Resolve exact versions, dist-tags and semver ranges against the npm registry
- Versioned installations with an atomically swapped symbolic link
- Simple YAML configuration
"""

__version__ = "0.1.0"

from .core.manager import VersionManager
from .core.operations import install_version, use_version, list_versions
from .cli.cli import run_cli
