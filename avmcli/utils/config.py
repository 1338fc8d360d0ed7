#!/usr/bin/env python3

import os
import sys
import yaml
from typing import Any, Dict, Optional

from ..core.errors import ConfigError
from ..utils.system import get_real_home, is_windows

# Type definitions
ConfigDict = Dict[str, Dict[str, Any]]

# Default paths
DEFAULT_CONFIG_PATH = "avm.yaml"
DEFAULT_PACKAGE = "@aws-amplify/cli"
DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"
DEFAULT_DOWNLOAD_URL = (
    "https://package.cli.amplify.aws/{version}/amplify-pkg-{platform}.tgz"
)
DEFAULT_VERSIONS_DIR = "~/.avm"
DEFAULT_BIN_DIR = "~/.amplify/bin"
DEFAULT_REQUEST_TIMEOUT = None  # Wait for the registry as long as it takes
DEFAULT_SHOW_PROGRESS = True

PATH_OPTIONS = ("versions_dir", "bin_dir")


def default_bin_name() -> str:
    return "amplify.exe" if is_windows() else "amplify"


def default_options() -> Dict[str, Any]:
    return {
        "package": DEFAULT_PACKAGE,
        "registry_url": DEFAULT_REGISTRY_URL,
        "download_url": DEFAULT_DOWNLOAD_URL,
        "versions_dir": DEFAULT_VERSIONS_DIR,
        "bin_dir": DEFAULT_BIN_DIR,
        "bin_name": default_bin_name(),
        "request_timeout": DEFAULT_REQUEST_TIMEOUT,
        "show_progress": DEFAULT_SHOW_PROGRESS,
    }


def user_config_dir() -> str:
    return os.path.join(get_real_home(), ".config/avm")


def ensure_user_config_dir() -> str:
    """Ensure the user's config directory exists"""
    config_dir = user_config_dir()
    os.makedirs(config_dir, exist_ok=True)
    return config_dir


def expand_path(path: str) -> str:
    """Expand ~ against the real home directory, even under sudo"""
    if path == "~" or path.startswith("~/") or path.startswith("~\\"):
        path = os.path.join(get_real_home(), path[2:])
    return os.path.abspath(os.path.expandvars(path))


def find_config_file(config_path: Optional[str] = None) -> Optional[str]:
    """
    Find the configuration file by checking multiple locations:
    1. Specified path from command line
    2. Current directory
    3. User config directory (~/.config/avm/)
    4. System-wide location (/etc/avm)

    Returns None when no file exists; the defaults apply in that case.
    """
    if config_path:
        if os.path.isfile(config_path):
            return config_path
        raise ConfigError(f"Config file not found at: {config_path}")

    candidates = [
        os.path.join(os.getcwd(), DEFAULT_CONFIG_PATH),
        os.path.join(user_config_dir(), DEFAULT_CONFIG_PATH),
    ]
    if not sys.platform.startswith("win"):
        candidates.append(os.path.join("/etc/avm", DEFAULT_CONFIG_PATH))

    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate

    return None


def create_default_config(config_path: str) -> ConfigDict:
    """Create a default configuration file"""
    default_config = {"options": default_options()}

    # Ensure the directory exists
    os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)

    try:
        with open(config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)
        return default_config
    except OSError as e:
        raise ConfigError(f"Failed to create config file: {e}", cause=e)


def load_config(config_path: Optional[str]) -> ConfigDict:
    """Load the configuration from the specified path, filling in defaults"""
    config: Dict[str, Any] = {}

    if config_path:
        try:
            with open(config_path, "r") as file:
                config = yaml.safe_load(file) or {}
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found at: {config_path}", cause=e)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML: {e}", cause=e)

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    options = config.get("options")
    if options is None:
        options = {}
    if not isinstance(options, dict):
        raise ConfigError(f"'options' in {config_path} must be a mapping")

    # Set default options if they don't exist
    for key, value in default_options().items():
        options.setdefault(key, value)

    for key in PATH_OPTIONS:
        options[key] = expand_path(str(options[key]))

    timeout = options["request_timeout"]
    if timeout is not None and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float))
    ):
        raise ConfigError("'request_timeout' must be a number of seconds")

    config["options"] = options
    return config
