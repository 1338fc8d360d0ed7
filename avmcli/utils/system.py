#!/usr/bin/env python3

import os
import platform
import sys
from typing import Optional


def get_real_home() -> str:
    """Get the real user's home directory even when running with sudo"""
    if "SUDO_USER" in os.environ and os.environ.get("HOME") == "/root":
        real_user = os.environ["SUDO_USER"]
        return os.path.expanduser(f"~{real_user}")
    return os.path.expanduser("~")


def detect_platform() -> str:
    """Name the current OS the way the package download server does"""
    current_platform = sys.platform
    if current_platform.startswith("linux"):
        return "linux"
    elif current_platform.startswith("darwin"):
        return "macos"
    elif current_platform.startswith("win"):
        return "win"
    return current_platform


def detect_arch() -> str:
    """Name the current CPU architecture the way the package download server does"""
    current_arch = platform.machine().lower()
    if current_arch in ["x86_64", "amd64", "x64"]:
        return "x64"
    elif current_arch in ["aarch64", "arm64"]:
        return "arm64"
    return current_arch


# Package builds published for each (platform, arch); macOS ships one x64
# build that also runs on Apple Silicon
SUPPORTED_PLATFORMS = {
    ("linux", "x64"): "linux-x64",
    ("linux", "arm64"): "linux-arm64",
    ("macos", "x64"): "macos-x64",
    ("macos", "arm64"): "macos-x64",
    ("win", "x64"): "win-x64",
}


def platform_tag() -> Optional[str]:
    """Package build for this machine, e.g. linux-x64, or None if there is none"""
    return SUPPORTED_PLATFORMS.get((detect_platform(), detect_arch()))


def is_windows() -> bool:
    return detect_platform() == "win"
