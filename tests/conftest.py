"""Shared fixtures for AVM tests."""

import os

import pytest

from avmcli.core.manager import VersionManager
from avmcli.core.registry import RegistryMetadata
from avmcli.utils.config import default_options


@pytest.fixture
def metadata():
    """Registry data mirroring a real @aws-amplify/cli release train."""
    return RegistryMetadata(
        versions=frozenset(["10.0.0", "11.0.0", "11.0.0-beta.8"]),
        tags={"beta": "11.0.0-beta.8", "latest": "11.0.0"},
    )


@pytest.fixture
def config(tmp_path):
    """Config with every directory root inside tmp_path."""
    options = default_options()
    options.update(
        {
            "versions_dir": str(tmp_path / "versions"),
            "bin_dir": str(tmp_path / "bin"),
            "bin_name": "amplify",
            "show_progress": False,
        }
    )
    return {"options": options}


@pytest.fixture
def manager(config):
    return VersionManager(config=config)


def make_installed(versions_dir, version, bin_name="amplify"):
    """Lay out an installed version the way the installer leaves it."""
    version_dir = os.path.join(str(versions_dir), version)
    os.makedirs(version_dir, exist_ok=True)
    binary = os.path.join(version_dir, bin_name)
    with open(binary, "w") as f:
        f.write("#!/bin/sh\necho " + version + "\n")
    os.chmod(binary, 0o755)
    return binary


@pytest.fixture
def installed(config):
    """Factory that marks versions as installed in the configured versions dir."""

    def _installed(version):
        return make_installed(config["options"]["versions_dir"], version)

    return _installed
