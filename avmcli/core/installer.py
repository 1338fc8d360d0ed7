#!/usr/bin/env python3

import logging
import os
import shutil
import stat
import subprocess
import sys
import tempfile
from typing import Optional

import requests

from .errors import InstallError
from .registry import Timeout
from ..utils.system import detect_arch, detect_platform, platform_tag

logger = logging.getLogger(__name__)

DOWNLOAD_BLOCK_SIZE = 8192
PROGRESS_BAR_LENGTH = 30


class Installer:
    """Downloads and unpacks package binaries into a versions directory"""

    def __init__(
        self,
        versions_dir: str,
        bin_name: str,
        download_url: str,
        package: str,
        platform: Optional[str] = None,
        timeout: Timeout = None,
        show_progress: bool = True,
    ):
        self.versions_dir = versions_dir
        self.bin_name = bin_name
        self.download_url = download_url
        self.package = package
        self.platform = platform or platform_tag()
        self.timeout = timeout
        self.show_progress = show_progress

    def version_dir(self, version: str) -> str:
        return os.path.join(self.versions_dir, version)

    def binary_path(self, version: str) -> str:
        return os.path.join(self.version_dir(version), self.bin_name)

    def is_installed(self, version: str) -> bool:
        return os.path.isfile(self.binary_path(version))

    def asset_url(self, version: str) -> str:
        return self.download_url.format(version=version, platform=self.platform)

    def install(self, version: str) -> str:
        """Install a version if missing and return the path of its binary"""
        if self.is_installed(version):
            logger.debug("%s@%s is already installed", self.package, version)
            return self.binary_path(version)

        if self.platform is None:
            raise InstallError(
                f"No {self.package} build is published for {detect_platform()}-{detect_arch()}"
            )

        os.makedirs(self.versions_dir, exist_ok=True)
        staging_dir = tempfile.mkdtemp(prefix=f".{version}.", dir=self.versions_dir)
        archive_path = os.path.join(staging_dir, ".download.tgz")
        target = self.version_dir(version)
        installed = False

        try:
            self._download(self.asset_url(version), archive_path)
            self._extract_archive(archive_path, staging_dir)
            os.remove(archive_path)
            self._place_binary(staging_dir)

            # An empty leftover directory from an interrupted install is replaced
            if os.path.isdir(target) and not os.listdir(target):
                os.rmdir(target)
            os.rename(staging_dir, target)
            installed = True
        except (requests.RequestException, subprocess.SubprocessError, OSError) as e:
            raise InstallError(
                f"Failed to install {self.package}@{version}", cause=e
            )
        finally:
            if not installed:
                shutil.rmtree(staging_dir, ignore_errors=True)

        logger.debug("Installed %s@%s into %s", self.package, version, target)
        return self.binary_path(version)

    def _download(self, url: str, download_path: str) -> None:
        """Stream a file to disk, drawing a progress bar when the size is known"""
        logger.debug("Downloading %s", url)
        with requests.get(url, stream=True, timeout=self.timeout) as response:
            response.raise_for_status()

            total_size = content_length(response.headers)
            downloaded = 0

            with open(download_path, "wb") as f:
                for data in response.iter_content(DOWNLOAD_BLOCK_SIZE):
                    f.write(data)
                    downloaded += len(data)

                    if self.show_progress and total_size > 0:
                        done = min(downloaded, total_size)
                        progress = int(PROGRESS_BAR_LENGTH * done / total_size)
                        sys.stdout.write(
                            f"\r[{'=' * progress}{' ' * (PROGRESS_BAR_LENGTH - progress)}] {done}/{total_size} bytes "
                        )
                        sys.stdout.flush()

            if self.show_progress and total_size > 0:
                print()  # Newline after progress bar

    def _extract_archive(self, archive_path: str, destination: str) -> None:
        """Extract a gzipped tarball into destination"""
        cmd = ["tar", "xzf", archive_path, "-C", destination]
        logger.debug("Running %s", " ".join(cmd))
        subprocess.run(cmd, check=True)

    def _place_binary(self, directory: str) -> None:
        """Make sure the executable in directory is named bin_name and runnable"""
        binary = os.path.join(directory, self.bin_name)

        if not os.path.isfile(binary):
            files = [
                item
                for item in os.listdir(directory)
                if os.path.isfile(os.path.join(directory, item))
            ]
            if len(files) != 1:
                raise FileNotFoundError(
                    f"Expected a single executable in the archive, found {len(files)}"
                )
            os.rename(os.path.join(directory, files[0]), binary)

        mode = os.stat(binary).st_mode
        os.chmod(binary, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def content_length(headers) -> int:
    """Size announced by the server, 0 when absent or unparseable"""
    try:
        return max(int(headers.get("content-length", 0)), 0)
    except (TypeError, ValueError):
        return 0
