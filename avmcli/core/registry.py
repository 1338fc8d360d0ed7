#!/usr/bin/env python3

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Union

import requests

from .errors import MalformedResponse, RegistryUnavailable

logger = logging.getLogger(__name__)

Timeout = Optional[Union[int, float]]


@dataclass(frozen=True)
class RegistryMetadata:
    """Published versions and dist-tags of one package"""

    versions: FrozenSet[str] = frozenset()
    tags: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "versions", frozenset(self.versions))
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))


class RegistryClient:
    """Reads a package record from an npm-compatible registry"""

    def __init__(self, registry_url: str, package: str, timeout: Timeout = None):
        self.registry_url = registry_url.rstrip("/")
        self.package = package
        self.timeout = timeout

    @property
    def package_url(self) -> str:
        # https://github.com/npm/registry/blob/master/docs/REGISTRY-API.md#getpackage
        return f"{self.registry_url}/{self.package}"

    def fetch_metadata(self) -> RegistryMetadata:
        """Fetch the version set and dist-tags of the package"""
        url = self.package_url
        logger.debug("Fetching package metadata from %s", url)

        try:
            response = requests.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise RegistryUnavailable(
                f"Failed to fetch {self.package} from the registry", cause=e
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse(
                f"Registry returned invalid JSON for {self.package}", cause=e
            )

        return parse_metadata(data, self.package)


def parse_metadata(data: object, package: str = "package") -> RegistryMetadata:
    """Extract versions and dist-tags from a registry package document"""
    if not isinstance(data, dict):
        raise MalformedResponse(f"Unexpected registry response for {package}")

    versions = data.get("versions")
    if not isinstance(versions, dict):
        raise MalformedResponse("Failed to get versions")

    tags = data.get("dist-tags")
    if not isinstance(tags, dict):
        raise MalformedResponse("Failed to get tags")

    metadata = RegistryMetadata(
        versions=frozenset(versions.keys()),
        tags={str(k): str(v) for k, v in tags.items() if isinstance(v, str)},
    )
    logger.debug(
        "Registry lists %d versions and tags %s",
        len(metadata.versions),
        ", ".join(sorted(metadata.tags)) or "none",
    )
    return metadata
