#!/usr/bin/env python3

"""
Turns what the user typed into one exact version.

Resolution runs in two phases. validate_specifier() is a pure syntax check
that runs before anything touches the network. resolve() then maps the
specifier onto the registry data, in this order:

1. an exact semver string is returned as-is
2. a dist-tag name ("latest", "beta") maps to its version
3. anything else is an npm range ("11", "^2.0.0", "11.x") and picks the
   highest published version satisfying it
"""

import logging
import re
from typing import Iterable, List, Optional

import semantic_version

from .errors import VersionInvalid, VersionNotFound
from .registry import RegistryMetadata

logger = logging.getLogger(__name__)

MAX_SPECIFIER_LENGTH = 256
SPECIFIER_PATTERN = re.compile(r"^[0-9A-Za-z.+\-^~<>=*|_ ]+$")


def is_exact_version(value: str) -> bool:
    """True for a fully specified semver string with no range operators"""
    return semantic_version.validate(value)


def validate_specifier(raw: object) -> str:
    """Reject specifiers that cannot be a version, tag or range"""
    if raw is None:
        raise VersionInvalid()

    value = str(raw).strip()
    if not value or len(value) > MAX_SPECIFIER_LENGTH:
        raise VersionInvalid()
    if not SPECIFIER_PATTERN.match(value):
        raise VersionInvalid()
    return value


def _parse_versions(candidates: Iterable[str]) -> List[semantic_version.Version]:
    parsed = []
    for candidate in candidates:
        try:
            parsed.append(semantic_version.Version(candidate))
        except ValueError:
            logger.debug("Ignoring unparseable registry version %r", candidate)
    return parsed


def max_satisfying(candidates: Iterable[str], version_range: str) -> Optional[str]:
    """Highest version in candidates matching an npm range, or None"""
    try:
        npm_spec = semantic_version.NpmSpec(version_range)
    except ValueError:
        logger.debug("%r is not a valid npm range", version_range)
        return None

    best = npm_spec.select(_parse_versions(candidates))
    return str(best) if best is not None else None


def resolve(raw: str, metadata: RegistryMetadata) -> str:
    """Resolve a specifier to an exact version using registry metadata"""
    value = validate_specifier(raw)

    if is_exact_version(value):
        logger.debug("%s is an exact version", value)
        resolved = value
    elif value in metadata.tags:
        resolved = metadata.tags[value]
        logger.debug("Tag %s points at %s", value, resolved)
    else:
        resolved = max_satisfying(metadata.versions, value)
        if resolved is None:
            raise VersionNotFound()
        logger.debug("Range %s resolved to %s", value, resolved)

    if not is_exact_version(resolved):
        raise VersionInvalid()
    return resolved
