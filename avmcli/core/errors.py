#!/usr/bin/env python3

from typing import Optional

VERSION_INVALID_MESSAGE = "version must be a valid semver string"
VERSION_NOT_FOUND_MESSAGE = "version not found"


class AvmError(Exception):
    """Base class for errors reported to the user"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class VersionInvalid(AvmError):
    """The version specifier is syntactically unusable"""

    def __init__(self, message: str = VERSION_INVALID_MESSAGE):
        super().__init__(message)


class VersionNotFound(AvmError):
    """No exact version, tag or range match exists in the registry"""

    def __init__(self, message: str = VERSION_NOT_FOUND_MESSAGE):
        super().__init__(message)


class RegistryError(AvmError):
    pass


class RegistryUnavailable(RegistryError):
    pass


class MalformedResponse(RegistryError):
    pass


class InstallError(AvmError):
    pass


class VersionNotInstalled(AvmError):
    pass


class SymlinkSwapFailed(AvmError):
    pass


class ConfigError(AvmError):
    pass
