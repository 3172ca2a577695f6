"""Registry Auth Wagon Package.

This package contains the Maven wagon transport for the registry.
"""

from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ResourceDoesNotExistError,
    TransferFailedError,
    WagonError,
)
from .wagon import AuthenticationInfo, RegistryWagon, Repository

__all__ = [
    "AuthenticationError",
    "AuthenticationInfo",
    "AuthorizationError",
    "RegistryWagon",
    "Repository",
    "ResourceDoesNotExistError",
    "TransferFailedError",
    "WagonError",
]
