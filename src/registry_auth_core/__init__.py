"""Registry Auth Core Package.

Resolves a cloud access token once per build and injects it into
repositories hosted on the package registry.
"""

from .config import RegistryAuthConfig, load_config
from .exceptions import (
    ConfigurationError,
    CredentialUnavailableError,
    ProviderError,
    RegistryAuthError,
)
from .factory import create_credential_injector
from .injector import (
    CredentialInjector,
    InjectionResult,
    InjectionState,
    RepositoryCredentials,
    RepositoryTarget,
)
from .matcher import RepositoryMatcher
from .observability import configure_logging
from .token_cache import TokenCache

__all__ = [
    "ConfigurationError",
    "CredentialInjector",
    "CredentialUnavailableError",
    "InjectionResult",
    "InjectionState",
    "ProviderError",
    "RegistryAuthConfig",
    "RegistryAuthError",
    "RepositoryCredentials",
    "RepositoryMatcher",
    "RepositoryTarget",
    "TokenCache",
    "configure_logging",
    "create_credential_injector",
    "load_config",
]
