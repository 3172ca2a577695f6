"""Credential provider chain factory.

This module builds the default provider chain from a RegistryAuthConfig:
explicit configuration first, then Application Default Credentials, then
the gcloud CLI.
"""

from registry_auth_core.config import RegistryAuthConfig

from .application_default import ApplicationDefaultCredentialProvider
from .base import CredentialProvider
from .chain import CredentialProviderChain
from .explicit import ExplicitCredentialProvider
from .gcloud import GcloudCredentialProvider


def create_default_providers(config: RegistryAuthConfig) -> list[CredentialProvider]:
    """Create the built-in providers in priority order.

    Args:
        config: Registry auth configuration.

    Returns:
        Explicit, Application Default and gcloud providers.
    """
    return [
        ExplicitCredentialProvider(
            access_token=config.access_token,
            credentials_file=config.credentials_file,
        ),
        ApplicationDefaultCredentialProvider(),
        GcloudCredentialProvider(
            command=config.gcloud_command, timeout=config.gcloud_timeout
        ),
    ]


def create_credential_chain(
    config: RegistryAuthConfig,
    providers: list[CredentialProvider] | None = None,
) -> CredentialProviderChain:
    """Create a credential provider chain.

    Args:
        config: Registry auth configuration.
        providers: Providers to use instead of the built-in ones.

    Returns:
        Configured provider chain.
    """
    if providers is None:
        providers = create_default_providers(config)
    return CredentialProviderChain(providers, fail_fast=config.fail_fast)
