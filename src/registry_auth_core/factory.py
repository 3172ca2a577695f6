"""Build context factory.

One injector is created per build context and passed by reference to the
host adapters that configure repositories.
"""

from registry_auth_core.config import RegistryAuthConfig, load_config
from registry_auth_core.credentials import CredentialProvider, create_credential_chain
from registry_auth_core.injector import CredentialInjector
from registry_auth_core.matcher import RepositoryMatcher
from registry_auth_core.token_cache import TokenCache


def create_credential_injector(
    config: RegistryAuthConfig | None = None,
    providers: list[CredentialProvider] | None = None,
) -> CredentialInjector:
    """Create a credential injector for one build.

    Args:
        config: Registry auth configuration. If None, loaded from the environment.
        providers: Providers to use instead of the built-in chain.

    Returns:
        A ready-to-use CredentialInjector.
    """
    if config is None:
        config = load_config()
    chain = create_credential_chain(config, providers)
    return CredentialInjector(
        matcher=RepositoryMatcher(config.host_patterns),
        cache=TokenCache(chain),
        username=config.username,
    )
