"""Gradle-style repository configuration.

Models the Maven repositories declared by a Gradle build and attaches
registry credentials to the ones hosted on the registry.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from registry_auth_core.exceptions import ConfigurationError, RegistryAuthError
from registry_auth_core.injector import (
    CredentialInjector,
    InjectionState,
    RepositoryTarget,
)
from registry_auth_core.url import to_https_url

# Get logger for this module
logger = structlog.get_logger(__name__)

BASIC_AUTHENTICATION = "basic"


@dataclass
class PasswordCredentials:
    """Username/password credentials attached to a repository."""

    username: str
    password: str = field(repr=False)


@dataclass
class MavenRepository:
    """A Maven repository declared in a Gradle build."""

    name: str
    url: str
    credentials: PasswordCredentials | None = None
    authentication: list[str] = field(default_factory=list)


class ArtifactRegistryGradlePlugin:
    """Configure registry repositories with the build's credentials."""

    def __init__(self, injector: CredentialInjector) -> None:
        """Initialize the plugin.

        Args:
            injector: The build context's credential injector.
        """
        self.injector = injector

    def configure_repository(self, repository: MavenRepository) -> InjectionState:
        """Configure a single repository in place.

        ``artifactregistry://`` URLs are rewritten to https. Repositories that
        already carry credentials are left as declared.

        Args:
            repository: The repository to configure.

        Returns:
            The state the repository ended in.

        Raises:
            ConfigurationError: If the URL is invalid or no token could be
                obtained for a registry repository.
        """
        repository.url = to_https_url(repository.url)

        target = RepositoryTarget(url=repository.url, id=repository.name)
        if repository.credentials is not None:
            result = self.injector.skip(
                target, reason="credentials already configured"
            )
            return result.state

        try:
            result = self.injector.inject(target)
        except RegistryAuthError as e:
            raise ConfigurationError(
                f"Failed to configure credentials for repository "
                f"'{repository.name}': {e.message}",
                component="gradle",
            ) from e

        if result.credentials is not None:
            repository.credentials = PasswordCredentials(
                username=result.credentials.username,
                password=result.credentials.password,
            )
            if BASIC_AUTHENTICATION not in repository.authentication:
                repository.authentication.append(BASIC_AUTHENTICATION)
            logger.debug("REPOSITORY_CONFIGURED", repository=repository.name)
        return result.state

    def apply(self, repositories: Iterable[MavenRepository]) -> dict[str, InjectionState]:
        """Configure every repository in declaration order.

        Returns:
            The resulting state per repository name.
        """
        return {
            repository.name: self.configure_repository(repository)
            for repository in repositories
        }
