"""Credential injection for repository declarations.

The CredentialInjector is the single integration point used by the host
adapters: given a repository target it either declines (the repository is
not on the registry) or returns the username/password pair to configure.
"""

import threading
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

import structlog

from registry_auth_core.config import DEFAULT_USERNAME
from registry_auth_core.exceptions import RegistryAuthError
from registry_auth_core.matcher import RepositoryMatcher
from registry_auth_core.token_cache import TokenCache

# Get logger for this module
logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RepositoryTarget:
    """A repository declared by the build."""

    url: str
    id: str


@dataclass(frozen=True)
class RepositoryCredentials:
    """Username/password pair handed to the host build tool."""

    username: str
    password: str = field(repr=False)


class InjectionState(Enum):
    """Terminal states of a single injection."""

    SKIPPED = "skipped"
    INJECTED = "injected"
    FAILED = "failed"


@dataclass(frozen=True)
class InjectionResult:
    """Outcome of injecting credentials for one repository."""

    target: RepositoryTarget
    state: InjectionState
    credentials: RepositoryCredentials | None = None


class CredentialInjector:
    """Supply registry credentials to matching repositories."""

    def __init__(
        self,
        matcher: RepositoryMatcher,
        cache: TokenCache,
        username: str = DEFAULT_USERNAME,
    ) -> None:
        """Initialize the injector.

        Args:
            matcher: Decides which repositories belong to the registry.
            cache: Build-scoped token cache.
            username: Username sent alongside the token.
        """
        self.matcher = matcher
        self.cache = cache
        self.username = username
        self._stats: Counter[InjectionState] = Counter()
        self._stats_lock = threading.Lock()

    def inject(self, target: RepositoryTarget) -> InjectionResult:
        """Resolve credentials for a repository.

        Args:
            target: The repository declaration.

        Returns:
            A SKIPPED result when the URL is not a registry URL, otherwise an
            INJECTED result carrying the credentials.

        Raises:
            RegistryAuthError: If no token could be obtained. The repository's
                resolution must be aborted.
        """
        if not self.matcher.matches(target.url):
            return self.skip(target, reason="not a registry URL")

        try:
            credential = self.cache.get()
        except RegistryAuthError as e:
            self._record(InjectionState.FAILED)
            logger.error(
                "CREDENTIAL_INJECTION_FAILED",
                repository=target.id,
                url=target.url,
                error=e.message,
                error_code=e.error_code,
            )
            raise

        self._record(InjectionState.INJECTED)
        logger.info("CREDENTIALS_INJECTED", repository=target.id, url=target.url)
        return InjectionResult(
            target=target,
            state=InjectionState.INJECTED,
            credentials=RepositoryCredentials(
                username=self.username, password=credential.access_token
            ),
        )

    def skip(self, target: RepositoryTarget, reason: str) -> InjectionResult:
        """Record that a repository was left as declared."""
        logger.debug(
            "REPOSITORY_SKIPPED", repository=target.id, url=target.url, reason=reason
        )
        self._record(InjectionState.SKIPPED)
        return InjectionResult(target=target, state=InjectionState.SKIPPED)

    def credentials_for(self, target: RepositoryTarget) -> RepositoryCredentials | None:
        """Return credentials for the repository, or None if it is not a registry URL."""
        return self.inject(target).credentials

    def stats(self) -> dict[InjectionState, int]:
        """Return how many injections ended in each state."""
        with self._stats_lock:
            return {state: self._stats[state] for state in InjectionState}

    def _record(self, state: InjectionState) -> None:
        with self._stats_lock:
            self._stats[state] += 1
