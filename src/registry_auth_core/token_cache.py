"""Build-scoped token cache.

The cache resolves the provider chain at most once. Every later call gets the
memoized outcome, including a memoized failure. Each build runs in a fresh
process, so the cached token is never refreshed.
"""

import threading

import structlog

from registry_auth_core.credentials.base import Credential, Failure, ProviderResult
from registry_auth_core.credentials.chain import CredentialProviderChain
from registry_auth_core.exceptions import ProviderError, RegistryAuthError

# Get logger for this module
logger = structlog.get_logger(__name__)


class TokenCache:
    """Single-flight memo around a CredentialProviderChain."""

    def __init__(self, chain: CredentialProviderChain) -> None:
        """Initialize the token cache.

        Args:
            chain: The provider chain to resolve on first use.
        """
        self._chain = chain
        self._lock = threading.Lock()
        self._result: ProviderResult | None = None
        self._provider_calls = 0

    @property
    def provider_calls(self) -> int:
        """Number of times the provider chain has been resolved."""
        return self._provider_calls

    def get(self) -> Credential:
        """Return the build's credential, resolving it on first use.

        Concurrent first callers block until one of them has resolved the
        chain, then share its result.

        Returns:
            The cached credential.

        Raises:
            RegistryAuthError: The memoized resolution failure.
        """
        result = self._result
        if result is None:
            with self._lock:
                if self._result is None:
                    logger.info("INITIALIZING_CREDENTIALS")
                    self._provider_calls += 1
                    self._result = self._resolve_chain()
                result = self._result

        if isinstance(result, Failure):
            raise result.error
        return result.credential

    def peek(self) -> Credential | None:
        """Return the cached credential without resolving anything."""
        result = self._result
        if result is None or isinstance(result, Failure):
            return None
        return result.credential

    def _resolve_chain(self) -> ProviderResult:
        """Resolve the chain, turning any escaping exception into a Failure."""
        try:
            return self._chain.resolve()
        except RegistryAuthError as e:
            return Failure(e)
        except Exception as e:
            logger.exception("CREDENTIAL_RESOLUTION_CRASHED", error=str(e))
            error = ProviderError(f"Credential resolution failed: {e}")
            error.__cause__ = e
            return Failure(error)
