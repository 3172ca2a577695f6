"""Ordered chain of credential providers.

The chain asks each provider in priority order and stops at the first
Success. A Failure also stops the chain unless fail-fast is disabled, in
which case it is logged and the next provider is tried.
"""

from collections.abc import Sequence

import structlog

from registry_auth_core.exceptions import CredentialUnavailableError

from .base import CredentialProvider, Failure, NotApplicable, ProviderResult, Success

# Get logger for this module
logger = structlog.get_logger(__name__)


class CredentialProviderChain:
    """Resolve a credential from the first provider that can supply one."""

    def __init__(
        self, providers: Sequence[CredentialProvider], fail_fast: bool = True
    ) -> None:
        """Initialize the provider chain.

        Args:
            providers: Providers in priority order.
            fail_fast: Stop at the first Failure instead of trying the next provider.
        """
        self.providers = list(providers)
        self.fail_fast = fail_fast

    def resolve(self) -> ProviderResult:
        """Run the providers in order.

        Returns:
            The first Success; the first Failure; or
            Failure(CredentialUnavailableError) when every provider declined.
        """
        logger.debug(
            "RESOLVING_CREDENTIALS",
            providers=[provider.name for provider in self.providers],
        )
        first_failure: Failure | None = None

        for provider in self.providers:
            result = provider.resolve()

            if isinstance(result, Success):
                return result

            if isinstance(result, NotApplicable):
                logger.debug(
                    "PROVIDER_NOT_APPLICABLE",
                    provider=provider.name,
                    reason=result.reason,
                )
                continue

            logger.warning(
                "PROVIDER_FAILED",
                provider=provider.name,
                error=result.reason,
                error_code=result.error.error_code,
            )
            if self.fail_fast:
                return result
            if first_failure is None:
                first_failure = result

        if first_failure is not None:
            return first_failure

        logger.info("NO_CREDENTIALS_FOUND")
        return Failure(CredentialUnavailableError())
