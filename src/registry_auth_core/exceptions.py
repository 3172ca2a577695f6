"""Standardized exceptions for the registry auth core module.

This module provides consistent exception types for credential resolution
and for the host integrations built on top of it.
"""


class RegistryAuthError(Exception):
    """Base exception for all registry auth errors."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        """Initialize the error with a message and optional error code.

        Args:
            message: Human-readable error message.
            error_code: Optional error code for programmatic handling.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class CredentialUnavailableError(RegistryAuthError):
    """Raised when no credential provider produced a token."""

    def __init__(self, message: str = "no credentials available") -> None:
        """Initialize credential unavailable error.

        Args:
            message: Error message describing why no credentials were found.
        """
        super().__init__(message, "CREDENTIAL_UNAVAILABLE")


class ProviderError(RegistryAuthError):
    """Raised when a provider fails to fetch a token (network, IO, CLI)."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        """Initialize provider error.

        Args:
            message: Error message describing the provider failure.
            provider: Optional name of the provider that failed.
        """
        super().__init__(message, "PROVIDER_ERROR")
        self.provider = provider


class ConfigurationError(RegistryAuthError):
    """Raised when there are configuration-related errors."""

    def __init__(self, message: str, component: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message describing the configuration issue.
            component: Optional component name where the error occurred.
        """
        super().__init__(message, "CONFIG_ERROR")
        self.component = component
