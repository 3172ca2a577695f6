"""Wagon transport exceptions."""

from registry_auth_core.exceptions import RegistryAuthError


class WagonError(RegistryAuthError):
    """Base exception for wagon transport errors."""

    def __init__(self, message: str, error_code: str = "WAGON_ERROR") -> None:
        super().__init__(message, error_code)


class AuthenticationError(WagonError):
    """Raised when credentials could not be obtained while connecting."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationError(WagonError):
    """Raised when the registry rejects the request (401/403)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "AUTHORIZATION_ERROR")


class ResourceDoesNotExistError(WagonError):
    """Raised when the requested resource is not in the repository."""

    def __init__(self, message: str = "The remote resource does not exist.") -> None:
        super().__init__(message, "RESOURCE_NOT_FOUND")


class TransferFailedError(WagonError):
    """Raised when a transfer fails for any other reason."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "TRANSFER_FAILED")
