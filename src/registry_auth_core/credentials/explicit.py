"""Explicitly configured credential provider.

This module provides the ExplicitCredentialProvider class for credentials
named directly in configuration: either a static access token or the path
to a Google credentials JSON file. Supported file types are
``service_account`` keys and ``authorized_user`` files (as written by
``gcloud auth application-default login``).
"""

import json
from typing import Any

import google.auth.transport.requests
import google.oauth2.credentials
import google.oauth2.service_account
import structlog

from registry_auth_core.exceptions import ConfigurationError

from .application_default import RequestFactory, credential_from_google
from .base import (
    CLOUD_PLATFORM_SCOPES,
    Credential,
    Failure,
    NotApplicable,
    ProviderResult,
    Success,
)

# Get logger for this module
logger = structlog.get_logger(__name__)

SERVICE_ACCOUNT_TYPE = "service_account"
AUTHORIZED_USER_TYPE = "authorized_user"


def load_google_credentials(path: str, scopes: tuple[str, ...]) -> Any:
    """Load a service account or authorized user credentials file.

    Args:
        path: Path to the credentials JSON file.
        scopes: OAuth2 scopes to request.

    Returns:
        google-auth credentials for the file.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid JSON, or
            is not a supported credentials type.
    """
    try:
        with open(path, encoding="utf-8") as f:
            info = json.load(f)
    except OSError as e:
        raise ConfigurationError(
            f"Unable to read credentials file '{path}': {e}", component="explicit"
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Malformed credentials file '{path}': {e}", component="explicit"
        ) from e

    credentials_type = info.get("type") if isinstance(info, dict) else None
    try:
        if credentials_type == SERVICE_ACCOUNT_TYPE:
            return google.oauth2.service_account.Credentials.from_service_account_info(
                info, scopes=list(scopes)
            )
        if credentials_type == AUTHORIZED_USER_TYPE:
            return google.oauth2.credentials.Credentials.from_authorized_user_info(
                info, scopes=list(scopes)
            )
    except ValueError as e:
        raise ConfigurationError(
            f"Malformed credentials file '{path}': {e}", component="explicit"
        ) from e

    raise ConfigurationError(
        f"Unsupported credentials type {credentials_type!r} in '{path}'; expected "
        f"'{SERVICE_ACCOUNT_TYPE}' or '{AUTHORIZED_USER_TYPE}'",
        component="explicit",
    )


class ExplicitCredentialProvider:
    """Provider for statically configured credentials."""

    name = "explicit"

    def __init__(
        self,
        access_token: str | None = None,
        credentials_file: str | None = None,
        scopes: tuple[str, ...] = CLOUD_PLATFORM_SCOPES,
        request_factory: RequestFactory = google.auth.transport.requests.Request,
    ) -> None:
        """Initialize the explicit credential provider.

        Args:
            access_token: A static access token. Takes precedence over the file.
            credentials_file: Path to a service account or authorized user JSON file.
            scopes: OAuth2 scopes requested when loading the credentials file.
            request_factory: Callable returning a google-auth transport request.
        """
        self.access_token = access_token
        self.credentials_file = credentials_file
        self.scopes = scopes
        self.request_factory = request_factory

    def resolve(self) -> ProviderResult:
        if self.access_token is not None:
            if not self.access_token.strip():
                return Failure(
                    ConfigurationError(
                        "Configured access token is empty", component=self.name
                    )
                )
            logger.info("USING_EXPLICIT_ACCESS_TOKEN")
            return Success(Credential(access_token=self.access_token.strip()))

        if not self.credentials_file:
            return NotApplicable("no explicit credentials configured")

        try:
            google_credentials = load_google_credentials(
                self.credentials_file, self.scopes
            )
        except ConfigurationError as e:
            return Failure(e)

        logger.info("USING_EXPLICIT_CREDENTIALS_FILE", path=self.credentials_file)
        return credential_from_google(
            google_credentials, self.name, self.request_factory
        )
