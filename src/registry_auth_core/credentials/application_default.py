"""Application Default Credentials provider.

This module provides the ApplicationDefaultCredentialProvider class, which
discovers ambient Google credentials with google-auth (service account key
referenced by GOOGLE_APPLICATION_CREDENTIALS, the gcloud well-known file, or
the metadata server) and exchanges them for an access token.
"""

import os
from collections.abc import Callable
from datetime import UTC
from typing import Any

import google.auth
import google.auth.exceptions
import google.auth.transport.requests
import structlog

from registry_auth_core.exceptions import ConfigurationError, ProviderError

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

RequestFactory = Callable[[], Any]


def credential_from_google(
    google_credentials: Any,
    provider_name: str,
    request_factory: RequestFactory = google.auth.transport.requests.Request,
) -> ProviderResult:
    """Refresh google-auth credentials and wrap the resulting token.

    Args:
        google_credentials: A google.auth.credentials.Credentials instance.
        provider_name: Name of the calling provider, used in diagnostics.
        request_factory: Callable returning a google-auth transport request.

    Returns:
        Success with the access token, or Failure(ProviderError) when the
        token could not be fetched.
    """
    try:
        google_credentials.refresh(request_factory())
    except google.auth.exceptions.GoogleAuthError as e:
        return Failure(
            ProviderError(
                f"Failed to refresh {provider_name} credentials: {e}",
                provider=provider_name,
            )
        )

    token = google_credentials.token
    if not token:
        return Failure(
            ProviderError(
                f"No access token returned for {provider_name} credentials",
                provider=provider_name,
            )
        )

    # google-auth reports expiry as a naive UTC datetime
    expiry = google_credentials.expiry
    if expiry is not None and expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=UTC)
    return Success(Credential(access_token=token, expiry=expiry))


class ApplicationDefaultCredentialProvider:
    """Provider backed by google.auth.default()."""

    name = "application_default"

    def __init__(
        self,
        scopes: tuple[str, ...] = CLOUD_PLATFORM_SCOPES,
        request_factory: RequestFactory = google.auth.transport.requests.Request,
    ) -> None:
        """Initialize the Application Default Credentials provider.

        Args:
            scopes: OAuth2 scopes requested for the token.
            request_factory: Callable returning a google-auth transport request.
        """
        self.scopes = scopes
        self.request_factory = request_factory

    def resolve(self) -> ProviderResult:
        logger.debug("TRYING_APPLICATION_DEFAULT_CREDENTIALS")
        try:
            google_credentials, project_id = google.auth.default(
                scopes=list(self.scopes)
            )
        except google.auth.exceptions.DefaultCredentialsError as e:
            # An explicitly referenced key file that cannot be loaded is a
            # configuration problem, not an absence of credentials.
            key_file = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
            if key_file:
                return Failure(
                    ConfigurationError(
                        f"Failed to load credentials from "
                        f"GOOGLE_APPLICATION_CREDENTIALS '{key_file}': {e}",
                        component=self.name,
                    )
                )
            logger.info("APPLICATION_DEFAULT_CREDENTIALS_UNAVAILABLE", error=str(e))
            return NotApplicable(str(e))
        except OSError as e:
            return Failure(
                ConfigurationError(
                    f"Unable to read Application Default Credentials: {e}",
                    component=self.name,
                )
            )

        result = credential_from_google(
            google_credentials, self.name, self.request_factory
        )
        if isinstance(result, Success):
            logger.info(
                "USING_APPLICATION_DEFAULT_CREDENTIALS", project_id=project_id
            )
        return result
