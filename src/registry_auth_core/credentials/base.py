"""Base credential types and the provider protocol.

This module defines the Credential value produced by providers, the
ProviderResult variants used to drive the provider chain, and the
CredentialProvider protocol that all providers implement.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from registry_auth_core.exceptions import RegistryAuthError

CLOUD_PLATFORM_SCOPES = (
    "https://www.googleapis.com/auth/cloud-platform",
    "https://www.googleapis.com/auth/cloud-platform.read-only",
)


@dataclass(frozen=True)
class Credential:
    """An access token and its optional expiry.

    A credential without an expiry is treated as valid for the whole build.
    """

    access_token: str = field(repr=False)
    expiry: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True if the token has an expiry in the past."""
        if self.expiry is None:
            return False
        expiry = self.expiry
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return expiry <= (now or datetime.now(tz=UTC))


@dataclass(frozen=True)
class Success:
    """A provider produced a credential."""

    credential: Credential


@dataclass(frozen=True)
class NotApplicable:
    """A provider has nothing to offer; the chain moves on."""

    reason: str = ""


@dataclass(frozen=True)
class Failure:
    """A provider (or the whole chain) failed with a diagnostic."""

    error: RegistryAuthError

    @property
    def reason(self) -> str:
        return self.error.message


ProviderResult = Success | NotApplicable | Failure


class CredentialProvider(Protocol):
    """Interface for credential providers."""

    name: str

    def resolve(self) -> ProviderResult:
        """Try to produce a credential.

        Providers must not raise for expected failures; they report them as
        :class:`Failure` so the chain can decide what to do next.

        Returns:
            Success, NotApplicable or Failure.
        """
        ...
