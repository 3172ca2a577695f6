"""Credential providers and the provider chain."""

from .application_default import ApplicationDefaultCredentialProvider
from .base import (
    CLOUD_PLATFORM_SCOPES,
    Credential,
    CredentialProvider,
    Failure,
    NotApplicable,
    ProviderResult,
    Success,
)
from .chain import CredentialProviderChain
from .explicit import ExplicitCredentialProvider
from .factory import create_credential_chain, create_default_providers
from .gcloud import (
    CommandExecutor,
    CommandResult,
    GcloudCredentialProvider,
    SubprocessCommandExecutor,
)

__all__ = [
    "CLOUD_PLATFORM_SCOPES",
    "ApplicationDefaultCredentialProvider",
    "CommandExecutor",
    "CommandResult",
    "Credential",
    "CredentialProvider",
    "CredentialProviderChain",
    "ExplicitCredentialProvider",
    "Failure",
    "GcloudCredentialProvider",
    "NotApplicable",
    "ProviderResult",
    "SubprocessCommandExecutor",
    "Success",
    "create_credential_chain",
    "create_default_providers",
]
