"""PyTest configuration and shared test fixtures.

This module provides fake credential providers and injector fixtures that
are used across multiple test files.
"""

import threading
import time
from collections.abc import Callable

import pytest

from registry_auth_core import (
    CredentialInjector,
    RegistryAuthConfig,
    RepositoryMatcher,
    TokenCache,
)
from registry_auth_core.credentials import (
    Credential,
    CredentialProviderChain,
    ProviderResult,
    Success,
)


class CountingProvider:
    """Provider returning a fixed result and counting invocations."""

    def __init__(
        self,
        result: ProviderResult,
        name: str = "counting",
        delay: float = 0.0,
    ) -> None:
        self.result = result
        self.name = name
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def resolve(self) -> ProviderResult:
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return self.result


@pytest.fixture
def ambient_token() -> str:
    return "ya29.ambient-token"


@pytest.fixture
def ambient_provider(ambient_token: str) -> CountingProvider:
    """A provider standing in for valid ambient credentials."""
    return CountingProvider(
        Success(Credential(access_token=ambient_token)), name="application_default"
    )


@pytest.fixture
def make_injector() -> Callable[..., CredentialInjector]:
    """Build an injector around the given providers."""

    def _make(
        *providers: CountingProvider,
        host_patterns: tuple[str, ...] = ("*.pkg.dev",),
        fail_fast: bool = True,
    ) -> CredentialInjector:
        chain = CredentialProviderChain(list(providers), fail_fast=fail_fast)
        return CredentialInjector(
            matcher=RepositoryMatcher(host_patterns),
            cache=TokenCache(chain),
        )

    return _make


@pytest.fixture
def config() -> RegistryAuthConfig:
    """Create a configuration with defaults only."""
    return RegistryAuthConfig()


@pytest.fixture
def provider_factory() -> type[CountingProvider]:
    """Expose CountingProvider to tests."""
    return CountingProvider
