"""Tests for the build-scoped token cache."""

import threading
from datetime import UTC, datetime, timedelta

import pytest

from registry_auth_core import CredentialUnavailableError, ProviderError, TokenCache
from registry_auth_core.credentials import (
    Credential,
    CredentialProviderChain,
    Failure,
    NotApplicable,
    Success,
)


class TestTokenCache:
    """Test memoization and single-flight resolution."""

    def test_resolves_once(self, provider_factory: type) -> None:
        provider = provider_factory(Success(Credential("tok")))
        cache = TokenCache(CredentialProviderChain([provider]))

        assert cache.peek() is None
        assert cache.get().access_token == "tok"
        assert cache.get().access_token == "tok"

        assert provider.calls == 1
        assert cache.provider_calls == 1
        assert cache.peek() == Credential("tok")

    def test_expired_token_is_not_refreshed(self, provider_factory: type) -> None:
        expired = Credential("old", expiry=datetime.now(tz=UTC) - timedelta(hours=1))
        provider = provider_factory(Success(expired))
        cache = TokenCache(CredentialProviderChain([provider]))

        assert cache.get() is cache.get()
        assert cache.get().is_expired()
        assert provider.calls == 1

    def test_failure_is_memoized(self, provider_factory: type) -> None:
        provider = provider_factory(Failure(ProviderError("network down")))
        cache = TokenCache(CredentialProviderChain([provider]))

        for _ in range(3):
            with pytest.raises(ProviderError, match="network down"):
                cache.get()

        assert provider.calls == 1
        assert cache.peek() is None

    def test_unavailable_raises(self, provider_factory: type) -> None:
        provider = provider_factory(NotApplicable())
        cache = TokenCache(CredentialProviderChain([provider]))

        with pytest.raises(CredentialUnavailableError):
            cache.get()

    def test_concurrent_first_access_is_single_flight(
        self, provider_factory: type
    ) -> None:
        provider = provider_factory(Success(Credential("shared")), delay=0.2)
        cache = TokenCache(CredentialProviderChain([provider]))
        barrier = threading.Barrier(2)
        tokens: list[str] = []

        def worker() -> None:
            barrier.wait()
            tokens.append(cache.get().access_token)

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert tokens == ["shared", "shared"]
        assert provider.calls == 1

    def test_many_threads_share_one_resolution(self, provider_factory: type) -> None:
        provider = provider_factory(Success(Credential("shared")), delay=0.05)
        cache = TokenCache(CredentialProviderChain([provider]))

        threads = [threading.Thread(target=cache.get) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert provider.calls == 1
        assert cache.provider_calls == 1

    def test_raising_provider_is_memoized_as_failure(self) -> None:
        class RaisingProvider:
            name = "explicit"
            calls = 0

            def resolve(self):
                self.calls += 1
                raise IsADirectoryError(21, "Is a directory", "/etc")

        provider = RaisingProvider()
        cache = TokenCache(CredentialProviderChain([provider]))

        for _ in range(2):
            with pytest.raises(ProviderError, match="Is a directory"):
                cache.get()

        assert provider.calls == 1
        assert cache.provider_calls == 1
        assert cache.peek() is None
