"""Tests for credential injection."""

from pathlib import Path

import pytest

from registry_auth_core import (
    ConfigurationError,
    CredentialUnavailableError,
    InjectionState,
    RepositoryCredentials,
    RepositoryTarget,
)
from registry_auth_core.credentials import (
    ExplicitCredentialProvider,
    Failure,
    NotApplicable,
)


class TestCredentialInjector:
    """Test CredentialInjector.inject."""

    def test_registry_repository_gets_ambient_token(
        self, make_injector, ambient_provider, ambient_token: str
    ) -> None:
        injector = make_injector(ambient_provider)

        result = injector.inject(
            RepositoryTarget(url="https://us-maven.pkg.dev/repo1", id="repo1")
        )

        assert result.state is InjectionState.INJECTED
        assert result.credentials == RepositoryCredentials(
            username="oauth2accesstoken", password=ambient_token
        )
        assert injector.stats()[InjectionState.SKIPPED] == 0

    def test_foreign_repository_is_skipped_without_provider_calls(
        self, make_injector, ambient_provider
    ) -> None:
        injector = make_injector(ambient_provider)

        result = injector.inject(
            RepositoryTarget(url="https://repo.maven.apache.org", id="central")
        )

        assert result.state is InjectionState.SKIPPED
        assert result.credentials is None
        assert ambient_provider.calls == 0
        assert injector.cache.provider_calls == 0

    def test_same_repository_twice_hits_cache(
        self, make_injector, ambient_provider, ambient_token: str
    ) -> None:
        injector = make_injector(ambient_provider)
        target = RepositoryTarget(url="https://us-maven.pkg.dev/repo1", id="repo1")

        first = injector.credentials_for(target)
        second = injector.credentials_for(target)

        assert first == second
        assert first is not None
        assert first.password == ambient_token
        assert ambient_provider.calls == 1
        assert injector.stats()[InjectionState.INJECTED] == 2

    def test_no_credentials_aborts_repository(
        self, make_injector, provider_factory: type
    ) -> None:
        injector = make_injector(
            provider_factory(NotApplicable(), name="explicit"),
            provider_factory(NotApplicable(), name="application_default"),
        )

        with pytest.raises(CredentialUnavailableError):
            injector.inject(
                RepositoryTarget(url="https://us-maven.pkg.dev/repo1", id="repo1")
            )

        assert injector.stats()[InjectionState.FAILED] == 1

    def test_failure_is_surfaced_verbatim(
        self, make_injector, provider_factory: type
    ) -> None:
        error = ConfigurationError("Malformed credentials file 'key.json'")
        injector = make_injector(provider_factory(Failure(error), name="explicit"))
        target = RepositoryTarget(url="https://maven.pkg.dev/p/r", id="r")

        with pytest.raises(ConfigurationError) as exc_info:
            injector.inject(target)
        assert exc_info.value is error

        # Not retried on the next repository either
        with pytest.raises(ConfigurationError):
            injector.inject(target)
        assert injector.cache.provider_calls == 1

    def test_custom_username(self, make_injector, ambient_provider) -> None:
        injector = make_injector(ambient_provider)
        injector.username = "_token"

        credentials = injector.credentials_for(
            RepositoryTarget(url="https://maven.pkg.dev/p/r", id="r")
        )

        assert credentials is not None
        assert credentials.username == "_token"

    def test_token_not_in_repr(self, make_injector, ambient_provider, ambient_token: str) -> None:
        injector = make_injector(ambient_provider)
        result = injector.inject(RepositoryTarget(url="https://maven.pkg.dev/p/r", id="r"))
        assert ambient_token not in repr(result)

    def test_unreadable_credentials_file_fails_every_repository(
        self, make_injector, tmp_path: Path
    ) -> None:
        injector = make_injector(ExplicitCredentialProvider(credentials_file=str(tmp_path)))
        target = RepositoryTarget(url="https://maven.pkg.dev/p/r", id="r")

        for _ in range(2):
            with pytest.raises(ConfigurationError, match="Unable to read credentials file"):
                injector.inject(target)

        assert injector.cache.provider_calls == 1
        assert injector.stats()[InjectionState.FAILED] == 2

    def test_skip_is_counted(self, make_injector, ambient_provider) -> None:
        injector = make_injector(ambient_provider)
        target = RepositoryTarget(url="https://maven.pkg.dev/p/r", id="r")

        result = injector.skip(target, reason="credentials already configured")

        assert result.state is InjectionState.SKIPPED
        assert result.credentials is None
        assert injector.stats()[InjectionState.SKIPPED] == 1
        assert ambient_provider.calls == 0
