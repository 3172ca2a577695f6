"""Tests for registry URL matching."""

import pytest

from registry_auth_core import RepositoryMatcher


class TestRepositoryMatcher:
    """Test RepositoryMatcher.matches."""

    @pytest.fixture
    def matcher(self) -> RepositoryMatcher:
        return RepositoryMatcher(("*.pkg.dev",))

    @pytest.mark.parametrize(
        "url",
        [
            "https://us-maven.pkg.dev/repo1",
            "https://maven.pkg.dev/my-project/my-repo",
            "artifactregistry://europe-west1-maven.pkg.dev/p/r",
            "HTTPS://US-MAVEN.PKG.DEV/repo1",
            "https://us-maven.pkg.dev:443/repo1",
        ],
    )
    def test_registry_urls_match(self, matcher: RepositoryMatcher, url: str) -> None:
        assert matcher.matches(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "https://repo.maven.apache.org",
            "https://repo.maven.apache.org/maven2",
            "https://pkg.dev.example.com/repo",
            "file:///tmp/us-maven.pkg.dev",
            "ftp://us-maven.pkg.dev/repo",
            "us-maven.pkg.dev/repo1",
        ],
    )
    def test_other_urls_do_not_match(
        self, matcher: RepositoryMatcher, url: str
    ) -> None:
        assert matcher.matches(url) is False

    @pytest.mark.parametrize(
        "url", ["", None, "https://", "http://[::1", "::::", "https://:80/x"]
    )
    def test_malformed_urls_return_false(
        self, matcher: RepositoryMatcher, url: str | None
    ) -> None:
        """Malformed input never raises."""
        assert matcher.matches(url) is False

    def test_custom_patterns(self) -> None:
        matcher = RepositoryMatcher(("maven.internal.example.com", "*.pkg.dev"))
        assert matcher.matches("https://maven.internal.example.com/releases")
        assert matcher.matches("https://asia-maven.pkg.dev/x")
        assert not matcher.matches("https://other.example.com/releases")
