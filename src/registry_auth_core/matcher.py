"""Registry URL matching."""

from collections.abc import Iterable
from fnmatch import fnmatchcase
from urllib.parse import urlsplit

from registry_auth_core.config import DEFAULT_HOST_PATTERNS

ACCEPTED_SCHEMES = frozenset({"https", "http", "artifactregistry"})


class RepositoryMatcher:
    """Decide whether a repository URL points at the registry.

    Host patterns are shell-style globs such as ``*.pkg.dev`` and are
    compared case-insensitively.
    """

    def __init__(self, host_patterns: Iterable[str] = DEFAULT_HOST_PATTERNS) -> None:
        self.host_patterns = tuple(pattern.lower() for pattern in host_patterns)

    def matches(self, url: str | None) -> bool:
        """Return True iff the URL's host matches a registry host pattern.

        Never raises; malformed URLs simply do not match.
        """
        if not url or not isinstance(url, str):
            return False
        try:
            parts = urlsplit(url.strip())
            host = parts.hostname
        except ValueError:
            return False
        if parts.scheme.lower() not in ACCEPTED_SCHEMES or not host:
            return False
        return any(fnmatchcase(host, pattern) for pattern in self.host_patterns)
