"""Repository URL helpers shared by the host integrations."""

from urllib.parse import urlsplit, urlunsplit

from registry_auth_core.exceptions import ConfigurationError

REGISTRY_SCHEME = "artifactregistry"


def to_https_url(url: str) -> str:
    """Rewrite an ``artifactregistry://`` URL to ``https://``.

    Other URLs are returned unchanged.

    Raises:
        ConfigurationError: If an artifactregistry URL has no host.
    """
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise ConfigurationError(f"Invalid repository URL {url}", "repository") from e
    if parts.scheme.lower() != REGISTRY_SCHEME:
        return url
    if not parts.hostname:
        raise ConfigurationError(f"Invalid repository URL {url}", "repository")
    return urlunsplit(("https", parts.netloc, parts.path, "", parts.fragment))
