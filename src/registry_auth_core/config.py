"""Configuration for registry credential resolution.

Settings are read from environment variables with the ``ARTIFACT_REGISTRY_AUTH``
prefix using environ-config.

Environment Variables:
    ARTIFACT_REGISTRY_AUTH_ACCESS_TOKEN: Static access token. Default: None
    ARTIFACT_REGISTRY_AUTH_CREDENTIALS_FILE: Path to a Google credentials JSON file. Default: None
    ARTIFACT_REGISTRY_AUTH_HOST_PATTERNS: Comma separated registry host globs. Default: "*.pkg.dev"
    ARTIFACT_REGISTRY_AUTH_USERNAME: Username sent alongside the token. Default: "oauth2accesstoken"
    ARTIFACT_REGISTRY_AUTH_FAIL_FAST: Stop the provider chain on the first failure. Default: "true"
    ARTIFACT_REGISTRY_AUTH_GCLOUD_COMMAND: gcloud executable override. Default: None
    ARTIFACT_REGISTRY_AUTH_GCLOUD_TIMEOUT: Seconds to wait for gcloud. Default: "30"
    ARTIFACT_REGISTRY_AUTH_READ_TIMEOUT: Wagon HTTP read timeout in seconds. Default: "20"
    ARTIFACT_REGISTRY_AUTH_LOG_LEVEL: Log level. Default: "INFO"
    ARTIFACT_REGISTRY_AUTH_DEV_MODE: Enable development mode logging. Default: "false"
"""

import os
from collections.abc import Mapping

import environ

DEFAULT_HOST_PATTERNS = ("*.pkg.dev",)
DEFAULT_USERNAME = "oauth2accesstoken"


def _split_patterns(value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """Parse a comma separated list of host patterns."""
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    patterns = tuple(item.strip().lower() for item in items if item.strip())
    return patterns or DEFAULT_HOST_PATTERNS


@environ.config(prefix="ARTIFACT_REGISTRY_AUTH")
class RegistryAuthConfig:
    """Configuration for the registry credential adapter."""

    access_token: str | None = environ.var(
        default=None, help="Static access token used before any other provider"
    )
    credentials_file: str | None = environ.var(
        default=None, help="Path to a Google credentials JSON file"
    )
    host_patterns: tuple[str, ...] = environ.var(
        default=",".join(DEFAULT_HOST_PATTERNS),
        converter=_split_patterns,
        help="Comma separated glob patterns for registry hosts",
    )
    username: str = environ.var(
        default=DEFAULT_USERNAME, help="Username sent alongside the access token"
    )
    fail_fast: bool = environ.bool_var(
        default=True,
        help="Stop the provider chain at the first provider failure",
    )
    gcloud_command: str | None = environ.var(
        default=None, help="gcloud executable to invoke"
    )
    gcloud_timeout: float = environ.var(
        default=30.0, converter=float, help="Seconds to wait for gcloud"
    )
    read_timeout: float = environ.var(
        default=20.0, converter=float, help="Wagon HTTP read timeout in seconds"
    )
    log_level: str = environ.var(default="INFO", help="Log level")
    dev_mode: bool = environ.bool_var(
        default=False, help="Enable development mode logging"
    )


def load_config(env: Mapping[str, str] | None = None) -> RegistryAuthConfig:
    """Create a RegistryAuthConfig from environment variables.

    Args:
        env: Mapping to read from. If None, uses os.environ.

    Returns:
        RegistryAuthConfig instance populated from the environment.
    """
    return environ.to_config(  # type: ignore[no-any-return]
        RegistryAuthConfig, environ=os.environ if env is None else env
    )
