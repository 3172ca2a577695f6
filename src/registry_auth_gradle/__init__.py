"""Registry Auth Gradle Package.

This package contains the Gradle-style repository configurator.
"""

from .plugin import ArtifactRegistryGradlePlugin, MavenRepository, PasswordCredentials

__all__ = [
    "ArtifactRegistryGradlePlugin",
    "MavenRepository",
    "PasswordCredentials",
]
