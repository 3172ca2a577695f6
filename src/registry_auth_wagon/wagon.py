"""Maven wagon transport for the registry.

The wagon obtains credentials from the build's CredentialInjector when it
connects, stores them in the wagon's authentication info, and sends the
token as a bearer header on every request.
"""

from dataclasses import dataclass, field
from email.utils import parsedate_to_datetime
from pathlib import Path
from urllib.parse import quote, urlsplit

import httpx
import structlog

from registry_auth_core.config import RegistryAuthConfig
from registry_auth_core.exceptions import RegistryAuthError
from registry_auth_core.injector import CredentialInjector, RepositoryTarget
from registry_auth_core.url import to_https_url
from registry_auth_wagon.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ResourceDoesNotExistError,
    TransferFailedError,
    WagonError,
)

# Get logger for this module
logger = structlog.get_logger(__name__)

PERMISSION_DENIED_MESSAGE = (
    "Permission denied on remote repository (or it may not exist). "
)
NO_CREDENTIALS_HINT = (
    "The request had no credentials because none were available "
    "from the environment. Ensure that either 1) You are logged into gcloud or 2) "
    "Application default credentials are setup (see "
    "https://developers.google.com/accounts/docs/application-default-credentials for "
    "more information)."
)


@dataclass(frozen=True)
class Repository:
    """A repository the wagon connects to."""

    id: str
    url: str


@dataclass
class AuthenticationInfo:
    """Credentials held by a connected wagon."""

    username: str
    password: str = field(repr=False)


class RegistryWagon:
    """HTTP wagon authenticating with the build's registry token."""

    def __init__(
        self,
        injector: CredentialInjector,
        transport: httpx.BaseTransport | None = None,
        read_timeout: float = 20.0,
    ) -> None:
        """Initialize the wagon.

        Args:
            injector: The build context's credential injector.
            transport: Optional httpx transport, e.g. a MockTransport in tests.
            read_timeout: HTTP read timeout in seconds.
        """
        self.injector = injector
        self.transport = transport
        self.read_timeout = read_timeout
        self.authentication_info: AuthenticationInfo | None = None
        self._client: httpx.Client | None = None
        self._host: str | None = None
        self._basedir = ""

    @classmethod
    def from_config(
        cls,
        injector: CredentialInjector,
        config: RegistryAuthConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> "RegistryWagon":
        """Create a wagon using the configured read timeout."""
        return cls(injector, transport=transport, read_timeout=config.read_timeout)

    @property
    def has_credentials(self) -> bool:
        return self.authentication_info is not None

    def connect(self, repository: Repository) -> None:
        """Open a connection to the repository.

        Raises:
            AuthenticationError: If the repository is on the registry but no
                token could be obtained.
            ConfigurationError: If the repository URL is invalid.
        """
        self.disconnect()
        url = to_https_url(repository.url)
        parts = urlsplit(url)
        self._host = parts.netloc
        self._basedir = parts.path.rstrip("/")

        try:
            credentials = self.injector.credentials_for(
                RepositoryTarget(url=url, id=repository.id)
            )
        except RegistryAuthError as e:
            raise AuthenticationError(
                f"Failed to obtain credentials for repository "
                f"'{repository.id}': {e.message}"
            ) from e

        headers: dict[str, str] = {}
        if credentials is not None:
            self.authentication_info = AuthenticationInfo(
                username=credentials.username, password=credentials.password
            )
            headers["Authorization"] = f"Bearer {credentials.password}"
        else:
            self.authentication_info = None

        self._client = httpx.Client(
            headers=headers,
            timeout=httpx.Timeout(10.0, read=self.read_timeout),
            transport=self.transport,
        )
        logger.info(
            "WAGON_CONNECTED",
            repository=repository.id,
            host=self._host,
            authenticated=self.has_credentials,
        )

    def disconnect(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def construct_url(self, resource_name: str) -> str:
        """Return the https URL of a resource in the connected repository."""
        path = quote(resource_name.lstrip("/"), safe="/")
        return f"https://{self._host}{self._basedir}/{path}"

    def get(self, resource_name: str, destination: Path) -> None:
        """Download a resource to a local file."""
        self.get_if_newer(resource_name, destination, 0)

    def get_if_newer(
        self, resource_name: str, destination: Path, timestamp: float
    ) -> bool:
        """Download a resource if it is newer than the given timestamp.

        Args:
            resource_name: Path of the resource inside the repository.
            destination: Local file to write.
            timestamp: POSIX timestamp; 0 always downloads.

        Returns:
            True if the resource was downloaded.
        """
        response = self._send("GET", resource_name)
        if timestamp > 0:
            last_modified = response.headers.get("Last-Modified")
            if last_modified:
                try:
                    modified = parsedate_to_datetime(last_modified).timestamp()
                except (TypeError, ValueError):
                    modified = None
                if modified is not None and modified <= timestamp:
                    return False

        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(response.content)
        logger.debug("WAGON_GET_COMPLETED", resource=resource_name)
        return True

    def put(self, source: Path, destination: str) -> None:
        """Upload a local file to the repository."""
        source = Path(source)
        try:
            content = source.read_bytes()
        except OSError as e:
            raise TransferFailedError(f"Error uploading file: {e}") from e
        self._send("PUT", destination, content=content)
        logger.debug("WAGON_PUT_COMPLETED", resource=destination)

    def resource_exists(self, resource_name: str) -> bool:
        """Check whether a resource exists with a HEAD request."""
        try:
            self._send("HEAD", resource_name)
        except ResourceDoesNotExistError:
            return False
        return True

    def _send(self, method: str, resource_name: str, **kwargs: object) -> httpx.Response:
        if self._client is None:
            raise WagonError("Wagon is not connected")
        url = self.construct_url(resource_name)
        try:
            response = self._client.request(method, url, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as e:
            raise TransferFailedError("Failed to send request to remote server.") from e

        if response.status_code in (
            httpx.codes.UNAUTHORIZED,
            httpx.codes.FORBIDDEN,
        ):
            message = PERMISSION_DENIED_MESSAGE
            if not self.has_credentials:
                message += NO_CREDENTIALS_HINT
            raise AuthorizationError(message)
        if response.status_code == httpx.codes.NOT_FOUND:
            raise ResourceDoesNotExistError()
        if response.is_error:
            raise TransferFailedError("Received an error from the remote server.")
        return response
