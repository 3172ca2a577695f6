"""gcloud CLI credential provider.

This module provides the GcloudCredentialProvider class, which asks the
locally installed Google Cloud SDK for the access token of the logged-in
account via ``gcloud config config-helper``.
"""

import json
import platform
import shutil
import subprocess
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

import structlog

from registry_auth_core.exceptions import ProviderError

from .base import Credential, Failure, NotApplicable, ProviderResult, Success

# Get logger for this module
logger = structlog.get_logger(__name__)

CONFIG_HELPER_ARGS = ("config", "config-helper", "--format=json(credential)")
TOKEN_EXPIRY_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of running an external command."""

    exit_code: int
    stdout: str
    stderr: str


class CommandExecutor(Protocol):
    """Interface for running external commands."""

    def execute(self, command: str, *args: str) -> CommandResult:
        """Run a command and capture its output.

        Raises:
            OSError: If the command cannot be started.
            subprocess.TimeoutExpired: If the command does not finish in time.
        """
        ...


class SubprocessCommandExecutor:
    """CommandExecutor backed by subprocess.run."""

    def __init__(self, timeout: float | None = 30.0) -> None:
        self.timeout = timeout

    def execute(self, command: str, *args: str) -> CommandResult:
        completed = subprocess.run(  # noqa: S603
            [command, *args],
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=False,
        )
        return CommandResult(
            exit_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )


def default_gcloud_command() -> str:
    """Return the gcloud executable name for this platform."""
    return "gcloud.cmd" if platform.system() == "Windows" else "gcloud"


def parse_config_helper_output(stdout: str) -> Credential:
    """Parse the JSON printed by ``gcloud config config-helper``.

    Args:
        stdout: Raw command output.

    Returns:
        The credential described by the output.

    Raises:
        ProviderError: If the output is not the expected JSON document.
    """
    try:
        result = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise ProviderError(
            f"Malformed response from gcloud: {e}", provider="gcloud"
        ) from e

    credential = result.get("credential") if isinstance(result, dict) else None
    if not credential:
        raise ProviderError("No credential returned from gcloud", provider="gcloud")
    if not isinstance(credential, dict):
        raise ProviderError("Malformed response from gcloud", provider="gcloud")
    token = credential.get("access_token")
    if not isinstance(token, str) or not token or "token_expiry" not in credential:
        raise ProviderError("Malformed response from gcloud", provider="gcloud")

    try:
        expiry = datetime.strptime(
            credential["token_expiry"], TOKEN_EXPIRY_FORMAT
        ).replace(tzinfo=UTC)
    except (TypeError, ValueError) as e:
        raise ProviderError(
            "Failed to parse timestamp from gcloud output", provider="gcloud"
        ) from e

    return Credential(access_token=token, expiry=expiry)


class GcloudCredentialProvider:
    """Provider that shells out to the gcloud CLI."""

    name = "gcloud"

    def __init__(
        self,
        command: str | None = None,
        executor: CommandExecutor | None = None,
        timeout: float | None = 30.0,
    ) -> None:
        """Initialize the gcloud credential provider.

        Args:
            command: gcloud executable. Defaults to the platform's gcloud name.
            executor: Command executor. Defaults to a subprocess executor.
            timeout: Seconds to wait for gcloud when using the default executor.
        """
        self.command = command or default_gcloud_command()
        self.executor = executor or SubprocessCommandExecutor(timeout=timeout)
        # Only check PATH when we spawn real processes ourselves
        self._check_path = executor is None

    def resolve(self) -> ProviderResult:
        logger.debug("TRYING_GCLOUD_CREDENTIALS", command=self.command)
        if self._check_path and shutil.which(self.command) is None:
            logger.info("GCLOUD_NOT_FOUND", command=self.command)
            return NotApplicable(f"'{self.command}' not found on PATH")

        try:
            result = self.executor.execute(self.command, *CONFIG_HELPER_ARGS)
        except FileNotFoundError:
            return NotApplicable(f"'{self.command}' not found")
        except (OSError, subprocess.SubprocessError) as e:
            return Failure(
                ProviderError(f"Failed to run gcloud: {e}", provider=self.name)
            )

        if result.exit_code != 0:
            return Failure(
                ProviderError(
                    f"gcloud exited with status: {result.exit_code}\n"
                    f"Output:\n{result.stdout}\n"
                    f"Error Output:\n{result.stderr}\n",
                    provider=self.name,
                )
            )

        try:
            credential = parse_config_helper_output(result.stdout)
        except ProviderError as e:
            return Failure(e)

        # gcloud happily prints an expired token when the login has lapsed
        if credential.is_expired():
            return Failure(
                ProviderError(
                    "AccessToken is expired - maybe run `gcloud auth login`",
                    provider=self.name,
                )
            )

        logger.info("USING_GCLOUD_CREDENTIALS")
        return Success(credential)
