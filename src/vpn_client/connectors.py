"""Connectors that actually bring the tunnel up or down.

The client only ever looks at the boolean outcome; why a connector failed is
logged, never interpreted.
"""

import logging
import random
import shlex
import subprocess
from typing import Protocol

from .config import ClientConfig
from .exceptions import ConfigurationError, ConnectorError

logger = logging.getLogger(__name__)


class Connector(Protocol):
    """Capability to establish or tear down the tunnel."""

    def start(self) -> bool:
        ...

    def stop(self) -> bool:
        ...


def run_command(cmd: list[str], timeout: float) -> subprocess.CompletedProcess:
    """
    Run a command and return the completed process.

    Args:
        cmd: Command as list of strings
        timeout: Seconds to wait before giving up

    Returns:
        CompletedProcess, whatever its return code

    Raises:
        ConnectorError: If the command cannot be run or times out
    """
    try:
        return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, check=False)
    except FileNotFoundError as e:
        raise ConnectorError(f"Command not found: {cmd[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise ConnectorError(f"Command timed out after {timeout}s: {' '.join(cmd)}") from e
    except OSError as e:
        raise ConnectorError(f"Cannot run {cmd[0]}: {e}") from e


def _split_command(command: str) -> list[str]:
    try:
        return shlex.split(command)
    except ValueError as e:
        raise ConfigurationError(f"Cannot parse command {command!r}: {e}") from e


class CommandConnector:
    """Runs configured shell commands; exit code 0 means success."""

    def __init__(self, up_command: str, down_command: str, timeout: float):
        self.up_command = _split_command(up_command)
        self.down_command = _split_command(down_command)
        self.timeout = timeout

    def start(self) -> bool:
        return self._run(self.up_command)

    def stop(self) -> bool:
        return self._run(self.down_command)

    def _run(self, cmd: list[str]) -> bool:
        if not cmd:
            raise ConnectorError("Command cannot be empty")

        logger.info(f"Running: {' '.join(cmd)}")
        result = run_command(cmd, self.timeout)
        if result.returncode != 0:
            logger.error(f"Command failed ({result.returncode}): {' '.join(cmd)}\n{result.stderr}")
            return False
        return True


class SimulatedConnector:
    """Stand-in used when no tunnel commands are configured.

    Succeeds unless the random draw falls under failure_rate.
    """

    def __init__(self, failure_rate: float = 0.0, rng: random.Random | None = None):
        self.failure_rate = failure_rate
        self.rng = rng or random.Random()

    def start(self) -> bool:
        return self._attempt("start")

    def stop(self) -> bool:
        return self._attempt("stop")

    def _attempt(self, action: str) -> bool:
        ok = self.rng.random() >= self.failure_rate
        logger.info(f"Simulated {action}: {'ok' if ok else 'failed'}")
        return ok


def build_connector(config: ClientConfig) -> Connector:
    """Pick the connector implementation for the given config."""
    if config.uses_commands:
        return CommandConnector(config.up_command, config.down_command, config.command_timeout)

    if config.up_command or config.down_command:
        raise ConfigurationError("Both up and down commands must be configured")

    logger.info("No tunnel commands configured, using simulated connector")
    return SimulatedConnector(config.failure_rate)
