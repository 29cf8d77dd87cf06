"""Client configuration resolved from the environment.

CLI options override environment variables, which override defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import (
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_EVENTS_FILE,
    DEFAULT_FAILURE_RATE,
    ENV_COMMAND_TIMEOUT,
    ENV_DOWN_COMMAND,
    ENV_EVENTS_FILE,
    ENV_FAILURE_RATE,
    ENV_UP_COMMAND,
)
from .exceptions import ConfigurationError


class ClientConfig(BaseModel):
    """Resolved settings for one CLI invocation."""

    model_config = ConfigDict(frozen=True)

    events_file: Path = DEFAULT_EVENTS_FILE
    up_command: str | None = None
    down_command: str | None = None
    command_timeout: float = Field(default=DEFAULT_COMMAND_TIMEOUT, gt=0)
    failure_rate: float = Field(default=DEFAULT_FAILURE_RATE, ge=0.0, le=1.0)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        events_file: Path | None = None,
    ) -> ClientConfig:
        """Build config from environment variables.

        Args:
            environ: Environment mapping (default: os.environ)
            events_file: Explicit events file, wins over the environment

        Raises:
            ConfigurationError: If a value is present but invalid
        """
        if environ is None:
            environ = os.environ

        values: dict[str, object] = {}
        if events_file is not None:
            values["events_file"] = events_file
        elif env_path := environ.get(ENV_EVENTS_FILE):
            values["events_file"] = Path(env_path).expanduser()

        if up := environ.get(ENV_UP_COMMAND):
            values["up_command"] = up
        if down := environ.get(ENV_DOWN_COMMAND):
            values["down_command"] = down
        if timeout := environ.get(ENV_COMMAND_TIMEOUT):
            values["command_timeout"] = timeout
        if rate := environ.get(ENV_FAILURE_RATE):
            values["failure_rate"] = rate

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @property
    def uses_commands(self) -> bool:
        """True when both tunnel commands are configured."""
        return bool(self.up_command and self.down_command)
