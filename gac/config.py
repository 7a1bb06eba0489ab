"""GAC configuration management using Pydantic."""

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from gac.constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_GIT_TIMEOUT_SECONDS,
)
from gac.exceptions import ConfigurationError


class GitSettings(BaseModel):
    """Settings for synchronous git invocations."""

    timeout_seconds: int = Field(default=DEFAULT_GIT_TIMEOUT_SECONDS, ge=1, le=600)


class PushSettings(BaseModel):
    """Push target. Both unset means plain ``git push``."""

    remote: str | None = None
    branch: str | None = None


class WatchSettings(BaseModel):
    """Save event watcher configuration."""

    debounce_seconds: float = Field(default=DEFAULT_DEBOUNCE_SECONDS, ge=0.0, le=10.0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="warn", pattern="^(debug|info|warn|error)$")
    directory: str | None = None
    json_output: bool = True


class GacConfig(BaseModel):
    """Complete GAC configuration."""

    auto_push_default: bool = False
    wip_on_save: bool = False
    git: GitSettings = Field(default_factory=GitSettings)
    push: PushSettings = Field(default_factory=PushSettings)
    watch: WatchSettings = Field(default_factory=WatchSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "GacConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Defaults to .gac/config.yaml

        Returns:
            GacConfig instance

        Raises:
            ConfigurationError: If the file is not valid YAML or holds invalid values
        """
        config_path = Path(DEFAULT_CONFIG_PATH) if config_path is None else Path(config_path)

        if not config_path.exists():
            return cls()

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {config_path}", details={"error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping",
                details={"type": type(data).__name__},
            )

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GacConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            GacConfig instance
        """
        try:
            return cls(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(
                "Invalid configuration", details={"errors": e.errors(include_url=False)}
            ) from e

    def save(self, config_path: str | Path | None = None) -> None:
        """Save configuration to YAML file.

        Args:
            config_path: Path to save config. Defaults to .gac/config.yaml
        """
        config_path = Path(DEFAULT_CONFIG_PATH) if config_path is None else Path(config_path)

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def push_args(self) -> list[str]:
        """Build the ``git push`` argument list from the push settings.

        A branch without a remote is ignored, since git needs both.
        """
        args = ["push"]
        if self.push.remote:
            args.append(self.push.remote)
            if self.push.branch:
                args.append(self.push.branch)
        return args
