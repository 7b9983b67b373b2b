"""Configuration management with Pydantic.

Settings are read from a YAML file and may be overridden through
``DSAKIT_*`` environment variables. Everything has a default, so a missing
configuration file is not an error for :func:`get_config`.
"""

import os
import threading
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_NAMES = ("dsakit.yaml", "dsakit.yml")
TRUTHY_VALUES = ("true", "1", "yes", "on")


class RenderConfig(BaseModel):
    """Settings for handing DOT documents to Graphviz.

    Attributes:
        executable: Name or path of the Graphviz layout program
        output_format: Image format passed as ``-T<format>``
        keep_dot: Leave the temporary DOT file behind after rendering
    """

    executable: str = Field(
        default="dot",
        description="Graphviz executable",
        min_length=1,
    )
    output_format: str = Field(
        default="png",
        description="Graphviz output format",
        pattern=r"^[a-z0-9:_]+$",
    )
    keep_dot: bool = Field(
        default=False,
        description="Keep the temporary DOT file after rendering",
    )

    @field_validator("output_format", mode="before")
    @classmethod
    def normalize_format(cls, v: Any) -> Any:
        """Lower-case the output format so ``PNG`` and ``png`` are equivalent."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    model_config = {"str_strip_whitespace": True}


class LoggingConfig(BaseModel):
    """Logging settings.

    Attributes:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render log lines as JSON instead of console output
    """

    level: str = Field(
        default="INFO",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(
        default=True,
        description="Use JSON log rendering",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v


class DsakitConfig(BaseModel):
    """Top-level configuration.

    Attributes:
        render: Graphviz rendering settings
        logging: Logging settings
    """

    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "DsakitConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Parsed and validated DsakitConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is empty or not valid YAML
            pydantic.ValidationError: If a value fails validation
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        if not config_data:
            msg = "Configuration file is empty"
            raise ValueError(msg)
        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ValueError(msg)

        config = cls(**cls._apply_env_overrides(config_data))

        logger.info(
            "configuration_loaded",
            executable=config.render.executable,
            output_format=config.render.output_format,
            logging_level=config.logging.level,
        )
        return config

    @classmethod
    def from_env(cls) -> "DsakitConfig":
        """Build a configuration from defaults plus environment overrides."""
        return cls(**cls._apply_env_overrides({}))

    @classmethod
    def _apply_env_overrides(cls, config_data: dict) -> dict:
        """Apply ``DSAKIT_*`` environment variable overrides.

        Args:
            config_data: Base configuration dictionary

        Returns:
            Configuration dictionary with environment overrides applied
        """
        env_overrides = {
            ("render", "executable"): "DSAKIT_RENDER_EXECUTABLE",
            ("render", "output_format"): "DSAKIT_RENDER_FORMAT",
            ("render", "keep_dot"): "DSAKIT_RENDER_KEEP_DOT",
            ("logging", "level"): "DSAKIT_LOG_LEVEL",
            ("logging", "json_logs"): "DSAKIT_JSON_LOGS",
        }
        boolean_vars = {"DSAKIT_RENDER_KEEP_DOT", "DSAKIT_JSON_LOGS"}

        for path, env_var in env_overrides.items():
            value: Any = os.environ.get(env_var)
            if value is None:
                continue

            current = config_data
            for key in path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

            if env_var in boolean_vars:
                value = value.strip().lower() in TRUTHY_VALUES

            current[path[-1]] = value
            logger.debug(
                "env_override_applied",
                env_var=env_var,
                config_path=".".join(path),
            )

        return config_data


class ConfigManager:
    """Configuration manager using singleton pattern."""

    _instance: DsakitConfig | None = None
    _init_lock: threading.Lock = threading.Lock()

    @classmethod
    def load_config(cls, config_path: str | Path | None = None) -> DsakitConfig:
        """Load configuration from file.

        Args:
            config_path: Path to configuration file. If None, the default names
                in the current directory are tried and, failing that, defaults
                plus environment overrides are used.

        Returns:
            Loaded DsakitConfig instance

        Raises:
            FileNotFoundError: If an explicit config_path does not exist
        """
        if config_path is None:
            for default_name in DEFAULT_CONFIG_NAMES:
                default_path = Path(default_name)
                if default_path.exists():
                    config_path = default_path
                    break
            else:
                logger.debug("no_configuration_file_found", using="defaults")
                return DsakitConfig.from_env()

        return DsakitConfig.from_yaml(config_path)

    @classmethod
    def get_config(
        cls,
        config_path: str | Path | None = None,
        reload: bool = False,
    ) -> DsakitConfig:
        """Get the shared configuration instance.

        Args:
            config_path: Path to configuration file. Only used on first call or when reload=True.
            reload: If True, force reload configuration from file.

        Returns:
            DsakitConfig instance
        """
        if cls._instance is not None and not reload:
            return cls._instance

        with cls._init_lock:
            if cls._instance is None or reload:
                cls._instance = cls.load_config(config_path)

            return cls._instance

    @classmethod
    def reset_config(cls) -> None:
        cls._instance = None


def load_config(config_path: str | Path | None = None) -> DsakitConfig:
    """Load configuration from file."""
    return ConfigManager.load_config(config_path)


def get_config(config_path: str | Path | None = None, reload: bool = False) -> DsakitConfig:
    """Get the shared configuration instance."""
    return ConfigManager.get_config(config_path, reload)


def reset_config() -> None:
    """Reset the shared configuration instance."""
    ConfigManager.reset_config()


__all__ = [
    "ConfigManager",
    "DsakitConfig",
    "LoggingConfig",
    "RenderConfig",
    "get_config",
    "load_config",
    "reset_config",
]
