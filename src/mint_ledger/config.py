"""Configuration loading and validation for mint-ledger."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from mint_ledger.models.rules import RuleSet
from mint_ledger.models.transaction import DESCRIPTION_FIELD
from mint_ledger.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SETTINGS_PATH = Path("config") / "settings.yaml"

# Oldest and newest years a Mint export can plausibly contain
MIN_YEAR = 1900
MAX_YEAR = 9999


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


@dataclass
class OutputConfig:
    """Configuration for reports.

    Attributes:
        group_by: Field to group totals by.
        top: Number of groups shown in console reports.
        decimal_places: Number of decimal places for display.
        currency_symbol: Currency symbol for display.
    """

    group_by: str = DESCRIPTION_FIELD
    top: int = 20
    decimal_places: int = 2
    currency_symbol: str = "$"

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "OutputConfig":
        """Create from dictionary."""
        return cls(
            group_by=str(data.get("group_by", DESCRIPTION_FIELD)),
            top=int(data.get("top", 20)),  # type: ignore[arg-type]
            decimal_places=int(data.get("decimal_places", 2)),  # type: ignore[arg-type]
            currency_symbol=str(data.get("currency_symbol", "$")),
        )


@dataclass
class LoggingConfig:
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Path to log file (None disables file logging).
    """

    level: str = "WARNING"
    file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "LoggingConfig":
        """Create from dictionary."""
        log_file = data.get("file")
        return cls(
            level=str(data.get("level", "WARNING")),
            file=str(log_file) if log_file else None,
        )


@dataclass
class Config:
    """Main configuration container.

    Attributes:
        rules: Income, ignorable and credit card duplicate rules.
        target_year: Year to report on (None means it must be given on the command line).
        output: Report configuration.
        logging: Logging configuration.
    """

    rules: RuleSet = field(default_factory=RuleSet.default)
    target_year: Optional[int] = None
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def validate_year(value: object) -> int:
    """Coerce and range-check a target year.

    Raises:
        ConfigError: If the value is not a year between MIN_YEAR and MAX_YEAR.
    """
    if isinstance(value, bool):
        raise ConfigError(f"Invalid target year: {value!r}")
    try:
        year = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid target year: {value!r}") from None
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ConfigError(f"Target year {year} out of range ({MIN_YEAR}-{MAX_YEAR})")
    return year


def load_yaml_file(path: Path) -> dict[str, object]:
    """Load a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content (empty dict for an empty file).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ConfigError: If the file is invalid YAML or not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(content).__name__}")
    return content


def config_from_dict(data: dict[str, object]) -> Config:
    """Build a Config from parsed settings.

    Args:
        data: Parsed settings.yaml content.

    Returns:
        Complete Config object.

    Raises:
        ConfigError: If any section is malformed.
    """
    config = Config()

    try:
        if data.get("rules") is not None:
            rules = data["rules"]
            if not isinstance(rules, dict):
                raise ConfigError(f"'rules' must be a mapping, got {type(rules).__name__}")
            config.rules = RuleSet.from_dict(rules)

        if data.get("output") is not None:
            config.output = OutputConfig.from_dict(data["output"])  # type: ignore[arg-type]

        if data.get("logging") is not None:
            config.logging = LoggingConfig.from_dict(data["logging"])  # type: ignore[arg-type]
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigError(str(e)) from e

    if data.get("target_year") is not None:
        config.target_year = validate_year(data["target_year"])

    if config.output.top < 0:
        raise ConfigError(f"'output.top' must be non-negative, got {config.output.top}")

    return config


def load_config(settings_path: Optional[Path] = None) -> Config:
    """Load configuration from settings.yaml.

    Args:
        settings_path: Path to settings.yaml (or None to use config/settings.yaml).

    Returns:
        Complete Config object; defaults if the file is missing.

    Raises:
        ConfigError: If the file exists but is invalid.
    """
    if settings_path is None:
        settings_path = DEFAULT_SETTINGS_PATH

    if not settings_path.exists():
        logger.warning(f"Settings file not found: {settings_path}, using defaults")
        return Config()

    config = config_from_dict(load_yaml_file(settings_path))
    logger.info(f"Loaded settings from {settings_path}")
    return config
