"""Configuration loader and validation for reconciliation settings."""

from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

import yaml
from pydantic import BaseModel, Field, field_validator

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMATS = [
    # Date-time formats
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d-%m-%Y %H:%M:%S",
    "%d-%m-%Y %H:%M",
    # Date-only formats
    "%Y-%m-%d",
    "%d-%m-%Y",
    "%d/%m/%Y",
]


class CsvFileConfig(BaseModel):
    """Configuration for one kind of CSV input file."""

    encoding: str = "utf-8"
    delimiter: str = ","
    column_mappings: dict[str, str] = Field(default_factory=dict)


class InputConfig(BaseModel):
    """Configuration for input file parsing."""

    timezone: str = "Asia/Jakarta"
    date_formats: list[str] = Field(default_factory=lambda: list(DEFAULT_DATE_FORMATS))
    system: CsvFileConfig = Field(
        default_factory=lambda: CsvFileConfig(
            column_mappings={
                "id": "trxID",
                "amount": "amount",
                "type": "type",
                "transaction_time": "transactionTime",
            }
        )
    )
    bank: CsvFileConfig = Field(
        default_factory=lambda: CsvFileConfig(
            column_mappings={
                "id": "unique_identifier",
                "amount": "amount",
                "date": "date",
            }
        )
    )

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class MatchingConfig(BaseModel):
    """Configuration for matching engine."""

    strategy: str = "exact"


class SheetConfig(BaseModel):
    """Configuration for a report sheet."""

    enabled: bool = True
    name: str


class SheetsConfig(BaseModel):
    """Configuration for all report sheets."""

    summary: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Summary"))
    unmatched_system: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched System")
    )
    unmatched_bank: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched Bank")
    )


class OutputConfig(BaseModel):
    """Configuration for output."""

    currency_prefix: str = "Rp."
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


class ReconConfig(BaseModel):
    """Main configuration model for reconciliation."""

    input: InputConfig = Field(default_factory=InputConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return ReconConfig().model_dump(exclude={"config_file_path"})


def load_config(config_path: Optional[Path] = None) -> ReconConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        ReconConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file cannot be read or fails validation
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read configuration {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration {config_path} must be a mapping")

        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return ReconConfig(**config_dict)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def generate_default_config(output_path: Path) -> None:
    """
    Generate a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    config_dict = get_default_config()

    yaml_content = """# Bank Statement Reconciliation Configuration
# Generated configuration file - customize as needed

"""
    yaml_content += yaml.dump(config_dict, default_flow_style=False, sort_keys=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
