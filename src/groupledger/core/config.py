#!/usr/bin/env python3
"""
Configuration Management for the Group Ledger

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .currency import is_supported_currency, normalize_currency_code

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class LedgerConfig:
    """Ledger file and netting settings."""

    ledger_dir: Path
    default_currency: str = "USD"
    settlement_epsilon: Decimal = Decimal("0.01")


@dataclass
class ReportConfig:
    """Report output settings."""

    output_dir: Path
    include_zero_balances: bool = False


@dataclass
class Config:
    """
    Main configuration class for the group ledger.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    ledger: LedgerConfig
    report: ReportConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("GROUPLEDGER_ENV", "development"))

        # Base directories
        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_groupledger"
            base_dir = Path(os.getenv("GROUPLEDGER_DATA_DIR", str(default_test_dir)))
        else:
            base_dir = Path(os.getenv("GROUPLEDGER_DATA_DIR", "./data")).expanduser().resolve()

        data_dir = base_dir
        output_dir = data_dir / "reports"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        ledger = LedgerConfig(
            ledger_dir=data_dir / "ledgers",
            default_currency=normalize_currency_code(os.getenv("GROUPLEDGER_DEFAULT_CURRENCY", "USD")),
            settlement_epsilon=_parse_decimal(os.getenv("GROUPLEDGER_SETTLEMENT_EPSILON", "0.01")),
        )

        report = ReportConfig(
            output_dir=output_dir,
            include_zero_balances=os.getenv("GROUPLEDGER_INCLUDE_ZERO_BALANCES", "false").lower() == "true",
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            ledger=ledger,
            report=report,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [
            ("data_dir", self.data_dir),
            ("output_dir", self.output_dir),
        ]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if not is_supported_currency(self.ledger.default_currency):
            errors.append(f"Unknown default currency: {self.ledger.default_currency}")

        if self.ledger.settlement_epsilon.is_nan() or self.ledger.settlement_epsilon <= 0:
            errors.append("Settlement epsilon must be a positive number")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        if self.debug:
            logging.getLogger("groupledger").setLevel(logging.DEBUG)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                result[field_name] = {
                    nested_name: _to_plain(nested_value)
                    for nested_name, nested_value in field_value.__dict__.items()
                }
            else:
                result[field_name] = _to_plain(field_value)

        return result


def _to_plain(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    return value


def _parse_decimal(value: str) -> Decimal:
    """Parse a decimal setting; invalid text becomes NaN and fails validation."""
    try:
        return Decimal(value.strip())
    except InvalidOperation:
        return Decimal("NaN")


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            _config = None
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


# Convenience functions
def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def get_output_dir() -> Path:
    """Get the report output directory path."""
    return get_config().output_dir


def get_settlement_epsilon() -> Decimal:
    """Get the configured settlement epsilon."""
    return get_config().ledger.settlement_epsilon


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
