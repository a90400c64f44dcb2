"""
Configuration Module

Loads settings from environment variables and .env file.
Every setting has a default, so the calculator runs with no
configuration at all.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv

from .parser import MAX_NUMERIC_LENGTH

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / "config" / ".env"
load_dotenv(dotenv_path=ENV_PATH)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def default_data_dir() -> Path:
    """Per-user application data directory."""
    return Path.home() / ".badcalc"


@dataclass
class Config:
    """
    Calculator configuration.

    All settings are loaded from environment variables.
    See config/.env.example for available options.
    """

    # === Storage Settings ===
    data_dir: Path = field(default_factory=default_data_dir)
    history_file_name: str = "history.txt"
    history_write_attempts: int = 1     # 1 = report the first failure
    history_retry_wait: float = 0.1     # Seconds between write attempts

    # === Input Limits ===
    max_input_length: int = 50          # Raw line cap at the prompt
    max_numeric_length: int = 50        # Cap after decimal comma normalization

    # === Logging Settings ===
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    json_logs: bool = False

    @property
    def history_path(self) -> Path:
        """Full path of the history file."""
        return self.data_dir / self.history_file_name

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        Environment variables override defaults.
        """
        def get_bool(key: str, default: bool) -> bool:
            """Helper to parse boolean env vars."""
            value = os.getenv(key, str(default)).lower()
            return value in ("true", "1", "yes")

        def get_float(key: str, default: float) -> float:
            """Helper to parse float env vars."""
            try:
                return float(os.getenv(key, default))
            except ValueError:
                return default

        def get_int(key: str, default: int) -> int:
            """Helper to parse int env vars."""
            try:
                return int(os.getenv(key, default))
            except ValueError:
                return default

        data_dir = os.getenv("BADCALC_DATA_DIR")

        return cls(
            # Storage
            data_dir=Path(data_dir).expanduser() if data_dir else default_data_dir(),
            history_file_name=os.getenv("BADCALC_HISTORY_FILE", "history.txt"),
            history_write_attempts=get_int("BADCALC_HISTORY_WRITE_ATTEMPTS", 1),
            history_retry_wait=get_float("BADCALC_HISTORY_RETRY_WAIT", 0.1),

            # Limits
            max_input_length=get_int("BADCALC_MAX_INPUT_LENGTH", 50),
            max_numeric_length=get_int("BADCALC_MAX_NUMERIC_LENGTH", 50),

            # Logging
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
            log_file=os.getenv("LOG_FILE") or None,
            json_logs=get_bool("LOG_JSON", False),
        )

    def validate(self) -> List[str]:
        """
        Validate the configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not 1 <= self.max_input_length <= MAX_NUMERIC_LENGTH:
            errors.append(f"BADCALC_MAX_INPUT_LENGTH must be between 1 and {MAX_NUMERIC_LENGTH}")

        if not 1 <= self.max_numeric_length <= MAX_NUMERIC_LENGTH:
            errors.append(f"BADCALC_MAX_NUMERIC_LENGTH must be between 1 and {MAX_NUMERIC_LENGTH}")

        if self.history_write_attempts < 1:
            errors.append("BADCALC_HISTORY_WRITE_ATTEMPTS must be at least 1")

        if self.history_retry_wait < 0:
            errors.append("BADCALC_HISTORY_RETRY_WAIT must not be negative")

        if not self.history_file_name:
            errors.append("BADCALC_HISTORY_FILE must not be empty")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}")

        return errors

    def __post_init__(self):
        """Validate after initialization."""
        self.data_dir = Path(self.data_dir)
        errors = self.validate()
        if errors:
            raise ValueError(f"Configuration errors: {errors}")


# === Convenience function ===

def load_config() -> Config:
    """
    Load configuration from environment.

    Usage:
        from badcalc.config import load_config
        config = load_config()
    """
    return Config.from_env()


# === For testing/debugging ===

if __name__ == "__main__":
    # Run this file directly to see current config
    config = load_config()
    print("Current Configuration:")
    print(f"  History File: {config.history_path}")
    print(f"  Max Input Length: {config.max_input_length}")
    print(f"  Max Numeric Length: {config.max_numeric_length}")
    print(f"  Write Attempts: {config.history_write_attempts}")
    print(f"  Log Level: {config.log_level}")
