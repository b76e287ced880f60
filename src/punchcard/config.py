"""
Configuration - Handles deck tool configuration.

This module handles:
- Configuration dataclass with all options
- JSON configuration file support
- Command-line overrides
- Configuration validation
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from punchcard.core.deck import DEFAULT_DECK_NAME, LOADED_DECK_NAME
from punchcard.exceptions import ConfigError


@dataclass
class Config:
    """
    Configuration for the deck tools.

    Attributes:
        encoding: Encoding of text files read and written
        deck_extension: Extension given to deck files that are written
        accepted_extensions: Extensions recognised as deck files
        default_deck_name: Name of newly created decks
        loaded_deck_name: Name of decks loaded without a usable file name
        strip_trailing: Strip trailing blanks when decoding cards to text
        overwrite: Overwrite existing output files
        verbose: Enable verbose output
        quiet: Suppress normal output
        log_level: Logging level
    """

    encoding: str = "utf-8"
    deck_extension: str = ".deck"
    accepted_extensions: list[str] = field(default_factory=lambda: [".deck", ".bin"])
    default_deck_name: str = DEFAULT_DECK_NAME
    loaded_deck_name: str = LOADED_DECK_NAME
    strip_trailing: bool = True

    overwrite: bool = False

    # Output options
    verbose: bool = False
    quiet: bool = False
    log_level: str = "INFO"

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save_to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.write_text(json.dumps(self.to_dict(), indent=2))

    @classmethod
    def load_from_file(cls, path: Path) -> "Config":
        """
        Load configuration from JSON file.

        Raises:
            ConfigError: If the file cannot be read or is not a JSON object
        """
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot load configuration {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration {path} must hold a JSON object")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        if "accepted_extensions" in filtered_data:
            filtered_data["accepted_extensions"] = list(
                filtered_data["accepted_extensions"]
            )

        return cls(**filtered_data)

    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        try:
            "".encode(self.encoding)
        except LookupError:
            errors.append(f"Unknown text encoding: {self.encoding}")

        if not self.deck_extension.startswith("."):
            errors.append(f"Deck extension must start with '.': {self.deck_extension}")

        for ext in self.accepted_extensions:
            if not ext.startswith("."):
                errors.append(f"Accepted extension must start with '.': {ext}")

        if self.verbose and self.quiet:
            errors.append("Options verbose and quiet are mutually exclusive")

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.log_level}")

        return errors

    def is_valid(self) -> bool:
        """Check if configuration is valid."""
        return len(self.validate()) == 0


def create_default_config() -> Config:
    """Create a configuration with default values."""
    return Config()


def merge_configs(base: Config, override: Config) -> Config:
    """
    Merge two configurations, with override taking precedence.

    Only values of override that differ from the defaults replace
    values of base.

    Args:
        base: Base configuration
        override: Override configuration

    Returns:
        Merged configuration
    """
    base_dict = base.to_dict()
    override_dict = override.to_dict()
    default = create_default_config().to_dict()

    merged = {}
    for key in base_dict:
        if override_dict.get(key) != default.get(key):
            merged[key] = override_dict[key]
        else:
            merged[key] = base_dict[key]

    return Config.from_dict(merged)
