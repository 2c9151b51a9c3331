"""CLI configuration management."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic_settings import SettingsConfigDict

from vcd_metadata.settings import VCDSettings


class CLIConfig(VCDSettings):
    """CLI configuration."""

    output_format: str = "table"  # table, json

    model_config = SettingsConfigDict(env_prefix="VCD_")


class ConfigManager:
    """Manage CLI configuration."""

    def __init__(self, config_path: Path | None = None):
        if config_path is None:
            config_path = Path.home() / ".vcd-metadata" / "config.json"
        self.config_path = config_path
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> CLIConfig:
        """Load configuration from file."""
        if not self.config_path.exists():
            return CLIConfig()

        with open(self.config_path) as f:
            data = json.load(f)
            return CLIConfig(**data)

    def save(self, config: CLIConfig) -> None:
        """Save configuration to file."""
        with open(self.config_path, "w") as f:
            json.dump(config.model_dump(exclude_none=True), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value."""
        config = self.load()
        return getattr(config, key, None)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        if key not in CLIConfig.model_fields:
            raise KeyError(key)
        config = self.load()
        data = config.model_dump()
        data[key] = value
        self.save(CLIConfig.model_validate(data))

    def delete(self, key: str) -> None:
        """Delete a configuration value (reset to default)."""
        config = self.load()
        if key in CLIConfig.model_fields:
            data = config.model_dump()
            data.pop(key)
            self.save(CLIConfig.model_validate(data))
