"""
Configuration management for docx-cursor.

Settings come from dataclass defaults, then an optional YAML file, then
environment variables. The document model itself never reads the
environment: callers pass a config explicitly or get the defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .opc.archive import COMPRESSION_TYPES


@dataclass
class DocxCursorConfig:
    """Settings for opening and saving packages."""

    # Package member holding the main document content
    content_member: str = "word/document.xml"

    # Written in the XML declaration of the saved content part
    standalone: bool = True

    # Compression for members created on save ("deflated" or "stored")
    compression: str = "deflated"

    # Level for the CLI's log handler
    log_level: str = "WARNING"


ENV_PREFIX = "DOCX_CURSOR_"


class ConfigManager:
    """Loads and saves docx-cursor configuration."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / '.docx-cursor'
        self.config_file = self.config_dir / 'config.yaml'
        self.logger = logging.getLogger(__name__)
        self._config: Optional[DocxCursorConfig] = None

    def load_config(self) -> DocxCursorConfig:
        """Load configuration from all sources."""
        if self._config:
            return self._config

        config = DocxCursorConfig()

        if self.config_file.exists():
            config = self._merge_configs(config, self._load_from_file())

        config = self._merge_configs(config, self._load_from_env())

        self._config = config
        return config

    def _load_from_file(self) -> Dict[str, Any]:
        """Load configuration from the YAML file."""
        try:
            with open(self.config_file, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self.logger.warning(f"Could not load config file {self.config_file}: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring config file {self.config_file}: expected a mapping")
            return {}
        return data

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from DOCX_CURSOR_* environment variables."""
        env_config: Dict[str, Any] = {}

        content_member = os.getenv(f'{ENV_PREFIX}CONTENT_MEMBER')
        if content_member:
            env_config['content_member'] = content_member

        standalone = os.getenv(f'{ENV_PREFIX}STANDALONE')
        if standalone:
            env_config['standalone'] = standalone.lower() in ('true', '1', 'yes', 'on')

        compression = os.getenv(f'{ENV_PREFIX}COMPRESSION')
        if compression:
            env_config['compression'] = compression.lower()

        log_level = os.getenv(f'{ENV_PREFIX}LOG_LEVEL')
        if log_level:
            env_config['log_level'] = log_level.upper()

        return env_config

    def _merge_configs(self, base: DocxCursorConfig, override: Dict[str, Any]) -> DocxCursorConfig:
        """Apply known keys from ``override`` onto ``base``."""
        known = {f.name for f in fields(DocxCursorConfig)}

        for key, value in override.items():
            if key not in known:
                self.logger.warning(f"Ignoring unknown config key '{key}'")
                continue
            if key == 'compression' and value not in COMPRESSION_TYPES:
                self.logger.warning(f"Ignoring unknown compression '{value}'")
                continue
            if key == 'log_level':
                if not isinstance(value, str) or not isinstance(logging.getLevelName(value.upper()), int):
                    self.logger.warning(f"Ignoring unknown log level '{value}'")
                    continue
                value = value.upper()
            setattr(base, key, value)

        return base

    def save_config(self, config: DocxCursorConfig) -> None:
        """Save configuration to the YAML file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_file, 'w') as f:
                yaml.safe_dump(asdict(config), f, default_flow_style=False, indent=2)
        except OSError as e:
            self.logger.warning(f"Could not save config file {self.config_file}: {e}")

    def create_default_config(self) -> None:
        """Write a config file holding the defaults."""
        self.save_config(DocxCursorConfig())

    def get_config_info(self) -> Dict[str, Any]:
        """Summary of where configuration comes from and what it resolves to."""
        config = self.load_config()

        return {
            'config_file': str(self.config_file),
            'config_exists': self.config_file.exists(),
            'env_overrides': sorted(k for k in os.environ if k.startswith(ENV_PREFIX)),
            **asdict(config),
        }


# Global config manager instance
_config_manager: Optional[ConfigManager] = None

def get_config_manager() -> ConfigManager:
    """Get the global config manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager

def load_config() -> DocxCursorConfig:
    """Load the current configuration."""
    return get_config_manager().load_config()
