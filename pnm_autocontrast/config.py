"""Configuration management."""

from pathlib import Path
from typing import Optional, Dict, Any, Callable
import os

import yaml

from pnm_autocontrast.core.logging_utils import get_logger
from pnm_autocontrast.core.workers import default_workers

LAYOUTS = ('interleaved', 'planar')


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Configuration manager."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        self.config = self._load_defaults()

        if config_file and Path(config_file).exists():
            self.load_from_file(Path(config_file))

        # Override with environment variables
        self._load_from_env()

    def _load_defaults(self) -> Dict[str, Any]:
        """Load default configuration."""
        return {
            'threads': None,
            'coefficient': 0.0,
            'verbose': False,
            'layout': 'interleaved',
            'output': {
                'folder': 'result',
            },
            'image': {
                'extensions': ['.pnm', '.pgm', '.ppm'],
            },
        }

    def load_from_file(self, config_file: Path) -> None:
        """Load configuration from YAML file."""
        try:
            with open(config_file, 'r') as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            get_logger().warning(f"Could not load config file {config_file}: {e}")
            return

        if isinstance(file_config, dict):
            self._merge_config(self.config, file_config)
        elif file_config is not None:
            get_logger().warning(f"Ignoring config file {config_file}: top level is not a mapping")

    def _merge_config(self, base: Dict, override: Dict) -> None:
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        env_mappings: Dict[str, tuple] = {
            'PNM_AUTOCONTRAST_THREADS': (('threads',), int),
            'PNM_AUTOCONTRAST_COEFFICIENT': (('coefficient',), float),
            'PNM_AUTOCONTRAST_VERBOSE': (('verbose',), _parse_bool),
            'PNM_AUTOCONTRAST_LAYOUT': (('layout',), str),
            'PNM_AUTOCONTRAST_OUTPUT_FOLDER': (('output', 'folder'), str),
        }

        for env_var, (config_path, convert) in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                self._set_env_value(env_var, config_path, value, convert)

    def _set_env_value(self, env_var: str, config_path: tuple, value: str,
                       convert: Callable[[str], Any]) -> None:
        try:
            converted = convert(value)
        except ValueError:
            get_logger().warning(f"Ignoring {env_var}={value!r}: not a valid value")
            return
        self._set_nested(self.config, config_path, converted)

    def _set_nested(self, config: Dict, path: tuple, value: Any) -> None:
        """Set nested configuration value."""
        for key in path[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]
        config[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    @property
    def threads(self) -> int:
        """Configured worker count, falling back to hardware concurrency."""
        threads = self.get('threads')
        return default_workers() if threads is None else int(threads)

    @property
    def extensions(self) -> set:
        """Image extensions picked up in batch mode (lowercase, with dot)."""
        return {ext.lower() if ext.startswith('.') else f".{ext.lower()}"
                for ext in self.get('image.extensions', [])}


def load_config(config_file: Optional[Path] = None) -> Config:
    """
    Load configuration.

    Args:
        config_file: Path to config file (optional)

    Returns:
        Config instance
    """
    return Config(config_file)
