"""Configuration management for the NAS bridge CLI."""

import json
import os
import shutil
import tempfile
from pathlib import Path


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "gateway_host": os.environ.get("NAS_BRIDGE_HOST", "localhost"),
        "gateway_port": int(os.environ.get("NAS_BRIDGE_PORT", "8000")),
        "api_prefix": os.environ.get("NAS_BRIDGE_API_PREFIX", ""),
        "timeout": 30,
        "max_retries": 3,
        "retry_backoff_multiplier": 2,
        "download_dir": "",
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.nasbridge/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.nasbridge' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        config = self.DEFAULT_CONFIG.copy()

        if not self.config_path.exists():
            self.data = config
            self.save()
            return config

        try:
            with open(self.config_path, 'r') as f:
                config.update(json.load(f))
        except (json.JSONDecodeError, OSError):
            backup_path = self.config_path.with_suffix('.json.bak')
            try:
                shutil.copy(self.config_path, backup_path)
            except OSError:
                pass
        return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except OSError:
            pass

    def get_base_url(self) -> str:
        """
        Get gateway base URL including the API prefix.

        Returns:
            Base URL string (e.g., "http://localhost:8000/api")
        """
        host = self.data.get('gateway_host', 'localhost')
        port = self.data.get('gateway_port', 8000)
        prefix = self.data.get('api_prefix', '').rstrip('/')
        return f"http://{host}:{port}{prefix}"

    def get_timeout(self) -> int:
        """
        Get request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return self.data.get('timeout', 30)

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data.get('max_retries', 3),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }

    def get_download_dir(self) -> Path:
        """
        Get the directory downloads land in when no local path is given.

        Returns:
            Configured directory, or the current working directory when unset
        """
        configured = self.data.get('download_dir') or ''
        return Path(configured).expanduser() if configured else Path.cwd()
