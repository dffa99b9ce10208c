"""Configuration settings for the gateway server."""

import os
from dataclasses import dataclass

from common.constants import DEFAULT_GATEWAY_PORT, DEFAULT_SMB_PORT, SHARE_CONNECTION_TIMEOUT_SECONDS


GATEWAY_HOST = os.environ.get("NAS_BRIDGE_HOST", "0.0.0.0")

GATEWAY_PORT = int(os.environ.get("NAS_BRIDGE_PORT", str(DEFAULT_GATEWAY_PORT)))

API_PREFIX = os.environ.get("NAS_BRIDGE_API_PREFIX", "").rstrip("/")


@dataclass(frozen=True)
class ShareSettings:
    """
    Connection settings for the remote share.

    Loaded once at startup and never mutated afterwards.
    """
    base_url: str
    username: str = ""
    password: str = ""
    port: int = DEFAULT_SMB_PORT
    connection_timeout: int = SHARE_CONNECTION_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "ShareSettings":
        """
        Build settings from NAS_* environment variables.

        Returns:
            ShareSettings instance

        Raises:
            ValueError: If NAS_BASE_URL is not set
        """
        base_url = os.environ.get("NAS_BASE_URL", "").strip()
        if not base_url:
            raise ValueError("NAS_BASE_URL must be set (e.g. smb://nas.local/share/folder)")

        return cls(
            base_url=base_url,
            username=os.environ.get("NAS_USERNAME", ""),
            password=os.environ.get("NAS_PASSWORD", ""),
            port=int(os.environ.get("NAS_PORT", str(DEFAULT_SMB_PORT))),
            connection_timeout=int(
                os.environ.get("NAS_CONNECTION_TIMEOUT", str(SHARE_CONNECTION_TIMEOUT_SECONDS))
            ),
        )

    def __repr__(self) -> str:
        return f"ShareSettings(base_url={self.base_url!r}, username={self.username!r}, port={self.port})"
