"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from cli.config import Config
from cli.gateway_client import GatewayClient
from cli.models import (
    DeleteCommand,
    DownloadCommand,
    ExistsCommand,
    ListCommand,
    UploadCommand,
)
from common.logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_CONFIG_PATH = Path.home() / '.nasbridge' / 'config.json'

_client: Optional[GatewayClient] = None
_config_path: Path = DEFAULT_CONFIG_PATH


def use_config(config_path: Path) -> None:
    """Point the REPL client at another config file; takes effect on next use."""
    global _config_path
    _config_path = config_path
    close_client()


def get_client() -> GatewayClient:
    """
    Get or create the GatewayClient used by the REPL.

    Returns:
        GatewayClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new GatewayClient instance")
        config = Config(_config_path)
        _client = GatewayClient(config)
    return _client


def handle_list(cmd: ListCommand, client: Optional[GatewayClient] = None) -> str:
    """
    Handle 'ls' command.

    Args:
        cmd: ListCommand with remote_dir
        client: Optional GatewayClient for dependency injection (testing)

    Returns:
        Formatted listing or error message
    """
    logger.info(f"Executing ls command: remote_dir={cmd.remote_dir!r}")
    if client is None:
        client = get_client()
    return client.list_dir(cmd.remote_dir)


def handle_upload(cmd: UploadCommand, client: Optional[GatewayClient] = None) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with local_file, remote_dir and overwrite
        client: Optional GatewayClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    logger.info(f"Executing upload command: {cmd.local_file} -> {cmd.remote_dir!r} overwrite={cmd.overwrite}")
    if client is None:
        client = get_client()
    result = client.upload(cmd.local_file, cmd.remote_dir, cmd.overwrite)
    logger.debug("Upload command completed")
    return result


def handle_download(cmd: DownloadCommand, client: Optional[GatewayClient] = None) -> str:
    """
    Handle 'download' command.

    Args:
        cmd: DownloadCommand with remote_path and optional output_path
        client: Optional GatewayClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    logger.info(f"Executing download command: remote_path={cmd.remote_path} output_path={cmd.output_path}")
    if client is None:
        client = get_client()
    result = client.download(cmd.remote_path, cmd.output_path)
    logger.debug("Download command completed")
    return result


def handle_exists(cmd: ExistsCommand, client: Optional[GatewayClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.exists(cmd.remote_path)


def handle_delete(cmd: DeleteCommand, client: Optional[GatewayClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.delete(cmd.remote_path)


def close_client() -> None:
    """Close the shared GatewayClient, if one was created."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
