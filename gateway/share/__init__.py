"""Share client capability and its SMB implementation."""

from gateway.share.client import ShareClient, ShareReader, ShareWriter
from gateway.share.smb_client import SmbShareClient

__all__ = [
    "ShareClient",
    "ShareReader",
    "ShareWriter",
    "SmbShareClient",
]
