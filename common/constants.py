"""Project-wide constants (default ports, stream sizes, timeouts)."""

DEFAULT_GATEWAY_PORT: int = 8000
DEFAULT_SMB_PORT: int = 445

STREAM_PIECE_SIZE_BYTES: int = 64 * 1024  # 64 KiB per streamed piece
UPLOAD_READ_SIZE_BYTES: int = 1024 * 1024  # 1 MiB read from the multipart spool

SHARE_CONNECTION_TIMEOUT_SECONDS: int = 60

TEMP_UPLOAD_SUFFIX: str = ".part"
