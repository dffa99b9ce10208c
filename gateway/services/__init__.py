"""Service layer for the share bridge."""

from gateway.services.file_service import FileDownload, FileService
from gateway.services.path_resolver import PathResolver
from gateway.services.range_parser import parse_range_header

__all__ = [
    "FileDownload",
    "FileService",
    "PathResolver",
    "parse_range_header",
]
