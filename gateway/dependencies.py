"""FastAPI dependencies shared by the route modules."""

from fastapi import Request

from gateway.services.file_service import FileService


def get_file_service(request: Request) -> FileService:
    """
    Return the process-wide FileService built at startup.

    Tests replace it through ``app.dependency_overrides``.
    """
    return request.app.state.file_service
