"""HTTP client for communicating with the NAS bridge gateway."""

import time
import uuid
from pathlib import Path
from typing import Optional
from urllib.parse import unquote

import httpx

from cli.config import Config
from cli.constants import TRANSFER_CHUNK_SIZE
from cli.utils import ProgressFileWrapper, clear_progress, end_progress, show_progress
from common.formatting import format_size
from common.logging_config import get_logger

logger = get_logger(__name__)


class GatewayClient:
    """HTTP client for the gateway API with retry logic and error handling."""

    def __init__(self, config: Config):
        """
        Initialize gateway client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized GatewayClient [base_url={config.get_base_url()}]")

    def _calculate_upload_timeout(self, file_size: int) -> float:
        """
        Calculate timeout for upload based on file size.

        Args:
            file_size: File size in bytes

        Returns:
            Timeout in seconds (30s base + 0.1s per MB)
        """
        size_mb = file_size / (1024 * 1024)
        return 30.0 + size_mb * 0.1

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        headers = dict(kwargs.pop('headers', None) or {})
        headers['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, headers=headers, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        if isinstance(last_exception, httpx.ConnectError):
            raise ConnectionError("Cannot connect to gateway server. Is it running?")
        raise ConnectionError("Max retries exceeded")

    def _error_code(self, response: httpx.Response) -> str:
        try:
            return response.json().get('code', 'UNKNOWN')
        except ValueError:
            return 'UNKNOWN'

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.

        Args:
            response: HTTP response object

        Returns:
            User-friendly error message
        """
        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        error_messages = {
            'NOT_FOUND': f'Not found on the share: {detail}',
            'INVALID_INPUT': f'Invalid request: {detail}',
            'INVALID_RANGE': f'Invalid byte range: {detail}',
            'INVALID_PATH': 'Path must stay inside the share base.',
            'ALREADY_EXISTS': 'The target name is already taken on the share.',
            'INTERNAL_ERROR': 'The gateway could not reach the share. Please try again later.',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            404: 'Not found',
            413: 'File too large',
            422: 'Invalid request parameters',
            500: 'Server error',
            503: 'Service unavailable',
        }

        return status_messages.get(response.status_code, detail)

    def list_dir(self, remote_dir: str) -> str:
        """
        List a share directory.

        Args:
            remote_dir: Directory relative to the share base ("" = base)

        Returns:
            Formatted listing
        """
        try:
            response = self._request_with_retry('GET', '/files', params={'relativePath': remote_dir})
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        entries = response.json()
        location = remote_dir or '/'
        if not entries:
            return f"{location} is empty."

        output = [f"{len(entries)} entr{'y' if len(entries) == 1 else 'ies'} in {location}:"]
        for entry in entries:
            modified = entry.get('dateModified') or ''
            if entry['type'] == 'Folder':
                output.append(f"  [DIR]  {entry['name']}/")
            else:
                output.append(f"  {entry['formattedSize']:>10}  {entry['name']}  {modified}".rstrip())
        return '\n'.join(output)

    def upload(self, local_file: str, remote_dir: str = "", overwrite: bool = True) -> str:
        """
        Upload a local file into a share directory.

        Args:
            local_file: Path of the file to upload
            remote_dir: Destination directory relative to the share base
            overwrite: Replace an existing file instead of storing name_N.ext

        Returns:
            Result message
        """
        path = Path(local_file).expanduser()
        if not path.is_file():
            return f"Error: File not found: {local_file}"

        file_size = path.stat().st_size
        if file_size == 0:
            return f"Error: File is empty: {local_file}"

        filename = path.name

        try:
            with ProgressFileWrapper(str(path), file_size, filename) as upload_stream:
                response = self.session.post(
                    '/files',
                    files={'file': (filename, upload_stream)},
                    data={'relativePath': remote_dir, 'overwrite': 'true' if overwrite else 'false'},
                    timeout=self._calculate_upload_timeout(file_size),
                )
        except httpx.ConnectError:
            clear_progress()
            return "Error: Cannot connect to gateway server. Is it running?"
        except httpx.TimeoutException:
            clear_progress()
            return f"Error: Upload timed out (file size: {format_size(file_size)})"

        if response.status_code != 200:
            return f"Error uploading {local_file}: {self._format_error(response)}"

        stored = unquote(response.headers.get('X-Uploaded-Path', filename))
        logger.info(f"Uploaded {local_file} as {stored}")
        return f"Uploaded: {filename} ({format_size(file_size)}) -> {stored}"

    def download(self, remote_path: str, output_path: Optional[str] = None) -> str:
        """
        Download a share file, resuming a partial local copy with a Range request.

        Args:
            remote_path: File relative to the share base
            output_path: Local file or directory (defaults to the remote name in the download dir)

        Returns:
            Result message
        """
        filename = remote_path.replace('\\', '/').rstrip('/').rsplit('/', 1)[-1]
        output_file = Path(output_path).expanduser() if output_path else self.config.get_download_dir() / filename
        if output_file.is_dir():
            output_file = output_file / filename

        offset = output_file.stat().st_size if output_file.is_file() else 0
        headers = {'Range': f'bytes={offset}-'} if offset else {}

        try:
            with self.session.stream(
                'GET',
                '/files/download',
                params={'relativePath': remote_path},
                headers=headers
            ) as response:
                if response.status_code == 206:
                    mode = 'ab'
                    total = offset + int(response.headers.get('Content-Length', 0))
                    logger.info(f"Resuming {remote_path} at byte {offset} ({response.headers.get('Content-Range')})")
                elif response.status_code == 200:
                    mode = 'wb'
                    offset = 0
                    total = int(response.headers.get('Content-Length', 0))
                else:
                    response.read()
                    if offset and self._error_code(response) == 'INVALID_RANGE':
                        return f"Nothing to resume: {output_file} already holds {format_size(offset)}."
                    return f"Error: {self._format_error(response)}"

                output_file.parent.mkdir(parents=True, exist_ok=True)
                downloaded = offset
                with open(output_file, mode) as f:
                    for chunk in response.iter_bytes(chunk_size=TRANSFER_CHUNK_SIZE):
                        f.write(chunk)
                        downloaded += len(chunk)
                        show_progress("Downloading", filename, downloaded, total)
                end_progress()

        except httpx.ConnectError:
            return "Error: Cannot connect to gateway server. Is it running?"
        except httpx.TimeoutException:
            return "Error: Request timed out. Run the same download again to resume."
        except OSError as e:
            return f"Error writing file: {e}"

        resumed = f" (resumed at {format_size(offset)})" if offset else ""
        return f"Downloaded: {filename} ({format_size(downloaded)}){resumed}\nSaved to: {output_file.absolute()}"

    def exists(self, remote_path: str) -> str:
        """
        Check whether a share path exists.

        Returns:
            Result message
        """
        try:
            response = self._request_with_retry('GET', '/files/exists', params={'relativePath': remote_path})
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        if response.json()['exists']:
            return f"{remote_path} exists."
        return f"{remote_path} does not exist."

    def delete(self, remote_path: str) -> str:
        """
        Delete a share path; missing paths are reported as deleted.

        Returns:
            Result message
        """
        try:
            response = self._request_with_retry('DELETE', '/files', params={'relativePath': remote_path})
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"
        return f"Deleted: {remote_path}"

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
