"""Unit tests for GatewayClient."""

import httpx
import pytest

from cli.gateway_client import GatewayClient


def _client(temp_config, handler):
    temp_config.data['max_retries'] = 0
    client = GatewayClient(temp_config)
    client.session = httpx.Client(transport=httpx.MockTransport(handler), base_url='http://test')
    return client


def test_list_dir(temp_config):
    def handler(request):
        assert request.url.path == '/files'
        assert request.url.params['relativePath'] == 'docs'
        return httpx.Response(200, json=[
            {'name': 'archive', 'type': 'Folder', 'size': 0, 'formattedSize': '',
             'dateCreated': None, 'dateModified': None, 'fullPath': 'smb://nas/share/docs/archive'},
            {'name': 'q1.pdf', 'type': 'File', 'size': 2048, 'formattedSize': '2.0 KB',
             'dateCreated': None, 'dateModified': '2024-01-01T00:00:00Z', 'fullPath': 'smb://nas/share/docs/q1.pdf'},
        ])

    result = _client(temp_config, handler).list_dir('docs')

    assert result.startswith('2 entries in docs:')
    assert '[DIR]  archive/' in result
    assert '2.0 KB  q1.pdf' in result


def test_list_dir_empty(temp_config):
    result = _client(temp_config, lambda request: httpx.Response(200, json=[])).list_dir('')
    assert result == '/ is empty.'


def test_list_dir_not_found(temp_config):
    def handler(request):
        return httpx.Response(404, json={'detail': 'Share path not found: x', 'code': 'NOT_FOUND'})

    result = _client(temp_config, handler).list_dir('x')

    assert result == 'Error: Not found on the share: Share path not found: x'


def test_request_carries_request_id(temp_config):
    seen = {}

    def handler(request):
        seen['request_id'] = request.headers.get('X-Request-ID')
        return httpx.Response(200, json={'exists': True})

    _client(temp_config, handler).exists('a.txt')

    assert seen['request_id']


def test_upload(temp_config, sample_file):
    def handler(request):
        assert request.method == 'POST'
        assert request.url.path == '/files'
        body = request.content
        assert b'Sample content for testing' in body
        assert b'name="relativePath"' in body
        assert b'docs' in body
        assert b'false' in body
        return httpx.Response(200, text='File uploaded successfully', headers={'X-Uploaded-Path': 'docs/test_1.txt'})

    result = _client(temp_config, handler).upload(str(sample_file), 'docs', overwrite=False)

    assert result == 'Uploaded: test.txt (26 B) -> docs/test_1.txt'


def test_upload_missing_local_file(temp_config, tmp_path):
    result = _client(temp_config, lambda request: httpx.Response(500)).upload(str(tmp_path / 'nope.txt'))
    assert result.startswith('Error: File not found')


def test_upload_empty_local_file(temp_config, tmp_path):
    empty = tmp_path / 'empty.txt'
    empty.write_bytes(b'')

    result = _client(temp_config, lambda request: httpx.Response(500)).upload(str(empty))

    assert result.startswith('Error: File is empty')


def test_download_fresh(temp_config, tmp_path):
    def handler(request):
        assert 'Range' not in request.headers
        return httpx.Response(200, content=b'hello world', headers={'Content-Length': '11'})

    target = tmp_path / 'out.txt'
    result = _client(temp_config, handler).download('docs/a.txt', str(target))

    assert target.read_bytes() == b'hello world'
    assert result.startswith('Downloaded: a.txt')


def test_download_into_directory(temp_config, tmp_path):
    handler = lambda request: httpx.Response(200, content=b'abc')

    _client(temp_config, handler).download('docs/a.txt', str(tmp_path))

    assert (tmp_path / 'a.txt').read_bytes() == b'abc'


def test_download_resumes_partial_file(temp_config, tmp_path):
    target = tmp_path / 'a.txt'
    target.write_bytes(b'hello')

    def handler(request):
        assert request.headers['Range'] == 'bytes=5-'
        return httpx.Response(
            206, content=b' world', headers={'Content-Range': 'bytes 5-10/11', 'Content-Length': '6'}
        )

    result = _client(temp_config, handler).download('a.txt', str(target))

    assert target.read_bytes() == b'hello world'
    assert 'resumed' in result


def test_download_already_complete(temp_config, tmp_path):
    target = tmp_path / 'a.txt'
    target.write_bytes(b'hello')

    def handler(request):
        return httpx.Response(400, json={'detail': 'not satisfiable', 'code': 'INVALID_RANGE'})

    result = _client(temp_config, handler).download('a.txt', str(target))

    assert result.startswith('Nothing to resume')
    assert target.read_bytes() == b'hello'


def test_download_not_found(temp_config, tmp_path):
    def handler(request):
        return httpx.Response(404, json={'detail': 'File not found: a.txt', 'code': 'NOT_FOUND'})

    result = _client(temp_config, handler).download('a.txt', str(tmp_path / 'a.txt'))

    assert result.startswith('Error: Not found on the share')
    assert not (tmp_path / 'a.txt').exists()


def test_exists(temp_config):
    def handler(request):
        return httpx.Response(200, json={'exists': request.url.params['relativePath'] == 'a.txt'})

    client = _client(temp_config, handler)

    assert client.exists('a.txt') == 'a.txt exists.'
    assert client.exists('b.txt') == 'b.txt does not exist.'


def test_delete(temp_config):
    def handler(request):
        assert request.method == 'DELETE'
        return httpx.Response(200, text='File deleted successfully')

    assert _client(temp_config, handler).delete('a.txt') == 'Deleted: a.txt'


def test_invalid_path_message(temp_config):
    def handler(request):
        return httpx.Response(400, json={'detail': 'Path escapes the share base: ..', 'code': 'INVALID_PATH'})

    assert _client(temp_config, handler).delete('..') == 'Error: Path must stay inside the share base.'


def test_server_error_retried(temp_config, monkeypatch):
    monkeypatch.setattr('cli.gateway_client.time.sleep', lambda seconds: None)
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(500, json={'detail': 'Internal server error', 'code': 'INTERNAL_ERROR'})
        return httpx.Response(200, json={'exists': True})

    client = _client(temp_config, handler)
    temp_config.data['max_retries'] = 3

    assert client.exists('a.txt') == 'a.txt exists.'
    assert len(calls) == 3


def test_connection_error(temp_config):
    def handler(request):
        raise httpx.ConnectError('connection refused')

    result = _client(temp_config, handler).exists('a.txt')

    assert result == 'Error: Cannot connect to gateway server. Is it running?'


@pytest.mark.parametrize('status, expected', [(413, 'File too large'), (503, 'Service unavailable')])
def test_status_fallback_messages(temp_config, status, expected):
    assert _client(temp_config, lambda request: httpx.Response(status, text='')).delete('a') == f'Error: {expected}'


def test_download_uses_configured_directory(temp_config, tmp_path):
    temp_config.data['download_dir'] = str(tmp_path / 'inbox')

    _client(temp_config, lambda request: httpx.Response(200, content=b'abc')).download('docs/a.txt')

    assert (tmp_path / 'inbox' / 'a.txt').read_bytes() == b'abc'


def test_resume_with_invalid_path_reports_path_error(temp_config, tmp_path):
    target = tmp_path / 'a.txt'
    target.write_bytes(b'hello')

    def handler(request):
        return httpx.Response(400, json={'detail': 'Path escapes the share base: ..', 'code': 'INVALID_PATH'})

    result = _client(temp_config, handler).download('../a.txt', str(target))

    assert result == 'Error: Path must stay inside the share base.'
