"""Cancellation against a real socket whose peer stops sending.

A local server answers with response headers (and optionally the start of a
body), then stalls without closing the connection. The reading thread is
therefore parked in ``recv`` when the cancel arrives, and must be released
promptly instead of waiting for the read timeout.
"""
from __future__ import annotations

import socket
import threading
import time
from contextlib import suppress
from typing import Callable, Iterator, List

import httpx
import pytest

from qwen_providers.base.cancellation import CancellationToken
from qwen_providers.base.errors import ErrorCode, ProviderError
from qwen_providers.base.models import ChatRequest, Message
from qwen_providers.qwen import QwenClient, with_base_url, with_http_client, with_timeout

STREAM_HEAD = b"HTTP/1.1 200 OK\r\nContent-Type: text/event-stream\r\nConnection: close\r\n\r\n"
FIRST_FRAME = b'data: {"request_id":"r1","output":{"text":"first"}}\n\n'
JSON_HEAD = b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\nContent-Length: 512\r\n\r\n"

# generous bound; a read that is not interrupted blocks for the 30 s timeout
PROMPT_SECONDS = 5.0


def _read_request(conn: socket.socket) -> None:
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = conn.recv(65536)
        if not chunk:
            return
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n"):
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())
    while len(body) < length:
        chunk = conn.recv(65536)
        if not chunk:
            return
        body += chunk


class _StallingServer:
    """Serves ``payload`` on every connection, then keeps the connection open."""

    def __init__(self, payload: bytes) -> None:
        self._payload = payload
        self._stopped = threading.Event()
        self._conns: List[socket.socket] = []
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._listener.bind(("127.0.0.1", 0))
        self._listener.listen(4)
        self._listener.settimeout(0.1)
        self.url = f"http://127.0.0.1:{self._listener.getsockname()[1]}/api/v1"
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        while not self._stopped.is_set():
            try:
                conn, _ = self._listener.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            conn.settimeout(5)
            self._conns.append(conn)
            with suppress(OSError):
                _read_request(conn)
                conn.sendall(self._payload)

    def close(self) -> None:
        self._stopped.set()
        self._thread.join(timeout=2)
        for conn in self._conns:
            with suppress(OSError):
                conn.close()
        self._listener.close()


@pytest.fixture()
def stalling_client() -> Iterator[Callable[[bytes], QwenClient]]:
    servers: List[_StallingServer] = []
    http_clients: List[httpx.Client] = []

    def make(payload: bytes) -> QwenClient:
        server = _StallingServer(payload)
        servers.append(server)
        http = httpx.Client()
        http_clients.append(http)
        return QwenClient("sk-test", with_http_client(http), with_base_url(server.url), with_timeout(30))

    yield make
    for server in servers:
        server.close()
    for http in http_clients:
        http.close()


def _request() -> ChatRequest:
    return ChatRequest(model="qwen-turbo", messages=[Message.text("user", "hello")])


def test_stream_cancel_interrupts_blocked_read(stalling_client):
    stream = stalling_client(STREAM_HEAD + FIRST_FRAME).create_chat_stream(_request())
    assert stream.chunks.get(timeout=5).text == "first"  # nosec B101
    time.sleep(0.3)  # worker is now waiting on the socket
    started = time.monotonic()
    stream.cancel("stop")
    err = stream.error(timeout=PROMPT_SECONDS)
    stream.join(timeout=PROMPT_SECONDS)
    assert time.monotonic() - started < PROMPT_SECONDS  # nosec B101
    assert err is not None and err.code is ErrorCode.CANCELLED  # nosec B101
    assert err.message == "stop"  # nosec B101
    assert stream.chunks.closed and stream.errors.closed  # nosec B101


def test_caller_token_interrupts_blocked_stream_read(stalling_client):
    caller = CancellationToken()
    stream = stalling_client(STREAM_HEAD + FIRST_FRAME).create_chat_stream(_request(), cancel=caller)
    stream.chunks.get(timeout=5)
    time.sleep(0.3)
    caller.cancel("request aborted")
    err = stream.error(timeout=PROMPT_SECONDS)
    stream.join(timeout=PROMPT_SECONDS)
    assert err is not None and err.cancelled  # nosec B101
    assert caller.child_count == 0  # nosec B101


def test_leaving_stream_context_early_does_not_wait_for_timeout(stalling_client):
    client = stalling_client(STREAM_HEAD + FIRST_FRAME)
    started = time.monotonic()
    with client.create_chat_stream(_request()) as stream:
        for chunk in stream:
            assert chunk.text == "first"  # nosec B101
            time.sleep(0.3)
            break
    assert time.monotonic() - started < PROMPT_SECONDS  # nosec B101
    assert stream.error(timeout=1).cancelled  # nosec B101


def test_chat_cancel_interrupts_blocked_body_read(stalling_client):
    client = stalling_client(JSON_HEAD + b'{"output": ')
    token = CancellationToken()
    timer = threading.Timer(0.3, token.cancel, args=("caller gave up",))
    started = time.monotonic()
    timer.start()
    try:
        with pytest.raises(ProviderError) as info:
            client.create_chat(_request(), cancel=token)
    finally:
        timer.cancel()
    assert time.monotonic() - started < PROMPT_SECONDS  # nosec B101
    assert info.value.code is ErrorCode.CANCELLED  # nosec B101
    assert info.value.message == "caller gave up"  # nosec B101
