"""
Shared pytest fixtures for specguard tests.

This module provides:
- reset_application: clears the DI container between tests
- project_dir: a temporary Ruby project with a Gemfile
- results_formatter: a fixed path for the bundled results formatter
- canned_server: a local socket server sending a fixed reply to every request
"""

import socket
import threading
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from specguard.core.bootstrap import reset

RESULTS_FORMATTER = "/opt/specguard/data/results_formatter.rb"


@pytest.fixture(autouse=True)
def reset_application(monkeypatch):
    """Start every test with an empty container and no specguard environment."""
    reset()
    monkeypatch.delenv("RSPEC_DRB", raising=False)
    monkeypatch.setenv("SPECGUARD_LOGGING__FILE", "false")
    yield
    reset()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """
    Create a temporary Ruby project.

    Sets up a Gemfile so Bundler applies; no .rspec file.

    Returns:
        Path to the project root
    """
    (tmp_path / "Gemfile").write_text('source "https://rubygems.org"\n')
    return tmp_path


@pytest.fixture
def results_formatter() -> str:
    """Path injected as the results formatter so command lines are stable."""
    return RESULTS_FORMATTER


def _read_request(conn: socket.socket) -> None:
    """Consume one HTTP request (headers and Content-Length body)."""
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = conn.recv(4096)
        if not chunk:
            return
        data += chunk

    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())

    while len(body) < length:
        chunk = conn.recv(4096)
        if not chunk:
            return
        body += chunk


class CannedServer:
    """Listens on localhost and answers every request with the same bytes.

    A reply of None closes the connection without answering.
    """

    def __init__(self, reply: bytes | None) -> None:
        self.reply = reply
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen()
        self._sock.settimeout(0.1)
        self.port = self._sock.getsockname()[1]
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except TimeoutError:
                continue
            except OSError:
                return
            with conn:
                conn.settimeout(5)
                try:
                    _read_request(conn)
                    if self.reply is not None:
                        conn.sendall(self.reply)
                except OSError:
                    continue

    def stop(self) -> None:
        self._stop.set()
        self._thread.join(timeout=5)
        self._sock.close()


@pytest.fixture
def canned_server() -> Iterator[Callable[[bytes | None], int]]:
    """
    Start local servers with a fixed reply.

    Returns:
        Function taking the reply bytes (None to hang up) and returning the port
    """
    servers: list[CannedServer] = []

    def start(reply: bytes | None) -> int:
        server = CannedServer(reply)
        servers.append(server)
        return server.port

    yield start

    for server in servers:
        server.stop()


@pytest.fixture
def closed_port() -> int:
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
