from __future__ import annotations

import os
import shutil
import socket
import struct
import tempfile
import threading

import pytest

from nscdwait.constants import REQUEST_HEADER_FORMAT
from nscdwait.packet import REQUEST_HEADER_LEN, PwResponseHeader


def pw_header(**overrides) -> PwResponseHeader:
    fields = dict(
        version=2,
        found=1,
        pw_name_len=5,
        pw_passwd_len=2,
        pw_uid=0,
        pw_gid=0,
        pw_gecos_len=5,
        pw_dir_len=6,
        pw_shell_len=10,
    )
    fields.update(overrides)
    return PwResponseHeader(**fields)


class FakeNscd:
    """Answers every connection on a Unix socket with a canned reply."""

    def __init__(self, path: str, reply: bytes):
        self.path = path
        self.reply = reply
        self.requests: list[bytes] = []
        self.sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self.sock.bind(path)
        self.sock.listen(8)
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        while True:
            try:
                conn, _ = self.sock.accept()
            except OSError:
                return
            with conn:
                header = self._read(conn, REQUEST_HEADER_LEN)
                if len(header) < REQUEST_HEADER_LEN:
                    continue
                _, _, key_len = struct.unpack(REQUEST_HEADER_FORMAT, header)
                self.requests.append(header + self._read(conn, key_len))
                conn.sendall(self.reply)

    @staticmethod
    def _read(conn: socket.socket, n: int) -> bytes:
        buf = b""
        while len(buf) < n:
            chunk = conn.recv(n - len(buf))
            if not chunk:
                break
            buf += chunk
        return buf

    def close(self) -> None:
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self.sock.close()
        self._thread.join(timeout=1.0)


@pytest.fixture
def make_header():
    return pw_header


@pytest.fixture
def sock_dir():
    # AF_UNIX paths are limited to ~108 bytes
    d = tempfile.mkdtemp(prefix="nscd")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def fake_nscd(sock_dir):
    daemons: list[FakeNscd] = []

    def start(reply: bytes) -> FakeNscd:
        d = FakeNscd(os.path.join(sock_dir, f"socket{len(daemons)}"), reply)
        daemons.append(d)
        return d

    yield start
    for d in daemons:
        d.close()
