from __future__ import annotations

import logging
import socket
from typing import TYPE_CHECKING

from .errors import ConnectError, DecodeError, WriteError
from .packet import PW_RESPONSE_HEADER_LEN

if TYPE_CHECKING:
    from .poller import LookupConfig


class UnixEndpoint:
    def __init__(self, sock: socket.socket):
        self.sock = sock

    @classmethod
    def connect(cls, path: str) -> "UnixEndpoint":
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(path)
        except OSError as exc:
            sock.close()
            raise ConnectError(f"Could not connect to {path}: {exc}") from exc
        return cls(sock)

    def send_frame(self, data: bytes) -> None:
        try:
            self.sock.sendall(data)
        except OSError as exc:
            raise WriteError(f"Could not send request: {exc}") from exc

    def recv_upto(self, size: int) -> bytes:
        """Read up to ``size`` bytes, stopping early only at EOF."""
        buf = bytearray()
        while len(buf) < size:
            try:
                chunk = self.sock.recv(size - len(buf))
            except OSError as exc:
                raise DecodeError(f"Could not deserialize response: {exc}") from exc
            if not chunk:
                break
            buf += chunk
        return bytes(buf)

    def close(self) -> None:
        self.sock.close()

    def __enter__(self) -> "UnixEndpoint":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def exchange(config: LookupConfig, frame: bytes) -> bytes:
    """Send one request frame and return the response header bytes.

    A fresh connection is used and closed every time. Whatever the daemon sends
    after the header stays unread; the connection is thrown away with it.
    """
    with UnixEndpoint.connect(config.socket_path) as ep:
        ep.send_frame(frame)
        raw = ep.recv_upto(PW_RESPONSE_HEADER_LEN)
    logging.debug("received %d header bytes from %s", len(raw), config.socket_path)
    return raw
