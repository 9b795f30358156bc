from __future__ import annotations

import struct
from dataclasses import dataclass

from .constants import GETPWBYNAME, NSCD_VERSION, PW_RESPONSE_HEADER_FORMAT, REQUEST_HEADER_FORMAT
from .errors import DecodeError, EncodeError

REQUEST_HEADER_LEN = struct.calcsize(REQUEST_HEADER_FORMAT)
PW_RESPONSE_HEADER_LEN = struct.calcsize(PW_RESPONSE_HEADER_FORMAT)


@dataclass(frozen=True, slots=True)
class RequestHeader:
    version: int
    request_type: int
    key_len: int

    def to_bytes(self) -> bytes:
        return struct.pack(REQUEST_HEADER_FORMAT, self.version, self.request_type, self.key_len)


@dataclass(frozen=True, slots=True)
class PwResponseHeader:
    version: int
    found: int
    pw_name_len: int
    pw_passwd_len: int
    pw_uid: int
    pw_gid: int
    pw_gecos_len: int
    pw_dir_len: int
    pw_shell_len: int

    def to_bytes(self) -> bytes:
        return struct.pack(
            PW_RESPONSE_HEADER_FORMAT,
            self.version,
            self.found,
            self.pw_name_len,
            self.pw_passwd_len,
            self.pw_uid,
            self.pw_gid,
            self.pw_gecos_len,
            self.pw_dir_len,
            self.pw_shell_len,
        )

    @staticmethod
    def from_bytes(raw: bytes) -> "PwResponseHeader":
        if len(raw) < PW_RESPONSE_HEADER_LEN:
            raise DecodeError(
                f"Could not deserialize response: got {len(raw)} bytes, "
                f"need {PW_RESPONSE_HEADER_LEN}"
            )
        return PwResponseHeader(*struct.unpack_from(PW_RESPONSE_HEADER_FORMAT, raw))


def encode_request(version: int, request_type: int, username: str) -> bytes:
    """Build a request frame: the packed header followed by the raw key.

    The key is sent without a terminator; ``key_len`` is its length in bytes.
    """
    try:
        key = username.encode("utf-8")
        header = RequestHeader(version=version, request_type=request_type, key_len=len(key))
        return header.to_bytes() + key
    except (UnicodeEncodeError, struct.error) as exc:
        raise EncodeError(f"Could not serialize request: {exc}") from exc


def encode_getpwbyname(username: str) -> bytes:
    return encode_request(NSCD_VERSION, GETPWBYNAME, username)


def decode_response_header(raw: bytes) -> PwResponseHeader:
    """Decode the fixed passwd response header; trailing string data is ignored."""
    return PwResponseHeader.from_bytes(raw)
