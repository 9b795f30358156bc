from __future__ import annotations

import enum


class FailureReason(enum.Enum):
    CONNECT = "connect"
    WRITE = "write"
    ENCODE = "encode"
    DECODE = "decode"
    VERSION_MISMATCH = "version_mismatch"
    NOT_FOUND = "not_found"
    NAME_LENGTH_MISMATCH = "name_length_mismatch"
    UID_MISMATCH = "uid_mismatch"


class LookupFailure(Exception):
    """A single lookup attempt did not produce the expected answer."""

    reason: FailureReason


class ConnectError(LookupFailure):
    reason = FailureReason.CONNECT


class WriteError(LookupFailure):
    reason = FailureReason.WRITE


class EncodeError(LookupFailure):
    reason = FailureReason.ENCODE


class DecodeError(LookupFailure):
    reason = FailureReason.DECODE


class VersionMismatch(LookupFailure):
    reason = FailureReason.VERSION_MISMATCH

    def __init__(self, received: int, expected: int):
        super().__init__(f"Unexpected protocol version: {received}. Expected {expected}")
        self.received = received
        self.expected = expected


class NotFound(LookupFailure):
    reason = FailureReason.NOT_FOUND

    def __init__(self, username: str):
        super().__init__(f"User {username} not found")
        self.username = username


class NameLengthMismatch(LookupFailure):
    reason = FailureReason.NAME_LENGTH_MISMATCH

    def __init__(self, received: int, expected: int):
        super().__init__("Wrong name length was returned")
        self.received = received
        self.expected = expected


class UidMismatch(LookupFailure):
    reason = FailureReason.UID_MISMATCH

    def __init__(self, username: str, uid: int):
        super().__init__(f"Wrong UID returned for user {username}: {uid}")
        self.username = username
        self.uid = uid
