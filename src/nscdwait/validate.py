from __future__ import annotations

from .constants import NSCD_VERSION
from .errors import NameLengthMismatch, NotFound, UidMismatch, VersionMismatch
from .packet import PwResponseHeader


def validate_response(header: PwResponseHeader, username: str, expected_uid: int) -> None:
    """Check a decoded passwd header against what we asked for.

    Checks run in a fixed order and the first failing one is raised.
    """
    if header.version != NSCD_VERSION:
        raise VersionMismatch(header.version, NSCD_VERSION)

    if header.found != 1:
        raise NotFound(username)

    # nscd counts the trailing NUL it stores with the name
    expected_name_len = len(username.encode("utf-8")) + 1
    if header.pw_name_len != expected_name_len:
        raise NameLengthMismatch(header.pw_name_len, expected_name_len)

    if header.pw_uid != expected_uid:
        raise UidMismatch(username, header.pw_uid)
