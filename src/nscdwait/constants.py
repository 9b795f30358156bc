from __future__ import annotations

# nscd/nscd-client.h
PATH_NSCDSOCKET = "/var/run/nscd/socket"
NSCD_VERSION = 2
GETPWBYNAME = 0

# native byte order, standard sizes, no padding
REQUEST_HEADER_FORMAT = "=iii"  # version, request_type, key_len
PW_RESPONSE_HEADER_FORMAT = "=iiiiIIiii"  # version, found, name, passwd, uid, gid, gecos, dir, shell

DEFAULT_USERNAME = "root"
DEFAULT_EXPECTED_UID = 0
DEFAULT_SLEEP_MS = 100

UID_MAX = 2**32 - 1
