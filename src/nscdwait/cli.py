from __future__ import annotations

import argparse
import json
import logging

from .constants import DEFAULT_EXPECTED_UID, DEFAULT_SLEEP_MS, DEFAULT_USERNAME, PATH_NSCDSOCKET, UID_MAX
from .poller import LookupConfig, Poller


def uint32(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if not 0 <= n <= UID_MAX:
        raise argparse.ArgumentTypeError(f"{n} is out of range 0..{UID_MAX}")
    return n


def username(value: str) -> str:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise argparse.ArgumentTypeError(f"username is not valid UTF-8: {value!r}") from None
    return value


def millis(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"{n} must not be negative")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="nscd-wait", description="Wait for nscd to return the correct data.")
    p.add_argument("-s", "--nscd-socket", default=PATH_NSCDSOCKET, help="nscd socket to connect to")
    p.add_argument("-u", "--username", type=username, default=DEFAULT_USERNAME, help="username to look up via nscd")
    p.add_argument("-i", "--expected-uid", type=uint32, default=DEFAULT_EXPECTED_UID, help="UID to expect from the lookup")
    p.add_argument("-m", "--sleep-millis", type=millis, default=DEFAULT_SLEEP_MS, help="milliseconds to sleep between tries")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    p.add_argument("--json", action="store_true", help="print poll stats as JSON once nscd is ready")
    return p


def config_from_args(args: argparse.Namespace) -> LookupConfig:
    return LookupConfig(
        socket_path=args.nscd_socket,
        username=args.username,
        expected_uid=args.expected_uid,
        sleep_ms=args.sleep_millis,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s [%(levelname)s] %(message)s")

    try:
        stats = Poller(config_from_args(args)).run()
    except KeyboardInterrupt:
        return 130

    if args.json:
        payload = {
            "attempts": stats.attempts,
            "seconds": stats.duration_s,
            "failures": {reason.value: n for reason, n in stats.failures.items()},
        }
        print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
