from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable

from .constants import DEFAULT_EXPECTED_UID, DEFAULT_SLEEP_MS, DEFAULT_USERNAME, PATH_NSCDSOCKET
from .errors import FailureReason, LookupFailure
from .net import exchange
from .packet import decode_response_header, encode_getpwbyname
from .validate import validate_response


@dataclass(frozen=True, slots=True)
class LookupConfig:
    socket_path: str = PATH_NSCDSOCKET
    username: str = DEFAULT_USERNAME
    expected_uid: int = DEFAULT_EXPECTED_UID
    sleep_ms: int = DEFAULT_SLEEP_MS


@dataclass(frozen=True, slots=True)
class AttemptOutcome:
    reason: FailureReason | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.reason is None

    @staticmethod
    def failed(err: LookupFailure) -> "AttemptOutcome":
        return AttemptOutcome(reason=err.reason, message=str(err))


@dataclass(slots=True)
class PollStats:
    attempts: int = 0
    failures: Counter = field(default_factory=Counter)
    start_ts: float = field(default_factory=time.monotonic)
    end_ts: float | None = None

    @property
    def duration_s(self) -> float:
        if self.end_ts is None:
            return 0.0
        return max(0.0, self.end_ts - self.start_ts)


Transport = Callable[[LookupConfig, bytes], bytes]


@dataclass(slots=True)
class Poller:
    config: LookupConfig
    transport: Transport = exchange
    sleep: Callable[[float], None] = time.sleep

    def attempt(self) -> AttemptOutcome:
        cfg = self.config
        try:
            frame = encode_getpwbyname(cfg.username)
            raw = self.transport(cfg, frame)
            header = decode_response_header(raw)
            validate_response(header, cfg.username, cfg.expected_uid)
        except LookupFailure as err:
            return AttemptOutcome.failed(err)
        return AttemptOutcome()

    def run(self) -> PollStats:
        """Poll until one lookup succeeds. There is no attempt limit."""
        stats = PollStats()
        cfg = self.config
        logging.info("waiting for nscd at %s to resolve %s", cfg.socket_path, cfg.username)

        while True:
            stats.attempts += 1
            logging.debug("attempt %d", stats.attempts)
            outcome = self.attempt()
            if outcome.ok:
                break

            stats.failures[outcome.reason] += 1
            logging.warning("%s", outcome.message)
            self.sleep(cfg.sleep_ms / 1000.0)

        stats.end_ts = time.monotonic()
        logging.info(
            "nscd resolved %s to uid %d after %d attempt(s)",
            cfg.username,
            cfg.expected_uid,
            stats.attempts,
        )
        return stats
