"""nscd readiness probe

Blocks until the local name service cache daemon answers a user lookup with the
data we expect, not merely until its socket accepts connections:
- packet framing that mirrors the daemon's packed C structs
- a transport that owns one connection per attempt
- a pure validator and an unbounded poll loop on top
"""

__all__ = []
