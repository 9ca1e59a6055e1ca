"""Fixed-width wire protocol for games against a remote peer.

Message layout (no magic, no length prefix, no delimiters):

Handshake, host → client, once
    int32 board_size, int32 shots_per_turn
Per salvo, attacker → defender
    int32 shot_count
    then per shot: int32 x, int32 y   → defender replies 1 byte: b"m" | b"h" | b"s"

Integers are 4 bytes in native byte order. The attacker must read each
outcome byte before sending the next coordinate pair. Every send or receive
failure (including a receive timeout or the peer closing the stream) raises
:class:`ConnectionLost`; nothing is retried.
"""

from __future__ import annotations

import logging
import socket
import struct
from typing import Final

from . import config as _cfg
from .board import Coord, Outcome

logger = logging.getLogger(__name__)

INT: Final[struct.Struct] = struct.Struct("=i")

OUTCOME_BYTES: Final[dict[Outcome, bytes]] = {
    Outcome.MISS: b"m",
    Outcome.HIT: b"h",
    Outcome.SUNK: b"s",
}
BYTE_OUTCOMES: Final[dict[bytes, Outcome]] = {v: k for k, v in OUTCOME_BYTES.items()}


class PeerSyncError(Exception):
    """Base for peer protocol problems."""


class ConnectionLost(PeerSyncError):
    """Raised when the peer stream fails, times out or closes mid-game."""


class PeerSync:
    """Blocking request/response channel over one connected stream socket."""

    def __init__(self, sock: socket.socket, *, timeout: float | None = None) -> None:
        self.sock = sock
        self.timeout = _cfg.TIMEOUT if timeout is None else timeout
        sock.settimeout(self.timeout)

    # ------------------------------------------------------------------
    # Raw I/O
    # ------------------------------------------------------------------
    def _send(self, data: bytes) -> None:
        try:
            self.sock.sendall(data)
        except OSError as exc:
            raise ConnectionLost(f"send failed: {exc}") from exc

    def _recv_exact(self, n: int) -> bytes:
        buf = bytearray()
        while len(buf) < n:
            try:
                chunk = self.sock.recv(n - len(buf))
            except OSError as exc:
                raise ConnectionLost(f"receive failed: {exc}") from exc
            if not chunk:
                raise ConnectionLost("peer closed the connection")
            buf.extend(chunk)
        return bytes(buf)

    def send_int(self, value: int) -> None:
        self._send(INT.pack(value))

    def recv_int(self) -> int:
        (value,) = INT.unpack(self._recv_exact(INT.size))
        return value

    # ------------------------------------------------------------------
    # Protocol messages
    # ------------------------------------------------------------------
    def send_settings(self, board_size: int, shots_per_turn: int) -> None:
        logger.debug("send settings – size=%d shots=%d", board_size, shots_per_turn)
        self._send(INT.pack(board_size) + INT.pack(shots_per_turn))

    def recv_settings(self) -> tuple[int, int]:
        board_size = self.recv_int()
        shots_per_turn = self.recv_int()
        logger.debug("recv settings – size=%d shots=%d", board_size, shots_per_turn)
        return board_size, shots_per_turn

    def send_shot_count(self, count: int) -> None:
        logger.debug("send shot count %d", count)
        self.send_int(count)

    def recv_shot_count(self) -> int:
        count = self.recv_int()
        logger.debug("recv shot count %d", count)
        return count

    def send_shot(self, x: int, y: int) -> None:
        logger.debug("send shot (%d,%d)", x, y)
        self._send(INT.pack(x) + INT.pack(y))

    def recv_shot(self) -> Coord:
        x = self.recv_int()
        y = self.recv_int()
        logger.debug("recv shot (%d,%d)", x, y)
        return x, y

    def send_outcome(self, outcome: Outcome) -> None:
        logger.debug("send outcome %s", outcome.value)
        self._send(OUTCOME_BYTES[outcome])

    def recv_outcome(self) -> Outcome:
        raw = self._recv_exact(1)
        try:
            outcome = BYTE_OUTCOMES[raw]
        except KeyError:
            raise ConnectionLost(f"unexpected outcome byte {raw!r}") from None
        logger.debug("recv outcome %s", outcome.value)
        return outcome

    def close(self) -> None:
        try:
            self.sock.close()
        except OSError:
            logger.debug("socket close failed", exc_info=True)


# ---------------------------------------------------------------------------
# Connection setup
# ---------------------------------------------------------------------------


def host_listener(host: str | None = None, port: int | None = None, *, backlog: int = 5) -> socket.socket:
    """Bound, listening socket for the hosting side."""
    host = _cfg.DEFAULT_HOST if host is None else host
    port = _cfg.DEFAULT_PORT if port is None else port
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        srv.bind((host, port))
        srv.listen(backlog)
    except OSError:
        srv.close()
        raise
    logger.info("hosting on %s:%d", host, srv.getsockname()[1])
    return srv


def accept_peer(listener: socket.socket, *, timeout: float | None = None) -> socket.socket:
    """Wait for the client to connect (``None`` blocks indefinitely)."""
    listener.settimeout(timeout)
    try:
        conn, addr = listener.accept()
    except OSError as exc:
        raise ConnectionLost(f"no peer connected: {exc}") from exc
    logger.info("peer connected from %s:%d", *addr[:2])
    return conn


def connect_peer(host: str, port: int | None = None, *, timeout: float | None = None) -> socket.socket:
    """Connect to a hosting peer."""
    port = _cfg.DEFAULT_PORT if port is None else port
    timeout = _cfg.TIMEOUT if timeout is None else timeout
    try:
        sock = socket.create_connection((host, port), timeout=timeout)
    except OSError as exc:
        raise ConnectionLost(f"cannot reach {host}:{port}: {exc}") from exc
    logger.info("connected to %s:%d", host, port)
    return sock


__all__ = [
    "PeerSync",
    "PeerSyncError",
    "ConnectionLost",
    "host_listener",
    "accept_peer",
    "connect_peer",
]
