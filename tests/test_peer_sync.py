"""Byte-level checks of the peer protocol over socket pairs."""

from __future__ import annotations

import socket
import struct

import pytest

from salvo.board import Outcome
from salvo.peer_sync import ConnectionLost, PeerSync, PeerSyncError, accept_peer, connect_peer, host_listener

pytestmark = pytest.mark.timeout(5)


def _read(sock: socket.socket, n: int) -> bytes:
    buf = b""
    while len(buf) < n:
        chunk = sock.recv(n - len(buf))
        assert chunk
        buf += chunk
    return buf


def test_settings_are_two_native_ints(socket_pair) -> None:
    a, b = socket_pair
    PeerSync(a).send_settings(12, 5)
    assert _read(b, 8) == struct.pack("=ii", 12, 5)


def test_shot_count_and_shot_layout(socket_pair) -> None:
    a, b = socket_pair
    peer = PeerSync(a)
    peer.send_shot_count(3)
    peer.send_shot(7, 2)
    assert _read(b, 12) == struct.pack("=iii", 3, 7, 2)


@pytest.mark.parametrize("outcome,raw", [(Outcome.MISS, b"m"), (Outcome.HIT, b"h"), (Outcome.SUNK, b"s")])
def test_outcome_bytes(socket_pair, outcome: Outcome, raw: bytes) -> None:
    a, b = socket_pair
    PeerSync(a).send_outcome(outcome)
    assert _read(b, 1) == raw
    b.sendall(raw)
    assert PeerSync(a).recv_outcome() is outcome


def test_receive_side_decodes(socket_pair) -> None:
    a, b = socket_pair
    b.sendall(struct.pack("=ii", 14, 6) + struct.pack("=i", 2) + struct.pack("=ii", 0, 13))
    peer = PeerSync(a)
    assert peer.recv_settings() == (14, 6)
    assert peer.recv_shot_count() == 2
    assert peer.recv_shot() == (0, 13)


def test_split_writes_are_reassembled(socket_pair) -> None:
    a, b = socket_pair
    raw = struct.pack("=ii", 4, 9)
    for byte in raw:
        b.sendall(bytes([byte]))
    assert PeerSync(a).recv_shot() == (4, 9)


def test_unknown_outcome_byte_is_fatal(socket_pair) -> None:
    a, b = socket_pair
    b.sendall(b"?")
    with pytest.raises(ConnectionLost):
        PeerSync(a).recv_outcome()


def test_peer_close_mid_message(socket_pair) -> None:
    a, b = socket_pair
    b.sendall(b"\x01\x00")
    b.close()
    with pytest.raises(ConnectionLost):
        PeerSync(a).recv_int()


def test_receive_timeout(socket_pair) -> None:
    a, _b = socket_pair
    peer = PeerSync(a, timeout=0.1)
    assert a.gettimeout() == pytest.approx(0.1)
    with pytest.raises(ConnectionLost):
        peer.recv_shot_count()


def test_send_after_close_raises(socket_pair) -> None:
    a, b = socket_pair
    b.close()
    peer = PeerSync(a)
    with pytest.raises(PeerSyncError):
        # The first write may still be buffered; keep writing until the failure surfaces.
        for _ in range(1000):
            peer.send_shot(1, 1)


def test_listener_accept_and_connect() -> None:
    listener = host_listener("127.0.0.1", 0)
    try:
        port = listener.getsockname()[1]
        client = connect_peer("127.0.0.1", port, timeout=2)
        server = accept_peer(listener, timeout=2)
        try:
            PeerSync(server).send_settings(10, 5)
            assert PeerSync(client).recv_settings() == (10, 5)
        finally:
            client.close()
            server.close()
    finally:
        listener.close()


def test_connect_refused_is_connection_lost() -> None:
    listener = host_listener("127.0.0.1", 0)
    port = listener.getsockname()[1]
    listener.close()
    with pytest.raises(ConnectionLost):
        connect_peer("127.0.0.1", port, timeout=1)


def test_accept_timeout_is_connection_lost() -> None:
    listener = host_listener("127.0.0.1", 0)
    try:
        with pytest.raises(ConnectionLost):
            accept_peer(listener, timeout=0.1)
    finally:
        listener.close()
