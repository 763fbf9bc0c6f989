import socket
import threading
import time

import pytest

from doutil.tcp_proxy import (
    tcp_proxy,
    tcp_proxy_default_handler,
    tcp_recv,
    tcp_send,
)

SEND = b"hello"
RECV = b"ack"


def _free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _wait_for(port: int, timeout: float = 5.0) -> None:
    deadline = time.monotonic() + timeout
    while True:
        try:
            socket.create_connection(("127.0.0.1", port), timeout=1).close()
            return
        except OSError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.02)


def _start(target, *args) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


def _ack_server(conn: socket.socket) -> None:
    while data := conn.recv(1024):
        conn.sendall(RECV if data == SEND else b"bad")


def _client(conn: socket.socket) -> list[bytes]:
    conn.settimeout(5)
    replies = []
    for _ in range(5):
        conn.sendall(SEND)
        replies.append(conn.recv(1024))
        time.sleep(0.01)
    return replies


def _start_remote() -> int:
    port = _free_port()
    _start(tcp_recv, f":{port}", _ack_server)
    _wait_for(port)
    return port


def test_tcp_proxy_default_handler_forwards():
    remote = _start_remote()
    local = _free_port()
    _start(tcp_proxy, f":{local}", f":{remote}")
    _wait_for(local)

    assert tcp_send(f":{local}", _client) == [RECV] * 5


def test_tcp_proxy_with_custom_handler():
    remote = _start_remote()
    local = _free_port()
    called = threading.Event()

    def handler(lconn, rconn):
        called.set()
        tcp_proxy_default_handler(lconn, rconn)

    _start(tcp_proxy, f":{local}", f":{remote}", handler)
    _wait_for(local)

    assert tcp_send(f":{local}", _client) == [RECV] * 5
    assert called.is_set()


def test_tcp_send_and_recv_direct():
    port = _start_remote()
    assert tcp_send(f"127.0.0.1:{port}", _client) == [RECV] * 5


def test_default_handler_pipes_both_ways_and_closes():
    local_client, local_side = socket.socketpair()
    remote_side, remote_server = socket.socketpair()
    for sock in (local_client, remote_server):
        sock.settimeout(5)

    threads = tcp_proxy_default_handler(local_side, remote_side)

    local_client.sendall(b"ping")
    assert remote_server.recv(16) == b"ping"
    remote_server.sendall(b"pong")
    assert local_client.recv(16) == b"pong"

    local_client.close()
    assert remote_server.recv(16) == b""
    remote_server.close()

    for thread in threads:
        thread.join(5)
    assert [thread.is_alive() for thread in threads] == [False, False]
    assert local_side.fileno() == -1
    assert remote_side.fileno() == -1


def test_tcp_proxy_raises_when_remote_refuses():
    remote = _free_port()
    local = _free_port()

    def poke():
        deadline = time.monotonic() + 5
        while time.monotonic() < deadline:
            try:
                socket.create_connection(("127.0.0.1", local), timeout=1).close()
                return
            except OSError:
                time.sleep(0.05)

    _start(poke)
    with pytest.raises(ConnectionRefusedError):
        tcp_proxy(f":{local}", f":{remote}")


def test_tcp_send_refused():
    port = _free_port()
    with pytest.raises(ConnectionRefusedError):
        tcp_send(f":{port}", _client)


@pytest.mark.parametrize("addr", ["nonsense", "host:port", ":70000"])
def test_bad_addresses_raise(addr):
    with pytest.raises(ValueError):
        tcp_send(addr, _client)
    with pytest.raises(ValueError):
        tcp_recv(addr, _ack_server)