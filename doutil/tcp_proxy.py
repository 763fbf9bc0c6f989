"""Plain TCP forwarding, sending and receiving helpers.

Addresses are written as "host:port"; an empty host listens on every
interface and dials the local machine.
"""

import logging
import socket
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

_BUFFER_SIZE = 32 * 1024
_LOCAL_HOST = "127.0.0.1"

ProxyHandler = Callable[[socket.socket, socket.socket], Any]


def _split_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {addr!r}")
    host = host.strip("[]")
    try:
        number = int(port) if port else 0
    except ValueError:
        raise ValueError(f"invalid port in address {addr!r}") from None
    if not 0 <= number <= 65535:
        raise ValueError(f"invalid port in address {addr!r}")
    return host, number


def _listen(addr: str) -> socket.socket:
    return socket.create_server(_split_addr(addr))


def _dial(host: str, port: int) -> socket.socket:
    return socket.create_connection((host or _LOCAL_HOST, port))


def tcp_proxy(local_addr: str, remote_addr: str, *args: ProxyHandler) -> None:
    """Listen on local_addr and forward every connection to remote_addr.

    With no handler, data is piped both ways by tcp_proxy_default_handler;
    otherwise the first handler is started on a thread with the local and
    remote sockets. Runs until accepting or dialling fails, which raises.
    """
    with _listen(local_addr) as listener:
        logger.info("listen %s", local_addr)
        remote_host, remote_port = _split_addr(remote_addr)

        while True:
            lconn, _ = listener.accept()
            try:
                rconn = _dial(remote_host, remote_port)
            except OSError:
                lconn.close()
                raise
            logger.info("dial %s", remote_addr)

            if not args:
                tcp_proxy_default_handler(lconn, rconn)
            else:
                threading.Thread(target=args[0], args=(lconn, rconn), daemon=True).start()


def tcp_proxy_default_handler(
    lconn: socket.socket, rconn: socket.socket
) -> tuple[threading.Thread, threading.Thread]:
    """Pipe data between lconn and rconn on two threads and return them.

    When one side reaches end of stream the other side's writing half is shut;
    both sockets are closed once both directions have finished.
    """
    lock = threading.Lock()
    remaining = [2]

    def finish() -> None:
        with lock:
            remaining[0] -= 1
            last = remaining[0] == 0
        if last:
            rconn.close()
            lconn.close()
            logger.info("close remote and local conn")

    def pipe(src: socket.socket, dst: socket.socket, direction: str) -> None:
        total = 0
        try:
            while chunk := src.recv(_BUFFER_SIZE):
                dst.sendall(chunk)
                total += len(chunk)
        except OSError as exc:
            logger.warning("copy from %s failed: %s", direction, exc)
            for sock in (src, dst):
                try:
                    sock.shutdown(socket.SHUT_RDWR)
                except OSError:
                    pass
        else:
            logger.info("copy %d bytes from %s", total, direction)
            try:
                dst.shutdown(socket.SHUT_WR)
            except OSError:
                pass
        finally:
            finish()

    threads = (
        threading.Thread(target=pipe, args=(rconn, lconn, "remote to local"), daemon=True),
        threading.Thread(target=pipe, args=(lconn, rconn, "local to remote"), daemon=True),
    )
    for thread in threads:
        thread.start()
    return threads


def tcp_send(remote_addr: str, handler: Callable[[socket.socket], Any]) -> Any:
    """Connect to remote_addr, run handler on the socket and return its result."""
    host, port = _split_addr(remote_addr)
    with _dial(host, port) as conn:
        return handler(conn)


def _serve(handler: Callable[[socket.socket], Any], conn: socket.socket) -> None:
    with conn:
        handler(conn)


def tcp_recv(local_addr: str, handler: Callable[[socket.socket], Any]) -> None:
    """Listen on local_addr and run handler on a thread for each connection.

    Each connection is closed when its handler returns. Blocks on accept and
    returns only by raising.
    """
    with _listen(local_addr) as listener:
        while True:
            conn, _ = listener.accept()
            threading.Thread(target=_serve, args=(handler, conn), daemon=True).start()