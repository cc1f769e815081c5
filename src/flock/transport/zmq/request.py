"""ZeroMQ request/reply channel.

A REQ socket enforces strict send/receive alternation and carries no request
identifier, so exactly one request may be outstanding at a time. That rule is
made explicit here with a non-blocking lock: a second :func:`Client.send`
while the first is still waiting fails immediately with
:class:`RequestInFlight` rather than corrupting the socket state.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

import zmq

from ..base import (
    Channel,
    NotConnected,
    RequestInFlight,
    TransportConnectionError,
    TransportError,
    TransportTimeout,
)
from . import zmq_context

logger = logging.getLogger(__name__)


class Client(Channel):
    """Issue requests via a ZeroMQ REQ socket and receive the replies.

    The socket is created on :func:`connect` and closed on
    :func:`disconnect`; connecting an already-bound client closes the old
    socket first, so at most one binding exists per client. If *timeout*
    (seconds) is set and no reply arrives in time, the socket is discarded
    and rebuilt against the same address, since a REQ socket cannot issue a
    new request until the previous one is answered.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self.socket: Optional[zmq.Socket] = None
        self._address: Optional[str] = None
        self._slot = threading.Lock()

    @property
    def address(self) -> Optional[str]:
        return self._address

    @property
    def busy(self) -> bool:
        """Whether a request is currently awaiting its reply."""
        return self._slot.locked()

    def _open(self, address: str) -> zmq.Socket:
        socket = zmq_context.socket(zmq.REQ)
        socket.setsockopt(zmq.LINGER, 0)
        try:
            socket.connect(address)
        except zmq.ZMQError as exc:
            socket.close()
            raise TransportConnectionError(
                f"cannot connect request channel to {address}: {exc}"
            ) from exc
        return socket

    def connect(self, address: str) -> None:
        if self.socket is not None:
            self.disconnect()

        self.socket = self._open(address)
        self._address = address
        logger.debug("request channel connected to %s", address)

    def disconnect(self) -> None:
        socket = self.socket
        if socket is None:
            return

        address = self._address
        self.socket = None
        self._address = None
        socket.close()
        logger.debug("request channel released %s", address)

    def _reset(self) -> None:
        address = self._address
        self.disconnect()
        if address is not None:
            self.connect(address)

    def send(self, data: bytes) -> bytes:
        """Transmit *data* and block until the single reply arrives."""

        if not self._slot.acquire(blocking=False):
            raise RequestInFlight(
                f"a request is already outstanding on {self._address}"
            )

        try:
            socket = self.socket
            if socket is None:
                raise NotConnected("request channel is not connected")

            try:
                socket.send(data)
                if self.timeout is not None:
                    ready = socket.poll(int(self.timeout * 1000), zmq.POLLIN)
                    if ready == 0:
                        address = self._address
                        self._reset()
                        raise TransportTimeout(
                            f"{address}: no reply in {self.timeout:.2f} sec"
                        )
                return socket.recv()
            except zmq.ZMQError as exc:
                raise TransportError(f"{self._address}: {exc}") from exc
        finally:
            self._slot.release()


# end of class Client
