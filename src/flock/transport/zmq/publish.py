"""ZeroMQ publish/subscribe channel (subscriber side only)."""

from __future__ import annotations

import logging
from typing import Optional, Set, Tuple

import zmq

from ..base import Channel, NotConnected, TransportConnectionError, TransportError
from . import zmq_context

logger = logging.getLogger(__name__)


class Client(Channel):
    """SUB client.

    Nothing is received until at least one topic filter is added with
    :func:`subscribe`. Topic filters are tracked as a set: subscribing twice
    to the same topic installs a single filter, and all filters are forgotten
    when the channel is disconnected.
    """

    def __init__(self):
        self.socket: Optional[zmq.Socket] = None
        self._address: Optional[str] = None
        self._topics: Set[str] = set()

    @property
    def address(self) -> Optional[str]:
        return self._address

    @property
    def topics(self) -> frozenset:
        return frozenset(self._topics)

    def connect(self, address: str) -> None:
        if self.socket is not None:
            self.disconnect()

        socket = zmq_context.socket(zmq.SUB)
        socket.setsockopt(zmq.LINGER, 0)
        try:
            socket.connect(address)
        except zmq.ZMQError as exc:
            socket.close()
            raise TransportConnectionError(
                f"cannot connect subscribe channel to {address}: {exc}"
            ) from exc

        self.socket = socket
        self._address = address
        logger.debug("subscribe channel connected to %s", address)

    def disconnect(self) -> None:
        socket = self.socket
        if socket is None:
            return

        address = self._address
        self.socket = None
        self._address = None
        self._topics.clear()
        socket.close()
        logger.debug("subscribe channel released %s", address)

    def subscribe(self, topic: str) -> None:
        if self.socket is None:
            raise NotConnected("subscribe channel is not connected")
        if topic in self._topics:
            return

        self.socket.setsockopt(zmq.SUBSCRIBE, topic.encode())
        self._topics.add(topic)

    def unsubscribe(self, topic: str) -> None:
        if self.socket is None or topic not in self._topics:
            return

        self.socket.setsockopt(zmq.UNSUBSCRIBE, topic.encode())
        self._topics.discard(topic)

    def recv(self, timeout: Optional[float] = 0) -> Optional[Tuple[bytes, ...]]:
        """Return the frames of the next publication, or None if nothing
        arrives within *timeout* seconds. A *timeout* of None blocks.
        """

        if self.socket is None:
            raise NotConnected("subscribe channel is not connected")

        milliseconds = None if timeout is None else int(timeout * 1000)

        try:
            if self.socket.poll(milliseconds, zmq.POLLIN) == 0:
                return None
            return tuple(self.socket.recv_multipart())
        except zmq.ZMQError as exc:
            raise TransportError(f"{self._address}: {exc}") from exc


# end of class Client
