"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`flock.router` so the command grammar remains
transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A request did not receive a timely response."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class NotConnected(TransportError):
    """The channel has no bound address."""


class RequestInFlight(TransportError):
    """A request is already outstanding on this channel."""


class Channel(ABC):
    """Minimal contract for one wire-level channel."""

    @abstractmethod
    def connect(self, address: str) -> None:
        """Bind the channel to a remote *address*."""

    @abstractmethod
    def disconnect(self) -> None:
        """Release the binding; a no-op if the channel is not bound."""

    @property
    def address(self) -> Optional[str]:
        """The currently bound address, or None."""
        return None

    @property
    def is_open(self) -> bool:
        """Whether the channel is currently bound."""
        return self.address is not None
