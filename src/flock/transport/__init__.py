"""Transport layer implementations."""

import os

from .base import (
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    NotConnected,
    RequestInFlight,
)
from . import codec

_BACKEND = os.environ.get("FLOCK_TRANSPORT", "zmq")

if _BACKEND == "zmq":
    from .zmq import request
    from .zmq import publish
else:
    raise ImportError(f"unknown FLOCK_TRANSPORT backend: {_BACKEND!r}")
