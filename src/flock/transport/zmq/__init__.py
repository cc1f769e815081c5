"""ZeroMQ channel implementations. Both channels share one context, which is
torn down at interpreter exit.
"""

import atexit

import zmq

zmq_context = zmq.Context()


def _cleanup() -> None:
    # Closes any socket still open at exit.
    zmq_context.destroy(linger=0)


atexit.register(_cleanup)

from . import request
from . import publish
