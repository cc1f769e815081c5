""" Python implementation of flock, an interactive shell for talking to one or
    more request/reply endpoints. This includes the connection registry and
    command grammar, the ZeroMQ transport beneath them, and the line-oriented
    front end.
"""

# Utility components.

from . import config
from . import log
from . import result
from . import literal
from . import command

# Submodules used by multiple other components.

from . import transport

# Primary public-facing interfaces.

from .connection import Connection
from .router import Router
from .shell import Shell

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
