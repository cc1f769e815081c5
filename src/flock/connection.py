""" A :class:`Connection` is one addressable remote endpoint: a request/reply
    channel and a publish/subscribe channel sharing a network prefix. Values
    are encoded with :mod:`flock.transport.codec` on the way out and decoded
    on the way back in; the channels themselves only move bytes.
"""

import logging
import re

from . import config
from . import transport
from .transport import codec

logger = logging.getLogger(__name__)

port_only = re.compile(r'[0-9]+')


def expand(prefix, address):
    """ Return the fully qualified form of *address*. A bare port number is
        appended to *prefix* with a colon separator; any other string is
        returned unchanged.
    """

    if port_only.fullmatch(address):
        return prefix + ':' + address

    return address



class Connection:
    """ Both channels start out unbound. Bind them with :func:`connect`;
        either may be bound alone. Only one request may be outstanding at a
        time: a concurrent :func:`send` raises
        :class:`flock.transport.RequestInFlight`.

        :ivar name: The logical name this connection is registered under.
        :ivar prefix: Prefix used to expand bare port numbers.
    """

    def __init__(self, name=None, prefix=config.default_prefix, timeout=None):

        self.name = name
        self.prefix = prefix
        self.requests = transport.request.Client(timeout=timeout)
        self.publications = transport.publish.Client()


    def __repr__(self):
        return 'connection.Connection(%r, req=%r, sub=%r)' % (self.name, self.request_address, self.subscribe_address)


    @property
    def request_address(self):
        return self.requests.address


    @property
    def subscribe_address(self):
        return self.publications.address


    @property
    def topics(self):
        return self.publications.topics


    @property
    def connected(self):
        """ True if either channel is bound.
        """

        return self.requests.is_open or self.publications.is_open


    def connect(self, request=None, subscribe=None):
        """ Bind the request channel to *request* and/or the subscribe channel
            to *subscribe*. A channel given None is left as it is. A channel
            that is already bound is released before it is bound again.
        """

        if request is not None:
            request = expand(self.prefix, request)
            self.requests.connect(request)

        if subscribe is not None:
            subscribe = expand(self.prefix, subscribe)
            self.publications.connect(subscribe)


    def disconnect(self):
        """ Release both channels. Calling this on a connection that was never
            bound, or has already been released, does nothing.
        """

        self.requests.disconnect()
        self.publications.disconnect()


    def send(self, payload):
        """ Encode *payload*, send it as a request, and return the decoded
            reply. Blocks until the reply arrives, or until the configured
            timeout expires.
        """

        data = codec.encode(payload)
        reply = self.requests.send(data)
        return codec.decode(reply)


    def subscribe(self, topic):
        self.publications.subscribe(topic)


    def unsubscribe(self, topic):
        self.publications.unsubscribe(topic)


    def receive(self, timeout=0):
        """ Return the next publication as a (topic, value) tuple, or None if
            nothing arrived within *timeout* seconds. A publication is expected
            as two frames, the topic and the encoded value; a single-frame
            publication has no separate topic, and None is returned in its
            place.
        """

        frames = self.publications.recv(timeout)
        if frames is None:
            return None

        if len(frames) == 1:
            topic = None
        else:
            topic = frames[0].decode(errors='replace')

        value = codec.decode(frames[-1])
        return (topic, value)


# end of class Connection


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
