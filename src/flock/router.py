""" The :class:`Router` owns every named :class:`flock.connection.Connection`
    in a session and turns command lines into requests against them.

    Administrative commands, matched exactly against the command head, manage
    the registry itself:

    ======================================  ==================================
    ``.exit``                               disconnect everything, stop
    ``.port-connect <name> <address>``      connect, replacing any existing
    ``.port-disconnect <name>``             disconnect and forget
    ``.port-list``                          name to address mapping
    ``.sub-connect <name> <address>``       bind the subscribe channel
    ``.subscribe <name> [<topic>]``         add a topic filter, empty is all
    ``.unsubscribe <name> [<topic>]``       remove a topic filter
    ``.sub-receive <name>``                 publications received so far
    ``.help``                               this list
    ======================================  ==================================

    Anything else is a generic command, see :mod:`flock.command`.
"""

import logging

from . import command
from . import config
from . import literal
from . import result
from . import transport
from .connection import Connection

logger = logging.getLogger(__name__)


class Router:
    """ One :class:`Router` is created per session. *settings* is a
        :class:`flock.config.Settings` instance; *factory* is the callable
        used to create connections, called with the connection name and the
        keyword arguments *prefix* and *timeout*.

        :ivar connections: Registered connections, keyed by name.
        :ivar addresses: The address each registered connection was bound to.
        :ivar running: False once ``.exit`` has been processed.
    """

    administrative = {
        '.exit': 'exit',
        '.help': 'help',
        '.port-connect': 'port_connect_text',
        '.port-disconnect': 'port_disconnect_text',
        '.port-list': 'port_list_text',
        '.sub-connect': 'sub_connect_text',
        '.subscribe': 'subscribe_text',
        '.unsubscribe': 'unsubscribe_text',
        '.sub-receive': 'sub_receive_text',
    }

    usage = {
        '.port-disconnect': '.port-disconnect <name>',
        '.sub-receive': '.sub-receive <name>',
        '.port-connect': '.port-connect <name> <address>',
        '.sub-connect': '.sub-connect <name> <address>',
        '.subscribe': '.subscribe <name> [<topic>]',
        '.unsubscribe': '.unsubscribe <name> [<topic>]',
    }

    def __init__(self, settings=None, factory=Connection):

        if settings is None:
            settings = config.Settings()

        self.settings = settings
        self.factory = factory
        self.connections = dict()
        self.addresses = dict()
        self.running = True


    def __contains__(self, name):
        return name in self.connections


    def __len__(self):
        return len(self.connections)


    def execute(self, line):
        """ Process one command line and return its result: the decoded reply
            for a generic command, the outcome of an administrative command,
            or a :class:`flock.result.Result` describing why there is no
            reply. Errors are reported through the return value; nothing is
            raised for a bad command.
        """

        if self.running == False:
            return result.Closed()

        head, tail = command.split(line)

        payload = literal.parse(tail)
        if isinstance(payload, result.MalformedLiteral):
            return payload

        try:
            method = self.administrative[head]
        except KeyError:
            pass
        else:
            method = getattr(self, method)
            return method(payload.as_text())

        parsed = command.parse(head, payload)
        return self.dispatch(parsed)


    def dispatch(self, parsed):
        """ Send a parsed :class:`flock.command.Command` to its connection and
            return the decoded reply.
        """

        try:
            connection = self.connections[parsed.connection]
        except KeyError:
            return result.NoConnection(parsed.connection)

        try:
            return connection.send(parsed.message())
        except transport.TransportError as error:
            logger.warning("%s: %s", parsed.connection, error)
            return result.TransportFailure(error)


    def lookup(self, name):
        """ Return the :class:`Connection` registered as *name*; raises
            :class:`KeyError` if there is none.
        """

        return self.connections[name]


    # Registry management.

    def port_connect(self, name, address):
        """ Connect the request channel for *name* to *address*. An existing
            connection with the same name is disconnected before the new one
            is created, so there is never more than one connection per name.
            If the new binding fails the name is left unregistered.
        """

        if name in self.connections:
            self.port_disconnect(name)

        connection = self.factory(name, prefix=self.settings.prefix, timeout=self.settings.timeout)

        try:
            connection.connect(address, None)
        except transport.TransportError as error:
            connection.disconnect()
            logger.warning("Cli %s failed to bind to %s: %s", name, address, error)
            return result.TransportFailure(error)

        self.connections[name] = connection
        self.addresses[name] = address
        logger.info("Cli %s bound to %s", name, address)


    def port_disconnect(self, name):
        """ Disconnect and forget the connection registered as *name*; does
            nothing if there is no such connection.
        """

        logger.info("closing port %s", name)

        try:
            connection = self.connections.pop(name)
        except KeyError:
            return

        del self.addresses[name]
        connection.disconnect()


    def port_disconnect_all(self):
        # Snapshot the names, port_disconnect() modifies the dictionary.
        for name in list(self.connections.keys()):
            self.port_disconnect(name)


    def port_list(self):
        return dict(self.addresses)


    def exit(self, text=''):
        """ Disconnect every connection and stop processing commands. This is
            the only coordinated teardown for a session.
        """

        self.port_disconnect_all()
        self.running = False
        return ''


    def help(self, text=''):
        lines = list()
        for head in sorted(self.administrative.keys()):
            lines.append(self.usage.get(head, head))
        lines.append('[<name>/]<command>[.<subcommand>] <payload>')
        return '\n'.join(lines)


    # Subscribe channel management.

    def sub_connect(self, name, address):
        try:
            connection = self.connections[name]
        except KeyError:
            return result.NoConnection(name)

        try:
            connection.connect(None, address)
        except transport.TransportError as error:
            logger.warning("Cli %s failed to subscribe to %s: %s", name, address, error)
            return result.TransportFailure(error)

        logger.info("Cli %s listening to %s", name, address)


    def subscribe(self, name, topic):
        try:
            connection = self.connections[name]
        except KeyError:
            return result.NoConnection(name)

        try:
            connection.subscribe(topic)
        except transport.TransportError as error:
            return result.TransportFailure(error)


    def unsubscribe(self, name, topic):
        try:
            connection = self.connections[name]
        except KeyError:
            return result.NoConnection(name)

        connection.unsubscribe(topic)


    def sub_receive(self, name):
        """ Return every publication already received for *name*, as a list
            of [topic, value] pairs, without waiting for more. A publication
            that does not decode is logged and skipped. Any other transport
            error ends the collection; what was received up to that point is
            still returned.
        """

        try:
            connection = self.connections[name]
        except KeyError:
            return result.NoConnection(name)

        received = list()

        while True:
            try:
                publication = connection.receive(0)
            except transport.codec.CodecError as error:
                logger.warning("%s: dropping undecodable publication: %s", name, error)
                continue
            except transport.TransportError as error:
                logger.warning("%s: %s", name, error)
                if received:
                    break
                return result.TransportFailure(error)

            if publication is None:
                break
            received.append(list(publication))

        return received


    # Adapters from the administrative command text to the methods above.

    def _pair(self, text):
        first, _, second = text.partition(' ')
        if first == '' or second == '':
            return None
        return first, second


    def _topic(self, text):
        # An empty topic matches every publication.
        name, _, topic = text.partition(' ')
        if name == '':
            return None
        return name, topic


    def port_connect_text(self, text):
        pair = self._pair(text)
        if pair is None:
            return result.UsageError(self.usage['.port-connect'])
        return self.port_connect(*pair)


    def port_disconnect_text(self, text):
        return self.port_disconnect(text)


    def port_list_text(self, text):
        return self.port_list()


    def sub_connect_text(self, text):
        pair = self._pair(text)
        if pair is None:
            return result.UsageError(self.usage['.sub-connect'])
        return self.sub_connect(*pair)


    def subscribe_text(self, text):
        pair = self._topic(text)
        if pair is None:
            return result.UsageError(self.usage['.subscribe'])
        return self.subscribe(*pair)


    def unsubscribe_text(self, text):
        pair = self._topic(text)
        if pair is None:
            return result.UsageError(self.usage['.unsubscribe'])
        return self.unsubscribe(*pair)


    def sub_receive_text(self, text):
        return self.sub_receive(text)


# end of class Router


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
