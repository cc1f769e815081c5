import logging
import threading

import msgspec
import pytest
import zmq

import flock


@pytest.fixture(autouse=True)
def reset_logging():

    yield

    # flock.log.setup() binds handlers to whatever sys.stderr was at the time;
    # leaving them in place would point later tests at a closed capture.

    logger = logging.getLogger('flock')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def echo_server():
    """ A REP socket on a random local port that answers every request with
        {'echo': <decoded request>}. Yields the port number.
    """

    context = zmq.Context()
    socket = context.socket(zmq.REP)
    socket.setsockopt(zmq.LINGER, 0)
    port = socket.bind_to_random_port('tcp://127.0.0.1')

    running = threading.Event()
    running.set()

    def serve():
        while running.is_set():
            if socket.poll(50) == 0:
                continue
            request = msgspec.msgpack.decode(socket.recv())
            socket.send(msgspec.msgpack.encode({'echo': request}))

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()

    yield port

    running.clear()
    thread.join()
    socket.close()
    context.term()


@pytest.fixture
def publisher():
    """ A PUB socket on a random local port. Yields (socket, port).
    """

    context = zmq.Context()
    socket = context.socket(zmq.PUB)
    socket.setsockopt(zmq.LINGER, 0)
    port = socket.bind_to_random_port('tcp://127.0.0.1')

    yield socket, port

    socket.close()
    context.term()


@pytest.fixture
def unused_address():
    """ An address that nothing is listening on. A REQ socket will happily
        queue a request for it, and the reply never comes.
    """

    socket = zmq.Context.instance().socket(zmq.REP)
    port = socket.bind_to_random_port('tcp://127.0.0.1')
    socket.close()
    return 'tcp://127.0.0.1:%d' % (port)



class FakeConnection:
    """ Stands in for :class:`flock.Connection` in router tests, recording
        everything that is done to it.
    """

    def __init__(self, name, prefix=flock.config.default_prefix, timeout=None):

        self.name = name
        self.prefix = prefix
        self.timeout = timeout
        self.request_address = None
        self.subscribe_address = None
        self.topics = set()
        self.sent = list()
        self.disconnects = 0
        self.published = list()
        self.reply = None
        self.failure = None
        self.connect_failure = None


    def connect(self, request=None, subscribe=None):
        if self.connect_failure is not None:
            raise self.connect_failure
        if request is not None:
            self.request_address = flock.connection.expand(self.prefix, request)
        if subscribe is not None:
            self.subscribe_address = flock.connection.expand(self.prefix, subscribe)


    def disconnect(self):
        self.disconnects += 1
        self.request_address = None
        self.subscribe_address = None
        self.topics = set()


    def send(self, payload):
        if self.failure is not None:
            raise self.failure
        self.sent.append(payload)
        if self.reply is None:
            return {'ok': payload['cmd']}
        return self.reply


    def subscribe(self, topic):
        if self.subscribe_address is None:
            raise flock.transport.NotConnected('subscribe channel is not connected')
        self.topics.add(topic)


    def unsubscribe(self, topic):
        self.topics.discard(topic)


    def receive(self, timeout=0):
        if self.published:
            publication = self.published.pop(0)
            if isinstance(publication, Exception):
                raise publication
            return publication
        return None



class Factory:
    """ A connection factory for :class:`flock.Router` that remembers every
        connection it created, in order.
    """

    def __init__(self):
        self.created = list()
        self.on_create = None


    def __call__(self, name, prefix=flock.config.default_prefix, timeout=None):
        connection = FakeConnection(name, prefix, timeout)
        if self.on_create is not None:
            self.on_create(connection)
        self.created.append(connection)
        return connection


    def named(self, name):
        return [connection for connection in self.created if connection.name == name]



@pytest.fixture
def factory():
    return Factory()


@pytest.fixture
def router(factory):
    return flock.Router(flock.config.Settings(), factory=factory)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
