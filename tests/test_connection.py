import threading
import time

import msgspec
import pytest

import flock
from flock.connection import Connection, expand


def test_expand():

    assert expand('tcp://127.0.0.1', '4000') == 'tcp://127.0.0.1:4000'
    assert expand('tcp://10.9.8.7', '1') == 'tcp://10.9.8.7:1'
    assert expand('tcp://127.0.0.1', 'tcp://10.0.0.5:4000') == 'tcp://10.0.0.5:4000'
    assert expand('tcp://127.0.0.1', 'ipc:///tmp/flock') == 'ipc:///tmp/flock'

    # Only an all-digit string is a bare port.
    assert expand('tcp://127.0.0.1', ':4000') == ':4000'
    assert expand('tcp://127.0.0.1', '4000 ') == '4000 '


def test_never_connected():

    connection = Connection('idle')
    assert connection.connected == False
    assert connection.request_address is None
    assert connection.subscribe_address is None

    # Safe on a connection that was never bound, and safe to repeat.
    connection.disconnect()
    connection.disconnect()

    with pytest.raises(flock.transport.NotConnected):
        connection.send({'cmd': 'status'})

    with pytest.raises(flock.transport.NotConnected):
        connection.subscribe('news')

    with pytest.raises(flock.transport.NotConnected):
        connection.receive()


def test_send_and_reply(echo_server):

    connection = Connection('default')
    connection.connect(str(echo_server))
    assert connection.request_address == 'tcp://127.0.0.1:%d' % (echo_server)
    assert connection.subscribe_address is None

    message = {'cmd': 'echo', 'subcmd': 'ping', 'data': 'hello'}
    assert connection.send(message) == {'echo': message}

    # Strict request/reply alternation holds over many round trips.
    for number in range(20):
        message = {'cmd': 'count', 'subcmd': '', 'data': number}
        assert connection.send(message) == {'echo': message}

    connection.disconnect()
    assert connection.connected == False

    with pytest.raises(flock.transport.NotConnected):
        connection.send(message)


def test_prefix(echo_server):

    connection = Connection('default', prefix='tcp://localhost')
    connection.connect(str(echo_server))

    assert connection.request_address == 'tcp://localhost:%d' % (echo_server)
    connection.disconnect()


def test_reconnect_replaces_binding(echo_server, unused_address):

    connection = Connection('default')
    connection.connect(unused_address)
    first = connection.requests.socket

    connection.connect(str(echo_server))
    second = connection.requests.socket

    # The first socket was closed rather than left connected alongside.
    assert first.closed
    assert second is not first
    assert connection.request_address.endswith(':%d' % (echo_server))

    # With a single binding every request reaches the echo server.
    for number in range(5):
        assert connection.send(number) == {'echo': number}

    connection.disconnect()
    assert second.closed


def test_timeout(unused_address, echo_server):

    connection = Connection('slow', timeout=0.2)
    connection.connect(unused_address)

    start = time.time()
    with pytest.raises(flock.transport.TransportTimeout):
        connection.send('anybody?')
    assert time.time() - start >= 0.15

    # The channel is rebuilt against the same address, ready for another try.
    assert connection.request_address == unused_address
    assert connection.requests.busy == False

    with pytest.raises(flock.transport.TransportTimeout):
        connection.send('anybody?')

    connection.connect(str(echo_server))
    assert connection.send('there') == {'echo': 'there'}
    connection.disconnect()


def test_request_in_flight(unused_address):

    connection = Connection('slow', timeout=1.0)
    connection.connect(unused_address)

    errors = list()

    def first():
        try:
            connection.send('first')
        except flock.transport.TransportError as error:
            errors.append(error)

    thread = threading.Thread(target=first)
    thread.start()

    deadline = time.time() + 1.0
    while connection.requests.busy == False and time.time() < deadline:
        time.sleep(0.01)

    assert connection.requests.busy == True

    with pytest.raises(flock.transport.RequestInFlight):
        connection.send('second')

    thread.join()
    assert len(errors) == 1
    assert isinstance(errors[0], flock.transport.TransportTimeout)

    connection.disconnect()


def test_bad_address():

    connection = Connection('broken')

    with pytest.raises(flock.transport.TransportConnectionError):
        connection.connect('not-an-address')

    assert connection.request_address is None
    assert connection.connected == False


def test_unencodable_payload(echo_server):

    connection = Connection('default')
    connection.connect(str(echo_server))

    with pytest.raises(flock.transport.codec.CodecError):
        connection.send(object())

    # Nothing went on the wire; the channel is still usable.
    assert connection.send(1) == {'echo': 1}
    connection.disconnect()


def receive_one(connection, socket, topic, value, tries=50):
    """ A SUB socket misses anything published before its subscription has
        propagated, so keep publishing until something arrives.
    """

    encoded = msgspec.msgpack.encode(value)

    for attempt in range(tries):
        socket.send_multipart((topic.encode(), encoded))
        received = connection.receive(0.1)
        if received is not None:
            return received

    return None


def test_subscribe(publisher):

    socket, port = publisher

    connection = Connection('feed')
    connection.connect(None, str(port))
    assert connection.request_address is None
    assert connection.subscribe_address == 'tcp://127.0.0.1:%d' % (port)

    # Nothing arrives without a topic filter.
    socket.send_multipart((b'news', msgspec.msgpack.encode(1)))
    assert connection.receive(0.1) is None

    connection.subscribe('news')
    connection.subscribe('news')
    assert connection.topics == frozenset(('news',))

    received = receive_one(connection, socket, 'news', {'headline': 'flock'})
    assert received == ('news', {'headline': 'flock'})

    connection.unsubscribe('news')
    connection.unsubscribe('never')
    assert connection.topics == frozenset()

    connection.disconnect()


def test_disconnect_forgets_topics(publisher):

    socket, port = publisher

    connection = Connection('feed')
    connection.connect(None, str(port))
    connection.subscribe('a')
    connection.subscribe('b')
    assert len(connection.topics) == 2

    connection.disconnect()
    assert connection.topics == frozenset()
    assert connection.subscribe_address is None

    # Rebinding starts with no filters.
    connection.connect(None, str(port))
    assert connection.topics == frozenset()
    connection.disconnect()


def test_both_channels(echo_server, publisher):

    socket, port = publisher

    connection = Connection('both')
    connection.connect(str(echo_server), str(port))
    assert connection.connected

    connection.subscribe('t')
    assert connection.send('x') == {'echo': 'x'}
    assert receive_one(connection, socket, 't', 5) == ('t', 5)

    connection.disconnect()
    assert connection.request_address is None
    assert connection.subscribe_address is None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
