""" Parsing of the generic command surface::

        [<connection>/]<command>[.<subcommand>] <payload>

    The administrative commands are recognized by :class:`flock.router.Router`
    before anything here is consulted.
"""

default_name = 'default'


class Command:
    """ One parsed command line. *payload* is the result of
        :func:`flock.literal.parse`; :func:`message` produces the structure
        that goes on the wire.
    """

    def __init__(self, connection, command, subcommand, payload):

        self.connection = connection
        self.command = command
        self.subcommand = subcommand
        self.payload = payload


    def __repr__(self):
        return 'command.Command(%r, %r, %r, %r)' % (self.connection, self.command, self.subcommand, self.payload)


    def message(self):
        message = dict()
        message['cmd'] = self.command
        message['subcmd'] = self.subcommand
        message['data'] = self.payload.value
        return message


# end of class Command



def split(line):
    """ Split *line* on the first space into the command head and the raw
        data tail. Either may be empty.
    """

    head, _, tail = line.partition(' ')
    return head, tail



def parse(head, payload):
    """ Interpret a command *head* and return a :class:`Command`. Without a
        ``/`` the command is addressed to the connection named ``default``.
    """

    target, _, subcommand = head.partition('.')

    if '/' in target:
        connection, _, command = target.partition('/')
    else:
        connection = default_name
        command = target

    return Command(connection, command, subcommand, payload)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
