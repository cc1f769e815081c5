""" Result values for commands that did not produce a reply. These are
    returned to the caller in place of a reply, not raised: a failed command
    is a normal outcome for an interactive session, and the session carries
    on afterwards.
"""


class Result:
    """ Base class for all non-reply outcomes. The *text* is the description
        shown to the user.
    """

    def __init__(self, text):
        self.text = text


    def __str__(self):
        return self.text


    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.text)


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.text == other.text


    def __hash__(self):
        return hash((self.__class__, self.text))


# end of class Result



class NoConnection(Result):
    """ The command addressed a connection name that is not registered.
    """

    def __init__(self, name):
        self.name = name
        Result.__init__(self, 'no connection: ' + str(name))



class MalformedLiteral(Result):
    """ The payload looked like a structured literal but did not parse. The
        parser exception is kept as *error*.
    """

    def __init__(self, source, error):
        self.source = source
        self.error = error
        Result.__init__(self, 'malformed literal: ' + str(error))



class TransportFailure(Result):
    """ The transport raised an error while handling the command. The
        exception is kept as *error*.
    """

    def __init__(self, error):
        self.error = error
        text = '%s: %s' % (error.__class__.__name__, error)
        Result.__init__(self, text)



class UsageError(Result):
    """ An administrative command was missing a required argument.
    """

    def __init__(self, usage):
        Result.__init__(self, 'usage: ' + usage)



class Closed(Result):
    """ The session has been shut down with ``.exit``; no further commands
        are processed.
    """

    def __init__(self):
        Result.__init__(self, 'session closed')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
