""" Runtime settings for a flock session. Every setting has a built-in
    default, which can be overridden by an environment variable, which can
    in turn be overridden by the command line arguments handled in
    :mod:`flock.cli`.
"""

import os


default_prefix = 'tcp://127.0.0.1'
default_address = 'tcp://127.0.0.1:3000'
default_log = 'cli.log'


class Settings:
    """ A plain container for the settings of one session.

        :ivar prefix: Network prefix used to expand bare numeric ports.
        :ivar address: Address for the initial ``default`` connection.
        :ivar timeout: Seconds to wait for a reply; None waits forever.
        :ivar log: Log file path; None or an empty string disables it.
        :ivar verbose: Log at DEBUG rather than INFO.
    """

    def __init__(self, prefix=default_prefix, address=default_address,
                 timeout=None, log=default_log, verbose=False):

        self.prefix = prefix
        self.address = address
        self.timeout = timeout
        self.log = log
        self.verbose = verbose


    def __repr__(self):
        return 'config.Settings: ' + repr(vars(self))


    def update(self, **kwargs):
        """ Override any settings for which a value other than None is
            supplied. Unknown setting names raise :class:`AttributeError`.
        """

        for key,value in kwargs.items():
            if value is None:
                continue
            if key in vars(self):
                setattr(self, key, value)
            else:
                raise AttributeError('unknown setting: ' + str(key))


# end of class Settings



def settings(environ=None):
    """ Return a :class:`Settings` instance populated from the environment.
        The recognized variables are ``FLOCK_PREFIX``, ``FLOCK_ADDRESS``,
        ``FLOCK_TIMEOUT`` and ``FLOCK_LOG``; *environ* defaults to
        :data:`os.environ`.
    """

    if environ is None:
        environ = os.environ

    found = Settings()

    try:
        found.prefix = environ['FLOCK_PREFIX']
    except KeyError:
        pass

    try:
        found.address = environ['FLOCK_ADDRESS']
    except KeyError:
        pass

    try:
        timeout = environ['FLOCK_TIMEOUT']
    except KeyError:
        pass
    else:
        found.timeout = timeout_value(timeout)

    try:
        found.log = environ['FLOCK_LOG']
    except KeyError:
        pass

    return found



def timeout_value(timeout):
    """ Interpret a timeout expressed as a string or number. Empty strings,
        None, and values less than or equal to zero all mean no timeout.
    """

    if timeout is None or timeout == '':
        return None

    try:
        timeout = float(timeout)
    except ValueError:
        raise ValueError('invalid timeout: ' + repr(timeout))

    if timeout <= 0:
        return None

    return timeout


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
