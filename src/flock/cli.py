""" Command line entry point. Connects the ``default`` connection to the
    requested address, asks it for its version, and starts an interactive
    :class:`flock.shell.Shell`.
"""

import argparse
import logging
import sys

from . import command
from . import config
from . import log
from . import result
from .router import Router
from .shell import Shell

logger = logging.getLogger(__name__)


def arguments(argv=None, settings=None):
    """ Parse *argv* and return the :class:`flock.config.Settings` for this
        session. Environment settings supply the defaults.
    """

    if settings is None:
        settings = config.settings()

    parser = argparse.ArgumentParser(
        prog='flock',
        description='Interactive shell for flock request/reply endpoints.'
    )
    parser.add_argument(
        'address',
        nargs='?',
        default=None,
        help='address for the default connection (default: %s)' % (settings.address)
    )
    parser.add_argument(
        '--prefix',
        default=None,
        help='network prefix for bare port numbers (default: %s)' % (settings.prefix)
    )
    parser.add_argument(
        '--timeout',
        default=None,
        help='seconds to wait for a reply (default: wait forever)'
    )
    parser.add_argument(
        '--log-file',
        default=None,
        help='log file; an empty string disables it (default: %s)' % (settings.log)
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        default=None,
        help='log debug messages'
    )

    parsed = parser.parse_args(argv)

    settings.update(
        address=parsed.address,
        prefix=parsed.prefix,
        log=parsed.log_file,
        verbose=parsed.verbose,
    )

    # Assigned directly: a timeout of zero means no timeout, which is None,
    # and update() would skip it.
    if parsed.timeout is not None:
        try:
            settings.timeout = config.timeout_value(parsed.timeout)
        except ValueError as error:
            parser.error(str(error))

    return settings



def main(argv=None, reader=input):

    settings = arguments(argv)
    log.setup(settings.log, settings.verbose)

    router = Router(settings)
    outcome = router.port_connect(command.default_name, settings.address)

    if isinstance(outcome, result.TransportFailure):
        logger.error('cannot connect to %s: %s', settings.address, outcome.error)
        return 1

    shell = Shell(router, reader)
    shell.display(router.execute('version'))
    shell.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
