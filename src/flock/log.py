""" Logging setup for an interactive session. Messages go to the console and,
    unless disabled, to a log file in the current directory.
"""

import logging


console_format = '%(levelname)s: %(message)s'
file_format = '%(asctime)s %(name)s %(levelname)s: %(message)s'


def setup(filename='cli.log', verbose=False):
    """ Attach console and file handlers to the ``flock`` logger. Calling this
        more than once replaces the handlers installed by the previous call.
        A *filename* of None or an empty string disables the file handler.
    """

    logger = logging.getLogger('flock')

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(console_format))
    logger.addHandler(console)

    if filename:
        logfile = logging.FileHandler(filename)
        logfile.setFormatter(logging.Formatter(file_format))
        logger.addHandler(logfile)

    logger.propagate = False
    return logger


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
