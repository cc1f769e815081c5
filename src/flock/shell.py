""" The interactive loop: read a line, hand it to a
    :class:`flock.router.Router`, print whatever comes back, repeat until the
    router stops running or the input runs out.
"""

import logging
import pprint
import sys

try:
    import readline     # Line editing and history for input(), if present.
except ImportError:
    readline = None

from . import result

logger = logging.getLogger(__name__)

prompt = 'Cli> '


class Shell:
    """ *reader* is called with the prompt and returns one line, raising
        :class:`EOFError` when the input is exhausted; it defaults to the
        built-in :func:`input`. Results are written to *output*.
    """

    def __init__(self, router, reader=input, output=None):

        if output is None:
            output = sys.stdout

        self.router = router
        self.reader = reader
        self.output = output


    def display(self, value):
        """ Print one command result. None is the result of a successful
            administrative command and prints nothing.
        """

        if value is None:
            return

        if isinstance(value, (str, result.Result)):
            text = str(value)
        else:
            text = pprint.pformat(value)

        print(text, file=self.output)


    def run(self):
        """ Process lines until ``.exit``, end of input, or an interrupt. All
            connections are released on the way out, however the loop ends.
        """

        try:
            while self.router.running:
                try:
                    line = self.reader(prompt)
                except EOFError:
                    break

                # Trailing blanks belong to the payload.
                line = line.lstrip()
                if line == '':
                    continue

                self.display(self.router.execute(line))

        except KeyboardInterrupt:
            logger.info('interrupted')

        finally:
            if self.router.running:
                self.router.exit()


# end of class Shell


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
