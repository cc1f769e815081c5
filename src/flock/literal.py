""" Interpret the data tail of a command line. A tail is either a structured
    literal (object, array, or quoted string, written in JSON5 so that single
    quotes and unquoted keys are accepted) or a raw string passed through
    unmodified. :func:`parse` makes that decision once, up front, and returns
    a :class:`RawString` or :class:`StructuredValue`; a tail that announces
    itself as structured but does not parse yields a
    :class:`flock.result.MalformedLiteral` instead.
"""

import json5

from .result import MalformedLiteral


markers = ('[', '{', '"', "'")


class RawString:

    def __init__(self, text):
        self.text = text
        self.value = text


    def __repr__(self):
        return 'RawString(%r)' % (self.text,)


    def __eq__(self, other):
        if isinstance(other, RawString):
            return self.text == other.text
        return NotImplemented


    def as_text(self):
        return self.text


# end of class RawString



class StructuredValue:
    """ A parsed literal. The *text* it was parsed from is retained for the
        administrative commands, which take plain words as arguments.
    """

    def __init__(self, value, text):
        self.value = value
        self.text = text


    def __repr__(self):
        return 'StructuredValue(%r)' % (self.value,)


    def __eq__(self, other):
        if isinstance(other, StructuredValue):
            return self.value == other.value
        return NotImplemented


    def as_text(self):
        """ A quoted string literal reads as its contents; anything else
            reads as the source text.
        """

        if isinstance(self.value, str):
            return self.value
        return self.text


# end of class StructuredValue



def parse(text):
    """ Classify and, if needed, parse the data tail *text*.
    """

    if text is None:
        text = ''

    if text[:1] in markers:
        try:
            value = json5.loads(text)
        except (ValueError, RecursionError) as error:
            return MalformedLiteral(text, error)

        return StructuredValue(value, text)

    return RawString(text)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
