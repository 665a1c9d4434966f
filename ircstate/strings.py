from jaraco.text import FoldedCase

from . import casemap as casemaps


class IRCFoldedCase(FoldedCase):
    """
    A version of FoldedCase that honors an IRC casemap (RFC 1459 unless
    another is given) for lowercased strings.

    >>> IRCFoldedCase('Foo^').lower()
    'foo~'

    >>> IRCFoldedCase('[this]') == IRCFoldedCase('{THIS}')
    True

    >>> IRCFoldedCase('[This]').casefold()
    '{this}'

    >>> IRCFoldedCase().lower()
    ''

    Plain strings are folded with the same casemap.

    >>> IRCFoldedCase('Nick^') == 'nick~'
    True

    Under another casemap the brackets are distinct characters.

    >>> IRCFoldedCase('[this]', 'ascii') == '{THIS}'
    False
    >>> IRCFoldedCase('[This]', 'ascii').casefold()
    '[this]'
    """

    casemap = casemaps.DEFAULT

    def __new__(cls, value='', casemap=None):
        self = super().__new__(cls, value)
        if casemap is not None:
            self.casemap = casemaps.lookup(casemap)
        return self

    def lower(self):
        return self.casemap.downcase(str(self))

    def upper(self):
        return self.casemap.upcase(str(self))

    def casefold(self):
        return self.lower()

    def _coerce(self, other):
        if isinstance(other, IRCFoldedCase) and other.casemap == self.casemap:
            return other
        return IRCFoldedCase(other, self.casemap)

    def __eq__(self, other):
        if not isinstance(other, str):
            return NotImplemented
        return self.casefold() == self._coerce(other).casefold()

    def __ne__(self, other):
        if not isinstance(other, str):
            return NotImplemented
        return not self == other

    def __lt__(self, other):
        return self.casefold() < self._coerce(other).casefold()

    def __gt__(self, other):
        return self.casefold() > self._coerce(other).casefold()

    def __hash__(self):
        return hash(self.casefold())

    def __contains__(self, other):
        """
        >>> '{b}' in IRCFoldedCase('A[B]C')
        True
        """
        return self._coerce(other).casefold() in self.casefold()


def lower(str, casemap=None):
    return IRCFoldedCase(str, casemap).lower()
