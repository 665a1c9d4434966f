from jaraco.collections import KeyTransformingDict

from . import casemap as casemaps
from . import strings


class IRCDict(KeyTransformingDict):
    """
    A dictionary of names whose keys are case-insensitive according to an
    IRC casemap (RFC 1459 unless a subclass says otherwise).

    >>> d = IRCDict({'[This]': 'that'}, A='foo')

    The dict maintains the original case:

    >>> '[This]' in ''.join(d.keys())
    True

    But the keys can be referenced with a different case

    >>> d['a'] == 'foo'
    True

    >>> d['{this}'] == 'that'
    True

    >>> '{thiS]' in d
    True

    This should work for operations like delete and pop as well.

    >>> d.pop('A') == 'foo'
    True
    >>> del d['{This}']
    >>> len(d)
    0
    """

    casemap = casemaps.DEFAULT

    def transform_key(self, key):
        if isinstance(key, str):
            key = strings.IRCFoldedCase(key, self.casemap)
        return key
