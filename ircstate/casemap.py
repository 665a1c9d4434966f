"""
IRC case mappings.

Due to its Scandinavian origins, IRC has strange case mappings, which
consider the characters ``{}|~`` as the lowercase equivalents of ``[]\\^``.
Not every server agrees: some use plain ASCII, others do not consider ``~``
to be the lowercase of ``^``. The mappings in use are kept in a
process-wide registry, keyed by the name a server advertises in its
CASEMAPPING feature.

>>> lookup('rfc1459').downcase('Foo[^]')
'foo{~}'
>>> lookup('strict-rfc1459').downcase('Foo[^]')
'foo{^}'
>>> lookup('ascii').downcase('Foo[^]')
'foo[^]'
"""

import re
import weakref

from .errors import CasemapMismatch, DuplicateName, TypeMismatch, UnknownCasemap

_range_pattern = re.compile(r'(.)-(.)', re.DOTALL)

_registry = {}


def expand(chars):
    """
    Expand ``tr``-style character ranges.

    >>> expand('A-E')
    'ABCDE'
    >>> expand('a-c_')
    'abc_'
    >>> expand('-x')
    '-x'
    """

    def span(match):
        start, end = map(ord, match.groups())
        return ''.join(map(chr, range(start, end + 1)))

    return _range_pattern.sub(span, chars)


class Casemap:
    """
    A named folding table. Every character of ``upper`` folds to the
    character at the same position of ``lower``.

    >>> cmap = Casemap('example', 'A-C', 'a-c')
    >>> cmap.upper
    'ABC'
    >>> cmap.downcase('CAB!')
    'cab!'
    >>> cmap.upcase('cab!')
    'CAB!'

    Casemaps compare by name.

    >>> cmap == Casemap('example', 'X', 'x')
    True
    """

    __slots__ = ('_name', '_upper', '_lower', '_down', '_up')

    def __init__(self, name, upper, lower):
        upper, lower = expand(upper), expand(lower)
        if len(upper) != len(lower):
            raise ValueError(
                "Casemap %s: %r and %r differ in length" % (name, upper, lower)
            )
        self._name = name
        self._upper = upper
        self._lower = lower
        self._down = str.maketrans(upper, lower)
        self._up = str.maketrans(lower, upper)

    @property
    def name(self):
        return self._name

    @property
    def upper(self):
        "The 'uppercase characters' of this Casemap"
        return self._upper

    @property
    def lower(self):
        "The 'lowercase characters' of this Casemap"
        return self._lower

    def downcase(self, text):
        return text.translate(self._down)

    def upcase(self, text):
        return text.translate(self._up)

    def must_be(self, other):
        """
        Raise an error if other is not the same Casemap.

        >>> RFC1459.must_be('rfc1459')
        True
        >>> RFC1459.must_be('ascii')
        Traceback (most recent call last):
        ...
        ircstate.errors.CasemapMismatch: Casemap mismatch (rfc1459 != ascii)
        """
        other = lookup(other)
        if self != other:
            raise CasemapMismatch("Casemap mismatch (%s != %s)" % (self, other))
        return True

    def __eq__(self, other):
        if not isinstance(other, Casemap):
            return NotImplemented
        return self._name == other._name

    def __hash__(self):
        return hash(self._name)

    def __str__(self):
        return self._name

    def __repr__(self):
        return "<Casemap %s: %r ~ %r>" % (self._name, self._upper, self._lower)


def register(name, upper, lower):
    """
    Create a new Casemap and add it to the registry.

    >>> register('rfc1459', 'A-Z', 'a-z')
    Traceback (most recent call last):
    ...
    ircstate.errors.DuplicateName: Casemap 'rfc1459' already exists
    """
    if name in _registry:
        raise DuplicateName("Casemap %r already exists" % name)
    cmap = _registry[name] = Casemap(name, upper, lower)
    return cmap


def lookup(name):
    """
    Return the Casemap registered under name. Casemaps are passed through.

    >>> lookup('ascii') is lookup(lookup('ascii'))
    True
    >>> lookup('unicode')
    Traceback (most recent call last):
    ...
    ircstate.errors.UnknownCasemap: Unknown casemap 'unicode'
    """
    if isinstance(name, Casemap):
        return name
    try:
        return _registry[name]
    except (KeyError, TypeError):
        raise UnknownCasemap("Unknown casemap %r" % (name,)) from None


def names():
    return list(_registry)


def fold(casemap, text, direction='down'):
    """
    Translate text through the named casemap.

    >>> fold('rfc1459', 'Nick[away]')
    'nick{away}'
    >>> fold('rfc1459', 'nick{away}', 'up')
    'NICK[AWAY]'
    """
    cmap = lookup(casemap)
    if direction == 'down':
        return cmap.downcase(text)
    if direction == 'up':
        return cmap.upcase(text)
    raise ValueError("direction must be 'up' or 'down', not %r" % (direction,))


def downcase(text, casemap='rfc1459'):
    return fold(casemap, text, 'down')


def upcase(text, casemap='rfc1459'):
    return fold(casemap, text, 'up')


RFC1459 = register('rfc1459', 'A-^', 'a-~')
STRICT_RFC1459 = register('strict-rfc1459', 'A-]', 'a-}')
ASCII = register('ascii', 'A-Z', 'a-z')

DEFAULT = RFC1459
"casemap used by objects bound to neither a server nor a casemap"


class ServerOrCasemap:
    """
    Mixin for objects that are either bound to a server or carry a casemap
    of their own.

    The server is held through a weak reference: the server owns the
    objects bound to it, not the other way around.
    """

    _server_ref = None
    _casemap = None

    def _bind(self, server=None, casemap=None):
        if server is None:
            self._server_ref = None
            self._casemap = lookup(DEFAULT if casemap is None else casemap)
            return

        from .server import Server

        if not isinstance(server, Server):
            raise TypeMismatch("%r is not a valid Server" % (server,))
        if casemap is not None:
            server.casemap.must_be(casemap)
        self._server_ref = weakref.ref(server)
        # last known casemap, used should the server go away
        self._casemap = server.casemap

    @property
    def server(self):
        return self._server_ref() if self._server_ref is not None else None

    @property
    def casemap(self):
        """
        The casemap of the bound server if there is one, the object's own
        otherwise.
        """
        server = self.server
        return server.casemap if server is not None else self._casemap

    def server_and_casemap(self):
        "Keyword arguments that bind another object the same way"
        server = self.server
        if server is not None:
            return dict(server=server)
        return dict(casemap=self._casemap)

    def fits_with_server_and_casemap(self, server=None, casemap=None):
        """
        Return True if the receiver is bound compatibly with the given
        server and casemap.
        """
        if casemap is not None and lookup(casemap) != self.casemap:
            return False
        return server is None or server is self.server

    def downcase(self, casemap=None):
        return lookup(casemap or self.casemap).downcase(str(self))

    def upcase(self, casemap=None):
        return lookup(casemap or self.casemap).upcase(str(self))
