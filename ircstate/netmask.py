"""
Netmasks identify IRC users by nick, username and hostname in the form
``nick!user@host``.

Netmasks can also contain glob patterns in any of their components; in
this form they are used to refer to more than one user, or to a user
appearing under different forms:

* ``*!*@*`` refers to everybody
* ``*!someuser@somehost`` refers to user ``someuser`` on host ``somehost``
  regardless of the nick used.
"""

import functools
import re

from . import glob
from .casemap import ServerOrCasemap
from .errors import InvalidNetmaskFormat, TypeMismatch, UnsupportedGlobVsGlob
from .typed import TypedList

_netmask_pattern = re.compile(r'(?:(\S+?)(?:!(\S+)@(\S+)?)?)?')


@functools.total_ordering
class Netmask(ServerOrCasemap):
    """
    A nick!user@host triple, bound either to a server or to a casemap.

    >>> nm = Netmask('pinky!username@example.com')
    >>> nm.nick, nm.user, nm.host
    ('pinky', 'username', 'example.com')

    Missing components become the generic glob pattern.

    >>> Netmask('pinky').fullform
    'pinky!*@*'
    >>> Netmask('').fullform
    '*!*@*'
    >>> Netmask('pinky!username@').host
    '*'

    Whitespace is never part of a netmask.

    >>> Netmask('pinky brain')
    Traceback (most recent call last):
    ...
    ircstate.errors.InvalidNetmaskFormat: 'pinky brain' does not represent a valid Netmask

    Comparisons honor the casemap.

    >>> Netmask('Foo[a]!U@H') == Netmask('foo{A}!u@h')
    True
    >>> Netmask('a!b@c') < Netmask('B!b@c')
    True
    """

    components = 'nick', 'user', 'host'

    def __init__(self, mask='', server=None, casemap=None):
        self._bind(server, casemap)
        if not isinstance(mask, str):
            raise TypeMismatch(
                "%r cannot be converted to a %s" % (mask, type(self).__name__)
            )
        match = _netmask_pattern.fullmatch(mask)
        if match is None:
            raise InvalidNetmaskFormat(
                "%r does not represent a valid %s" % (mask, type(self).__name__)
            )
        nick, user, host = match.groups()
        self._nick = self._normalize('nick', nick, initial=True)
        self._user = self._normalize('user', user, initial=True)
        self._host = self._normalize('host', host, initial=True)

    def _normalize(self, component, value, initial=False):
        "empty components default to the generic glob"
        return str(value or '') or '*'

    @property
    def nick(self):
        return self._nick

    @nick.setter
    def nick(self, value):
        self._nick = self._normalize('nick', value)

    @property
    def user(self):
        return self._user

    @user.setter
    def user(self, value):
        self._user = self._normalize('user', value)

    @property
    def host(self):
        return self._host

    @host.setter
    def host(self, value):
        self._host = self._normalize('host', value)

    @property
    def fullform(self):
        return '%s!%s@%s' % (self._nick, self._user, self._host)

    def __str__(self):
        return self.fullform

    def __repr__(self):
        server = self.server
        where = ' server=%s' % server if server is not None else ''
        return '<%s:%s nick=%r user=%r host=%r casemap=%s>' % (
            type(self).__name__,
            where,
            self._nick,
            self._user,
            self._host,
            self.casemap,
        )

    def _folded(self, casemap=None):
        return (casemap or self.casemap).downcase(self.fullform)

    def __eq__(self, other):
        if not isinstance(other, Netmask):
            return NotImplemented
        return self._folded() == other._folded(self.casemap)

    def __lt__(self, other):
        if isinstance(other, Netmask):
            return self._folded() < other._folded(self.casemap)
        if isinstance(other, str):
            return self._folded() < self.casemap.downcase(other)
        return NotImplemented

    __hash__ = None

    def to_netmask(self, server=None, casemap=None):
        """
        Return a Netmask with the given server/casemap association, self
        when no conversion is needed. Subclasses always get a new Netmask.
        """
        if server is None and casemap is None:
            if type(self) is Netmask:
                return self
            return Netmask(self.fullform, **self.server_and_casemap())
        if type(self) is Netmask and self.fits_with_server_and_casemap(
            server, casemap
        ):
            return self
        return Netmask(self.fullform, server=server, casemap=casemap)

    def to_user(self, server=None, casemap=None):
        from .user import User

        if server is None and casemap is None:
            return User(self.fullform, **self.server_and_casemap())
        return User(self.fullform, server=server, casemap=casemap)

    def replace(self, other):
        """
        Take nick, user and host from other, keeping the receiver's
        server/casemap association.

        >>> nm = Netmask('a!b@c')
        >>> nm.replace('x!y@z')
        >>> nm
        <Netmask: nick='x' user='y' host='z' casemap=rfc1459>
        """
        other = to_netmask(other, **self.server_and_casemap())
        self._nick, self._user, self._host = other.nick, other.user, other.host

    def has_glob(self):
        """
        Check whether any component is defined by globs.

        >>> Netmask('nick!*@host').has_glob()
        True
        >>> Netmask(r'nick\\*!user@host').has_glob()
        False
        """
        return any(
            glob.has_glob(getattr(self, component)) for component in self.components
        )

    def matches(self, other):
        """
        Check whether the receiver is described by other: every component
        of the receiver must match the corresponding component of other.

        When the receiver has no globs, each of its components is matched
        against the pattern in other. A receiver component with globs does
        not match a literal one. Matching two masks which both have globs
        is not supported.

        >>> Netmask('Nick!user@host.example.com').matches('nick!*@*.example.com')
        True
        >>> Netmask('nick!user@host').matches('other!*@*')
        False
        >>> Netmask('*!user@host').matches('nick!user@host')
        False
        >>> Netmask('*!a@b').matches('c!*@b')
        Traceback (most recent call last):
        ...
        ircstate.errors.UnsupportedGlobVsGlob: Cannot match '*!a@b' against 'c!*@b'
        """
        cmap = self.casemap
        cmp = to_netmask(other, casemap=cmap)
        if self.has_glob() and cmp.has_glob():
            raise UnsupportedGlobVsGlob(
                "Cannot match %r against %r" % (self.fullform, cmp.fullform)
            )
        for component in self.components:
            us = getattr(self, component)
            them = getattr(cmp, component)
            if glob.has_glob(us):
                return False
            if not glob.compile(them, cmap).match(us):
                return False
        return True

    def describes(self, other):
        """
        Check whether other matches the receiver.

        >>> Netmask('*!*@*.example.com').describes('nick!user@www.example.com')
        True
        """
        return to_netmask(other, casemap=self.casemap).matches(self)


def to_netmask(value, server=None, casemap=None):
    """
    Convert value into a Netmask with the given server/casemap association.

    >>> to_netmask('nick!user@host', casemap='ascii')
    <Netmask: nick='nick' user='user' host='host' casemap=ascii>
    """
    if isinstance(value, Netmask):
        return value.to_netmask(server, casemap)
    return Netmask(value, server=server, casemap=casemap)


class NetmaskList(TypedList):
    "A TypedList of Netmasks"

    element_class = Netmask
