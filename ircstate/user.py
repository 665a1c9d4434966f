"""
IRC users.

A user is identified by a Netmask which must not have globs. IRC is
somewhat idiosyncratic, though: the nick of a user may be known long
before its user and host, which are then the ``*`` sentinel standing for
"unknown". Some networks also change the hostname of a user once they
identify with services, so the user and host of a User may change. Once
known they never turn into a glob again, not even the sentinel; they can
only be forgotten by clearing them.
"""

from . import glob
from .errors import InvalidUserIdentity
from .netmask import Netmask
from .typed import TypedList


class User(Netmask):
    """
    An IRC user.

    >>> u = User('pinky!username@example.com')
    >>> str(u)
    'pinky'
    >>> u.is_known()
    True
    >>> User('pinky').is_known()
    False

    >>> User('pinky!*user@example.com')
    Traceback (most recent call last):
    ...
    ircstate.errors.InvalidUserIdentity: '*user' must not have globs (unescaped * or ?)

    Once the user exists, no component can be changed into a glob, not
    even into the sentinel.

    >>> u.host = '*'
    Traceback (most recent call last):
    ...
    ircstate.errors.InvalidUserIdentity: Can't change the host to '*'

    User and host can still be forgotten by clearing them, the nick can't.

    >>> u.host = ''
    >>> u.fullform
    'pinky!username@*'
    >>> u.nick = ''
    Traceback (most recent call last):
    ...
    ircstate.errors.InvalidUserIdentity: Can't change the nick to ''
    """

    def __init__(self, mask='', server=None, casemap=None):
        super().__init__(mask, server=server, casemap=casemap)
        self._away = False

    def _normalize(self, component, value, initial=False):
        if not initial:
            text = str(value or '')
            if glob.has_glob(text) or (component == 'nick' and not text):
                raise InvalidUserIdentity(
                    "Can't change the %s to %r" % (component, value)
                )
        value = super()._normalize(component, value, initial)
        if value != '*' and glob.has_glob(value):
            raise InvalidUserIdentity(
                "%r must not have globs (unescaped * or ?)" % value
            )
        return value

    def __str__(self):
        return self.nick

    def is_known(self):
        "Check whether nick, user and host are all known"
        return '*' not in (self.nick, self.user, self.host)

    @property
    def away(self):
        return self._away

    @away.setter
    def away(self, message):
        """
        Set the away status: a message (or True) marks the user as away,
        None, False or an empty message marks it back.
        """
        self._away = message or False

    def is_away(self):
        return bool(self._away)

    def to_user(self, server=None, casemap=None):
        """
        Return self if the association fits, else a new User.
        """
        if self.fits_with_server_and_casemap(server, casemap):
            return self
        return User(self.fullform, server=server, casemap=casemap)

    def replace(self, other):
        """
        Take nick, user, host and away status from other, keeping the
        receiver's server/casemap association. The changed components are
        validated as the setters do.

        >>> u = User('nick')
        >>> other = User('Nick!user@host')
        >>> other.away = 'gone fishing'
        >>> u.replace(other)
        >>> u.fullform, u.away
        ('Nick!user@host', 'gone fishing')
        """
        if not isinstance(other, User):
            other = User(str(other), **self.server_and_casemap())
        values = [getattr(other, component) for component in self.components]
        for component, value in zip(self.components, values):
            if value != getattr(self, component):
                self._normalize(component, value)
        self._nick, self._user, self._host = values
        self._away = other.away


def to_user(value, server=None, casemap=None):
    """
    Convert value into a User with the given server/casemap association.

    >>> to_user('nick!user@host').host
    'host'
    """
    if isinstance(value, Netmask):
        if isinstance(value, User):
            return value.to_user(server, casemap)
        value = value.fullform
    return User(value, server=server, casemap=casemap)


class UserList(TypedList):
    "A TypedList of Users"

    element_class = User
