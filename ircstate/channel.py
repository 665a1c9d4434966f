"""
IRC channels.

A channel is identified by its name and has a set of properties: a Topic,
a roster of users, and a set of modes. Which modes a channel supports
depends on the server, so modes are created by the server when the
channel is.
"""

import datetime
import logging
import numbers
import re

import pytz

from . import modes
from .casemap import ServerOrCasemap
from .errors import InvalidChannelName, TypeMismatch
from .netmask import Netmask, to_netmask
from .typed import TypedList
from .user import User, UserList, to_user

log = logging.getLogger(__name__)

_invalid_chars = re.compile('[ ,\x07]')


def is_channel(string, chantypes='#&+!'):
    """Check if a string is a channel name.

    Returns true if the argument is a channel name, otherwise false.

    >>> is_channel('#python')
    True
    >>> is_channel('&local', chantypes='#')
    False
    """
    return bool(string) and string[0] in chantypes


class Topic:
    """
    The topic of a channel: its text, who set it and when.

    >>> topic = Topic('hello', 'nick!user@host', 0)
    >>> str(topic)
    'hello'
    >>> topic.set_by.nick
    'nick'
    >>> topic.set_on.isoformat()
    '1970-01-01T00:00:00+00:00'
    """

    def __init__(self, text='', set_by='', set_on=None, casemap=None):
        self.text = text
        if not isinstance(set_by, User):
            set_by = to_user(set_by or '', casemap=casemap)
        self.set_by = set_by
        self.set_on = self._timestamp(set_on)

    @staticmethod
    def _timestamp(value):
        if value is None:
            return datetime.datetime.now(pytz.utc)
        if isinstance(value, numbers.Real):
            return datetime.datetime.fromtimestamp(value, pytz.utc)
        return value

    def replace(self, topic):
        "Replace a Topic with another one"
        if not isinstance(topic, Topic):
            raise TypeMismatch("%r is not of class %s" % (topic, type(self).__name__))
        self.text = topic.text
        self.set_by = topic.set_by
        self.set_on = topic.set_on

    def __str__(self):
        return self.text

    def __repr__(self):
        return "<Topic %r set by %s on %s>" % (self.text, self.set_by, self.set_on)


class Channel(ServerOrCasemap):
    """
    A class for keeping information about an IRC channel.

    >>> chan = Channel('#Test', users=['alice', 'bob'])
    >>> chan.has_user('ALICE')
    True
    >>> chan.is_normal(), chan.is_local()
    (True, False)

    >>> Channel('#with space')
    Traceback (most recent call last):
    ...
    ircstate.errors.InvalidChannelName: Invalid character in '#with space'
    """

    prefixes = '#&+!'
    "channel prefixes defined by RFC 2811"

    def __init__(self, name, topic=None, users=(), server=None, casemap=None):
        if not isinstance(name, str):
            raise TypeMismatch("%r cannot be converted to a Channel" % (name,))
        if not name:
            raise InvalidChannelName("Channel name cannot be empty")
        if _invalid_chars.search(name):
            raise InvalidChannelName("Invalid character in %r" % name)
        if name[0] not in self.prefixes:
            log.warning("Unknown channel prefix %s", name[0])

        self._bind(server, casemap)
        self.name = name
        self.topic = topic
        self.users = UserList()
        self.modes = {}

        for user in users:
            self.add_user(user)

    def __str__(self):
        return self.name

    def __repr__(self):
        server = self.server
        where = ' on server %s' % server if server is not None else ''
        return "<Channel%s: name=%r topic=%r users=<%s>>" % (
            where,
            self.name,
            self.topic.text,
            ', '.join(str(user) for user in sorted(self.users)),
        )

    @property
    def topic(self):
        return self._topic

    @topic.setter
    def topic(self, topic):
        "Topics are replaced as a whole"
        if topic is None:
            topic = Topic(casemap=self.casemap)
        elif not isinstance(topic, Topic):
            topic = Topic(str(topic), casemap=self.casemap)
        self._topic = topic

    def set_topic(self, text, set_by='', set_on=None):
        if set_by:
            set_by = self.resolve_user(set_by)
        self.topic = Topic(text, set_by, set_on, casemap=self.casemap)

    @property
    def prefix(self):
        "The channel prefix"
        return self.name[0]

    def is_local(self):
        "A channel is local to a server if it has the '&' prefix"
        return self.prefix == '&'

    def is_modeless(self):
        "A channel is modeless if it has the '+' prefix"
        return self.prefix == '+'

    def is_safe(self):
        "A channel is safe if it has the '!' prefix"
        return self.prefix == '!'

    def is_normal(self):
        "A channel is normal if it has the '#' prefix"
        return self.prefix == '#'

    def new_netmask(self, mask):
        server = self.server
        if server is not None:
            return server.new_netmask(mask)
        return to_netmask(mask, casemap=self.casemap)

    def resolve_user(self, value):
        """
        Return the User for value, through the server's user registry when
        the channel is bound to a server.
        """
        server = self.server
        if server is None:
            return to_user(value, casemap=self.casemap)
        if isinstance(value, User) and value.server is server:
            return value
        return server.user(value)

    def _user_index(self, nick):
        if not isinstance(nick, Netmask):
            nick = to_netmask(nick, casemap=self.casemap)
        key = self.casemap.downcase(nick.nick)
        for index, user in enumerate(self.users):
            if self.casemap.downcase(user.nick) == key:
                return index

    def has_user(self, nick):
        """Check whether the channel has a user."""
        return self._user_index(nick) is not None

    def get_user(self, nick):
        index = self._user_index(nick)
        return self.users[index] if index is not None else None

    def _status_modes(self):
        server = self.server
        if server is None:
            return {}
        return server.supports.prefix_modes()

    def add_user(self, nick):
        """
        Add a user to the roster and return it. Status prefixes, as found
        in NAMES replies, set the corresponding user modes.
        """
        status = []
        if isinstance(nick, str):
            symbols = self._status_modes()
            while nick and nick[0] in symbols:
                status.append(symbols[nick[0]])
                nick = nick[1:]
        user = self.resolve_user(nick)
        if not self.has_user(user):
            self.users.append(user)
        for letter in status:
            self.set_mode(letter, user)
        return user

    def delete_user(self, user):
        """
        Remove a user from the channel, first clearing every user mode it
        holds.
        """
        for mode in self.modes.values():
            if isinstance(mode, modes.UserMode):
                mode.reset(user)
        index = self._user_index(user)
        if index is not None:
            del self.users[index]

    def create_mode(self, letter, kind):
        "Create a new mode; a mode already present for letter is replaced"
        mode = self.modes[letter] = kind(self, letter)
        return mode

    def _mode_for(self, letter):
        mode = self.modes.get(letter)
        if mode is None:
            log.warning("%s has no mode %s", self.name, letter)
        return mode

    def _change(self, mode, sign, value):
        takes_argument = (
            mode.set_takes_argument if sign == '+' else mode.reset_takes_argument
        )
        change = mode.set if sign == '+' else mode.reset
        if takes_argument:
            change(value)
        else:
            change()

    def set_mode(self, letter, value=None):
        """Set mode on the channel.

        Arguments:

            letter -- The mode (a single-character string).

            value -- Value, for modes that take one when set.
        """
        mode = self._mode_for(letter)
        if mode is not None:
            self._change(mode, '+', value)

    def reset_mode(self, letter, value=None):
        """Clear mode on the channel.

        Arguments:

            letter -- The mode (a single-character string).

            value -- Value, for modes that take one when reset.
        """
        mode = self._mode_for(letter)
        if mode is not None:
            self._change(mode, '-', value)

    def apply_modes(self, mode_string):
        """
        Apply a MODE change such as ``+o-v nick other``. Arguments are
        consumed according to the kind of each mode.

        Every change is checked before any is applied: unknown modes and
        changes missing their argument are skipped with a warning, and an
        invalid argument fails the whole change.
        """
        set_arguments = ''.join(
            letter for letter, mode in self.modes.items() if mode.set_takes_argument
        )
        reset_arguments = ''.join(
            letter for letter, mode in self.modes.items() if mode.reset_takes_argument
        )
        parsed = modes.parse_channel_modes(mode_string, set_arguments, reset_arguments)
        changes = []
        for sign, letter, argument in parsed:
            mode = self._mode_for(letter)
            if mode is None:
                continue
            takes_argument = (
                mode.set_takes_argument if sign == '+' else mode.reset_takes_argument
            )
            if takes_argument and argument is None:
                log.warning("%s: no argument for %s%s", self.name, sign, letter)
                continue
            if sign == '+':
                mode.validate(argument)
            changes.append((mode, sign, argument))
        for mode, sign, argument in changes:
            self._change(mode, sign, argument)

    def has_mode(self, letter):
        mode = self.modes.get(letter)
        return mode is not None and mode.is_set()

    def users_with_mode(self, letter):
        "Returns the users holding the given user mode."
        mode = self.modes.get(letter)
        if not isinstance(mode, modes.UserMode):
            return []
        return list(mode.list)

    def _has_user_mode(self, letter, nick):
        mode = self.modes.get(letter)
        return isinstance(mode, modes.UserMode) and nick in mode

    def opers(self):
        """Returns the channel's operators."""
        return self.users_with_mode('o')

    def voiced(self):
        """Returns the persons that have voice mode set in the channel."""
        return self.users_with_mode('v')

    def is_oper(self, nick):
        """Check whether a user has operator status in the channel."""
        return self._has_user_mode('o', nick)

    def is_voiced(self, nick):
        """Check whether a user has voice mode set in the channel."""
        return self._has_user_mode('v', nick)

    def is_moderated(self):
        return self.has_mode("m")

    def is_invite_only(self):
        return self.has_mode("i")

    def limit(self):
        if self.has_mode("l"):
            return self.modes["l"].value
        return None

    def key(self):
        if self.has_mode("k"):
            return self.modes["k"].value
        return None


class ChannelList(TypedList):
    "A TypedList of Channels"

    element_class = Channel
