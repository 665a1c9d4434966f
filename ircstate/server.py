"""
The IRC server a client is connected to, as seen by that client: its
MYINFO and ISUPPORT data, and the channels and users the client knows of.

The server owns every Channel and User bound to it. Channels and users
are created through the server's factories and removed through its
delete methods, which keep the whole graph consistent.
"""

import logging

import more_itertools

from . import glob
from . import modes
from .channel import Channel, ChannelList
from .errors import (
    ChannelLimitExceeded,
    DuplicateChannel,
    DuplicateUser,
    InvalidMyInfo,
    UnmanagedChannel,
    UnmanagedUser,
)
from .features import FeatureSet
from .netmask import Netmask, to_netmask
from .user import User, UserList

log = logging.getLogger(__name__)


class Server:
    """
    An IRC server.

    >>> server = Server()
    >>> server.parse_my_info('irc.example.net ircd-2.11 aoOirw abeiIklmnoOpqrRstv')
    >>> str(server)
    'irc.example.net'
    >>> server.parse_isupport('CHANMODES=beI,k,l,imnpst PREFIX=(ov)@+')
    >>> chan = server.new_channel('#Python')
    >>> sorted(chan.modes)
    ['I', 'b', 'e', 'i', 'k', 'l', 'm', 'n', 'o', 'p', 's', 't', 'v']
    >>> server.get_channel('#python') is chan
    True
    """

    def __init__(self):
        self.hostname = self.version = self.usermodes = self.chanmodes = None
        self.channels = ChannelList()
        self.users = UserList()
        self.reset_capabilities()

    def __str__(self):
        return str(self.hostname)

    def __repr__(self):
        chans, users = [
            [repr(x) for x in sorted(d, key=lambda x: x.downcase())]
            for d in (self.channels, self.users)
        ]
        return "<Server: hostname=%s channels=%s users=%s>" % (
            self.hostname,
            chans,
            users,
        )

    def reset_capabilities(self):
        "Reset the server features to the RFC1459 defaults"
        self.supports = FeatureSet()
        self.capabilities = {}

    def reset_lists(self):
        "Forget every Channel and User"
        for user in list(self.users):
            self.delete_user(user)
        for channel in list(self.channels):
            self.delete_channel(channel.name)

    def clear(self):
        self.reset_lists()
        self.reset_capabilities()

    @property
    def casemap(self):
        return self.supports.casemap()

    def parse_my_info(self, line):
        """
        Parse the text of a 004 RPL_MYINFO reply: hostname, version, user
        modes and channel modes. Missing trailing fields are left unset.
        """
        tokens = line.split()
        if not tokens:
            raise InvalidMyInfo("Empty MYINFO line")
        self.hostname, self.version, self.usermodes, self.chanmodes = (
            more_itertools.padded(tokens[:4], None, 4)
        )

    def parse_isupport(self, line):
        """
        Parse the text of a 005 RPL_ISUPPORT reply.

        See http://www.irc.org/tech_docs/draft-brocklesby-irc-isupport-03.txt
        """
        log.debug("Parsing ISUPPORT %r", line)
        self.supports.load(line)

    def channel_names(self):
        return [channel.downcase() for channel in self.channels]

    def user_nicks(self):
        return [user.downcase() for user in self.users]

    def is_channel_name(self, name):
        chantypes = self.supports['chantypes'] or ''
        return bool(name) and name[0] in chantypes

    def user_or_channel_type(self, name):
        "Return User or Channel depending on what name can be a name of"
        return Channel if self.is_channel_name(name) else User

    def user_or_channel(self, name):
        "Return the actual User or Channel object matching name"
        if self.is_channel_name(name):
            return self.channel(name)
        return self.user(name)

    def _channel_index(self, name):
        if isinstance(name, Channel):
            name = name.name
        key = self.casemap.downcase(name)
        return more_itertools.first(
            more_itertools.locate(self.channel_names(), lambda n: n == key), None
        )

    def has_channel(self, name):
        "Check whether the server already has a channel with the given name"
        return self._channel_index(name) is not None

    def get_channel(self, name):
        "Return the channel with the given name, if available"
        index = self._channel_index(name)
        return self.channels[index] if index is not None else None

    def new_channel(self, name, topic=None, users=(), fail_on_exists=True):
        """
        Create a new Channel bound to the server and add it to the list of
        channels, unless it was present already. In that case the existing
        channel is returned, or DuplicateChannel raised if fail_on_exists
        is set.
        """
        existing = self.get_channel(name)
        if existing is not None:
            if fail_on_exists:
                raise DuplicateChannel(
                    "Channel %s already exists on server %s" % (name, self)
                )
            return existing

        prefix = name[:1]
        chantypes = self.supports['chantypes'] or ''
        if prefix not in chantypes or not prefix:
            log.warning("%s doesn't support channel prefix %s", self, prefix)
        channellen = self.supports['channellen']
        if channellen is not None and len(name) > channellen:
            log.warning(
                "%s doesn't support channel names this long (%d > %d)",
                self,
                len(name),
                channellen,
            )

        for prefixes, limit in self.supports['chanlimit'].items():
            if not prefix or prefix not in prefixes or limit is None:
                continue
            count = sum(1 for channel in self.channels if channel.prefix in prefixes)
            if count >= limit:
                raise ChannelLimitExceeded(
                    "Already joined %d channels with prefix %s" % (count, prefixes)
                )

        channel = Channel(name, topic, server=self)
        users = list(users)
        self._check_users(users)

        for letter in self.supports['prefix']['modes'] or ():
            channel.create_mode(letter, modes.UserMode)
        for kind, letters in self.supports['chanmodes'].items():
            for letter in letters or ():
                channel.create_mode(letter, modes.by_type[kind])

        # after the modes, which status prefixes refer to
        for user in users:
            channel.add_user(user)

        self.channels.append(channel)
        log.debug("Created channel %r", channel)
        return channel

    def _check_users(self, names):
        """
        Validate initial channel users, as found in NAMES replies, before
        any of them is registered.
        """
        symbols = ''.join(self.supports.prefix_modes())
        for name in names:
            if isinstance(name, User):
                continue
            if isinstance(name, Netmask):
                name = name.fullform
            elif isinstance(name, str):
                name = name.lstrip(symbols)
            User(name, server=self)

    def channel(self, name):
        """
        Return the channel with the given name, creating it if necessary.
        """
        return self.new_channel(name, fail_on_exists=False)

    def delete_channel(self, name):
        "Remove a Channel from the list of channels"
        index = self._channel_index(name)
        if index is None:
            raise UnmanagedChannel("Tried to remove unmanaged channel %s" % name)
        del self.channels[index]

    def _user_index(self, nick):
        if not isinstance(nick, Netmask):
            nick = self.new_netmask(nick)
        key = self.casemap.downcase(nick.nick)
        return more_itertools.first(
            more_itertools.locate(self.user_nicks(), lambda n: n == key), None
        )

    def has_user(self, nick):
        "Check whether the server already has a user with the given nick"
        return self._user_index(nick) is not None

    def get_user(self, nick):
        "Return the user with the given nick, if available"
        index = self._user_index(nick)
        return self.users[index] if index is not None else None

    def new_user(self, mask, fail_on_exists=True):
        """
        Create a new User bound to the server and add it to the list of
        users, unless a user with the same nick was present already.

        A known identity for an existing user upgrades its record. Some
        networks change the hostname of users after identification, so a
        known user showing up with a different identity is not an error,
        but if fail_on_exists is set, meeting an already known user raises
        DuplicateUser.
        """
        if isinstance(mask, Netmask):
            mask = mask.fullform
        new = User(mask, server=self)
        old = self.get_user(new.nick)
        if old is None:
            nicklen = self.supports['nicklen']
            if nicklen is not None and len(new.nick) > nicklen:
                log.warning(
                    "%s doesn't support nicknames this long (%d > %d)",
                    self,
                    len(new.nick),
                    nicklen,
                )
            self.users.append(new)
            return new

        if new.is_known():
            if old.is_known():
                if old != new:
                    log.warning(
                        "User %s has inconsistent Netmasks! %s knows %r "
                        "but access was tried with %r",
                        new.nick,
                        self,
                        old,
                        new,
                    )
                if fail_on_exists:
                    raise DuplicateUser(
                        "User %s already exists on server %s" % (new, self)
                    )
            if old != new:
                old.replace(new)
                log.debug("User improved to %r", old)
        return old

    def user(self, mask):
        """
        Return the User with the given netmask, creating it if necessary.
        """
        return self.new_user(mask, fail_on_exists=False)

    def delete_user_from_channel(self, user, channel):
        channel.delete_user(user)

    def delete_user(self, mask):
        "Remove a User from every channel, then from the list of users"
        index = self._user_index(mask)
        if index is None:
            raise UnmanagedUser("Tried to remove unmanaged user %s" % mask)
        user = self.users[index]
        for channel in self.channels:
            self.delete_user_from_channel(user, channel)
        del self.users[index]

    def new_netmask(self, mask):
        "Create a new Netmask with the server's casemap"
        return to_netmask(mask, server=self)

    def find_users(self, mask):
        """
        Find all users whose Netmask matches mask. Users with an unknown
        component, or a mask leaving username or hostname unspecified, are
        matched by nick only.
        """
        nm = self.new_netmask(mask)
        nick_pattern = glob.compile(nm.nick, self.casemap)
        by_nick_only = '*' in (nm.user, nm.host)
        found = UserList()
        for user in self.users:
            if by_nick_only or '*' in (user.nick, user.user, user.host):
                if nick_pattern.match(user.nick):
                    found.append(user)
            elif user.matches(nm):
                found.append(user)
        return found
