"""
Channel modes and mode strings.

Servers advertise four kinds of channel modes in CHANMODES, plus the user
status modes of PREFIX:

* type A modes manipulate lists of netmasks (bans, exceptions): ListMode
* type B modes always take an argument (the channel key): ArgumentMode
* type C modes take an argument only when set (the user limit):
  SetArgumentMode
* type D modes are flags: FlagMode
* prefix modes give users a status in the channel (op, voice): UserMode
"""

from .netmask import Netmask, NetmaskList, to_netmask
from .user import UserList, to_user


def parse_nick_modes(mode_string):
    """Parse a nick mode string.

    The function returns a list of lists with three members: sign,
    mode and argument.  The sign is "+" or "-".  The argument is
    always None.

    Example:

    >>> parse_nick_modes("+ab-c")
    [['+', 'a', None], ['+', 'b', None], ['-', 'c', None]]
    """

    return _parse_modes(mode_string, "")


def parse_channel_modes(mode_string, set_arguments="bklvohq", reset_arguments=None):
    """Parse a channel mode string.

    The function returns a list of lists with three members: sign,
    mode and argument.  The sign is "+" or "-".  The argument is
    None unless the mode takes an argument with that sign:
    set_arguments lists the modes taking one when set, reset_arguments
    those taking one when reset (the same modes unless given).

    Example:

    >>> parse_channel_modes("+ab-c foo")
    [['+', 'a', None], ['+', 'b', 'foo'], ['-', 'c', None]]

    A limit takes its argument only when set.

    >>> parse_channel_modes("+l-l+k 10 secret", 'kl', 'k')
    [['+', 'l', '10'], ['-', 'l', None], ['+', 'k', 'secret']]
    """
    return _parse_modes(mode_string, set_arguments, reset_arguments)


def _parse_modes(mode_string, unary_modes="", reset_unary_modes=None):
    """
    Parse the mode_string and return a list of triples.

    If no string is supplied return an empty list.

    >>> _parse_modes('')
    []

    If no sign is supplied, return an empty list.

    >>> _parse_modes('ab')
    []

    Discard unused args.

    >>> _parse_modes('+a foo bar baz')
    [['+', 'a', None]]

    Return none for unary args when not provided

    >>> _parse_modes('+abc foo', unary_modes='abc')
    [['+', 'a', 'foo'], ['+', 'b', None], ['+', 'c', None]]

    This function never throws an error:

    >>> import random
    >>> def random_text(min_len = 3, max_len = 80):
    ...     len = random.randint(min_len, max_len)
    ...     chars_to_choose = [chr(x) for x in range(0,1024)]
    ...     chars = (random.choice(chars_to_choose) for x in range(len))
    ...     return ''.join(chars)
    >>> def random_texts(min_len = 3, max_len = 80):
    ...     while True:
    ...         yield random_text(min_len, max_len)
    >>> import itertools
    >>> texts = itertools.islice(random_texts(), 1000)
    >>> set(type(_parse_modes(text)) for text in texts) == {list}
    True
    """

    # mode_string must be non-empty and begin with a sign
    if not mode_string or mode_string[0] not in "+-":
        return []

    if reset_unary_modes is None:
        reset_unary_modes = unary_modes
    takes_argument = {"+": unary_modes, "-": reset_unary_modes}

    modes = []

    parts = mode_string.split()

    mode_part, args = parts[0], parts[1:]

    for ch in mode_part:
        if ch in "+-":
            sign = ch
            continue
        arg = args.pop(0) if ch in takes_argument[sign] and args else None
        modes.append([sign, ch, arg])
    return modes


class Mode:
    """
    A mode on a channel.
    """

    set_takes_argument = False
    reset_takes_argument = False

    def __init__(self, channel, letter):
        self.channel = channel
        self.letter = letter

    def validate(self, value):
        "Raise an error if value can't be set; nothing to check by default"

    def is_set(self):
        raise NotImplementedError

    def __repr__(self):
        return "<%s %s on %s>" % (type(self).__name__, self.letter, self.channel)


class ListMode(Mode):
    """
    Type A: a list of netmasks. Setting a mask already in the list, or
    resetting one that is not, does nothing.
    """

    set_takes_argument = True
    reset_takes_argument = True

    def __init__(self, channel, letter):
        super().__init__(channel, letter)
        self.list = NetmaskList()

    def set(self, mask):
        nm = self.channel.new_netmask(mask)
        if nm not in self.list:
            self.list.append(nm)

    def reset(self, mask):
        self.list.discard(self.channel.new_netmask(mask))

    def validate(self, mask):
        self.channel.new_netmask(mask)

    def is_set(self):
        return bool(self.list)

    def matches(self, mask):
        "Check whether any netmask in the list describes mask"
        return any(nm.describes(mask) for nm in self.list)

    def __iter__(self):
        return iter(self.list)


class ArgumentMode(Mode):
    """
    Type B: takes an argument both when set and when reset. Resetting
    clears the value only if the argument is the current value.
    """

    set_takes_argument = True
    reset_takes_argument = True

    def __init__(self, channel, letter):
        super().__init__(channel, letter)
        self.value = None

    def set(self, value):
        self.value = value

    def reset(self, value):
        if self.value == value:
            self.value = None

    def is_set(self):
        return self.value is not None


class SetArgumentMode(Mode):
    """
    Type C: takes an argument when set, but not when reset.
    """

    set_takes_argument = True

    def __init__(self, channel, letter):
        super().__init__(channel, letter)
        self.value = None

    def set(self, value):
        self.value = value

    def reset(self):
        self.value = None

    def is_set(self):
        return self.value is not None


class FlagMode(Mode):
    """
    Type D: a flag, never taking an argument.
    """

    def __init__(self, channel, letter):
        super().__init__(channel, letter)
        self._set = False

    def set(self):
        self._set = True

    def reset(self):
        self._set = False

    def is_set(self):
        return self._set


class UserMode(Mode):
    """
    Prefix modes are like type B modes, except that they manipulate
    lists of users, which makes them somewhat similar to type A modes.
    Users are resolved through the server the channel is bound to.
    """

    set_takes_argument = True
    reset_takes_argument = True

    def __init__(self, channel, letter):
        super().__init__(channel, letter)
        self.list = UserList()

    def set(self, nick):
        user = self.channel.resolve_user(nick)
        if self.find(user) is None:
            self.list.append(user)

    def reset(self, nick):
        user = self.find(nick)
        if user is not None:
            self.list.remove(user)

    def validate(self, nick):
        to_user(nick, **self.channel.server_and_casemap())

    def find(self, nick):
        "Return the user with the given nick, if the mode is set on it"
        if not isinstance(nick, Netmask):
            nick = to_netmask(nick, casemap=self.channel.casemap)
        key = self.channel.casemap.downcase(nick.nick)
        for user in self.list:
            if self.channel.casemap.downcase(user.nick) == key:
                return user

    def is_set(self):
        return bool(self.list)

    def __contains__(self, nick):
        return self.find(nick) is not None

    def __iter__(self):
        return iter(self.list)


by_type = dict(
    typea=ListMode,
    typeb=ArgumentMode,
    typec=SetArgumentMode,
    typed=FlagMode,
)
"mode classes for the CHANMODES groups"
