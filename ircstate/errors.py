"""
Exceptions raised by the IRC state model.

Each class also derives from the closest builtin exception, so callers
may catch either the IRC-specific class or the generic one.

>>> issubclass(InvalidNetmaskFormat, ValueError)
True
>>> issubclass(UnmanagedUser, LookupError)
True
"""


class IRCError(Exception):
    "An IRC state exception"


class InvalidFormat(IRCError, ValueError):
    "Malformed text was supplied"


class InvalidNetmaskFormat(InvalidFormat):
    pass


class InvalidUserIdentity(InvalidFormat):
    "A user identity contains glob characters"


class InvalidChannelName(InvalidFormat):
    pass


class InvalidMyInfo(InvalidFormat):
    pass


class TypeMismatch(IRCError, TypeError):
    "An object of the wrong type was supplied"


class CasemapMismatch(TypeMismatch):
    pass


class UnknownCasemap(IRCError, LookupError):
    pass


class UnsupportedGlobVsGlob(IRCError, NotImplementedError):
    "Matching a glob against another glob is not supported"


class DuplicateEntity(IRCError, ValueError):
    pass


class DuplicateName(DuplicateEntity):
    pass


class DuplicateChannel(DuplicateEntity):
    pass


class DuplicateUser(DuplicateEntity):
    pass


class UnmanagedEntity(IRCError, LookupError):
    pass


class UnmanagedUser(UnmanagedEntity):
    pass


class UnmanagedChannel(UnmanagedEntity):
    pass


class ResourceLimitExceeded(IRCError, IndexError):
    pass


class ChannelLimitExceeded(ResourceLimitExceeded):
    pass
