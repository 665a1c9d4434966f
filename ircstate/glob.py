r"""
IRC glob patterns.

IRC has a very primitive concept of globs: a ``*`` stands for "any number
of arbitrary characters", a ``?`` stands for "one and exactly one arbitrary
character". These characters can be escaped by prefixing them with a
backslash.

A known limitation of this syntax is that there is no way to escape the
escape character itself, so it's not possible to build a pattern where a
literal backslash precedes a glob.

>>> compile('*!*@*.example.com').match('nick!user@irc.example.com')
True
>>> compile(r'what\?').match('what?')
True
>>> compile(r'what\?').match('whats')
False
"""

import re

_glob_pattern = re.compile(r'^[*?]|[^\\][*?]')
_token_pattern = re.compile(r'(\\?[*?])')


def has_glob(text):
    r"""
    Check whether text contains unescaped glob characters.

    >>> has_glob('nick*')
    True
    >>> has_glob('?')
    True
    >>> has_glob(r'nick\*')
    False
    >>> has_glob('nick')
    False
    """
    return _glob_pattern.search(text) is not None


def translate(mask, casemap=None):
    r"""
    Return the regular expression equivalent to mask, folding its literal
    parts through casemap when one is given.

    >>> translate('a*b?')
    'a.*b.'
    >>> translate(r'a\*b')
    'a\\*b'
    >>> translate('[A]*', 'rfc1459')
    '\\{a\\}.*'
    """
    fold = _folder(casemap)
    pieces = []
    for index, piece in enumerate(_token_pattern.split(mask)):
        if index % 2 == 0:
            pieces.append(re.escape(fold(piece)))
        elif piece.startswith('\\'):
            pieces.append(re.escape(piece[1:]))
        elif piece == '*':
            pieces.append('.*')
        else:
            pieces.append('.')
    return ''.join(pieces)


def _folder(casemap):
    if casemap is None:
        return str
    from . import casemap as casemaps

    return casemaps.lookup(casemap).downcase


class Glob:
    """
    A compiled IRC glob. Matching is anchored at both ends of the
    candidate.

    >>> pattern = Glob('Nick?', casemap='rfc1459')
    >>> pattern.match('NICK1')
    True
    >>> pattern.match('nick12')
    False
    >>> pattern
    <Glob 'Nick?' (rfc1459)>
    """

    def __init__(self, mask, casemap=None):
        self.mask = mask
        self.casemap = casemap
        self._fold = _folder(casemap)
        self.regex = re.compile(translate(mask, casemap), re.DOTALL)

    def match(self, candidate):
        return self.regex.fullmatch(self._fold(candidate)) is not None

    __call__ = match

    def __repr__(self):
        suffix = ' (%s)' % self.casemap if self.casemap is not None else ''
        return '<Glob %r%s>' % (self.mask, suffix)


def compile(mask, casemap=None):
    return Glob(mask, casemap)
