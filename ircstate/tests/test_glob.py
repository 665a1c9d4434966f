import pytest

from ircstate import glob


@pytest.mark.parametrize(
    'text, expected',
    [
        ('*', True),
        ('?', True),
        ('nick*', True),
        ('ni?k', True),
        ('nick', False),
        (r'nick\*', False),
        (r'\?', False),
        ('', False),
    ],
)
def test_has_glob(text, expected):
    assert glob.has_glob(text) is expected


@pytest.mark.parametrize(
    'mask, candidate, expected',
    [
        ('*', '', True),
        ('*', 'anything at all', True),
        ('?', '', False),
        ('?', 'x', True),
        ('n?ck', 'nick', True),
        ('n?ck', 'nck', False),
        ('*.example.com', 'irc.example.com', True),
        ('*.example.com', 'example.com', False),
        (r'what\?', 'what?', True),
        (r'what\?', 'whats', False),
        (r'star\*', 'star*', True),
        (r'star\*', 'starlight', False),
        ('a.b', 'axb', False),
        ('(nick)+', '(nick)+', True),
    ],
)
def test_compile(mask, candidate, expected):
    assert glob.compile(mask).match(candidate) is expected


def test_literal_matches_only_itself():
    pattern = glob.compile('nick')
    assert pattern.match('nick')
    assert not pattern.match('nick2')
    assert not pattern.match('anick')
    assert not pattern.match('Nick')


def test_casemap_folding():
    pattern = glob.compile('[Nick]*', 'rfc1459')
    assert pattern.match('{nick}away')
    assert pattern.match('[NICK]')
    assert not glob.compile('[Nick]*', 'ascii').match('{nick}away')


def test_escape_survives_folding():
    # the escape character folds to '|' under rfc1459
    pattern = glob.compile(r'A\*', 'rfc1459')
    assert pattern.match('a*')
    assert not pattern.match('abc')


def test_backslash_before_glob_is_an_escape():
    pattern = glob.compile('\\\\*')
    assert pattern.match('\\*')
    assert not pattern.match('\\anything')


def test_newlines_are_arbitrary_characters():
    assert glob.compile('a*b').match('a\nb')
