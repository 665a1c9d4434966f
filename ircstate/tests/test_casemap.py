import string

import pytest

from ircstate import casemap
from ircstate.casemap import ServerOrCasemap
from ircstate.errors import CasemapMismatch, DuplicateName, UnknownCasemap
from ircstate.server import Server
from ircstate.strings import IRCFoldedCase


@pytest.mark.parametrize('name', ['rfc1459', 'strict-rfc1459', 'ascii'])
def test_downcase_is_idempotent(name):
    once = casemap.fold(name, string.printable)
    assert casemap.fold(name, once) == once


def test_builtin_tables():
    assert casemap.lookup('rfc1459').lower.endswith('{|}~')
    assert casemap.lookup('strict-rfc1459').lower.endswith('{|}')
    assert casemap.lookup('ascii').upper == string.ascii_uppercase


def test_upcase():
    assert casemap.upcase('nick{a}~') == 'NICK[A]^'
    assert casemap.upcase('nick{a}~', 'strict-rfc1459') == 'NICK[A]~'


def test_register_duplicate():
    with pytest.raises(DuplicateName):
        casemap.register('ascii', 'A-Z', 'a-z')


def test_lookup_unknown():
    with pytest.raises(UnknownCasemap):
        casemap.lookup('rfc7613')


def test_equality_by_name():
    assert casemap.Casemap('ascii', 'A', 'a') == casemap.ASCII
    assert casemap.ASCII != casemap.RFC1459
    assert casemap.DEFAULT is casemap.RFC1459


def test_mismatched_lengths():
    with pytest.raises(ValueError):
        casemap.Casemap('broken', 'A-C', 'a')


class Bound(ServerOrCasemap):
    def __init__(self, text, server=None, casemap=None):
        self.text = text
        self._bind(server, casemap)

    def __str__(self):
        return self.text


class TestServerOrCasemap:
    def test_default_casemap(self):
        assert Bound('x').casemap == casemap.RFC1459
        assert Bound('x').server is None

    def test_explicit_casemap(self):
        assert Bound('[X]', casemap='ascii').downcase() == '[x]'

    def test_server_casemap(self):
        server = Server()
        server.parse_isupport('CASEMAPPING=ascii')
        ob = Bound('[X]', server=server)
        assert ob.server is server
        assert ob.casemap == casemap.ASCII
        assert ob.server_and_casemap() == dict(server=server)

    def test_casemap_must_match_server(self):
        with pytest.raises(CasemapMismatch):
            Bound('x', server=Server(), casemap='ascii')

    def test_server_is_not_owned(self):
        server = Server()
        ob = Bound('x', server=server)
        del server
        assert ob.server is None
        assert ob.casemap == casemap.RFC1459

    def test_fits(self):
        server = Server()
        ob = Bound('x', server=server)
        assert ob.fits_with_server_and_casemap()
        assert ob.fits_with_server_and_casemap(server=server, casemap='rfc1459')
        assert not ob.fits_with_server_and_casemap(server=Server())
        assert not ob.fits_with_server_and_casemap(casemap='ascii')


class TestIRCFoldedCase:
    def test_hash_follows_casemap(self):
        assert hash(IRCFoldedCase('Nick[]')) == hash(IRCFoldedCase('nick{}'))

    def test_ordering(self):
        assert IRCFoldedCase('abc') < IRCFoldedCase('ABD')
        assert IRCFoldedCase('B') > 'a'

    def test_other_casemap(self):
        assert IRCFoldedCase('Nick^', 'strict-rfc1459').lower() == 'nick^'
        assert IRCFoldedCase('nick', 'ascii').upper() == 'NICK'
