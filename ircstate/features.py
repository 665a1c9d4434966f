import collections
import copy
import logging
import re

import more_itertools
from jaraco.collections import KeyTransformingDict

from . import casemap as casemaps
from .dict import IRCDict
from .errors import UnknownCasemap

log = logging.getLogger(__name__)


class FeatureSet(KeyTransformingDict):
    """
    An implementation of features as loaded from an ISUPPORT server directive.

    Each feature is loaded into the key of the same name (but lowercased
    to match Python sensibilities), and is also available as an attribute.

    >>> f = FeatureSet()
    >>> f.load('PREFIX=(abc)+-/ CHANMODES=b,k,l,imnpst')
    >>> f['prefix'] == dict(modes=['a', 'b', 'c'], prefixes=['+', '-', '/'])
    True
    >>> f.chanmodes['typed']
    ['i', 'm', 'n', 'p', 's', 't']

    Order of prefix is relevant, so it is retained.

    >>> tuple(f.prefix_modes())
    ('+', '-', '/')

    Features not understood are kept as given.

    >>> f.load_feature('EXTBAN=~,qjncrRa')
    >>> f['EXTBAN']
    '~,qjncrRa'
    >>> f.load_feature('WHOX')
    >>> f.whox
    True
    """

    defaults = dict(
        casemapping='rfc1459',
        chanlimit={},
        chanmodes=dict(typea=None, typeb=None, typec=None, typed=None),
        channellen=200,
        chantypes='#&',
        excepts=None,
        idchan={},
        invex=None,
        kicklen=None,
        maxlist={},
        modes=3,
        network=None,
        nicklen=9,
        prefix=dict(modes=['o', 'v'], prefixes=['@', '+']),
        safelist=None,
        statusmsg=None,
        std=None,
        targmax=IRCDict(),
        topiclen=None,
    )
    "standard (RFC1459) features, in force until the server says otherwise"

    deferred = dict(
        maxchannels='CHANLIMIT={chantypes}:{value}',
    )
    "legacy features rewritten once the rest of the line is known"

    def __init__(self):
        super().__init__()
        self.reset()

    @staticmethod
    def transform_key(key):
        return key.lower()

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def reset(self):
        "install the default features"
        self.clear()
        for name, value in copy.deepcopy(self.defaults).items():
            self[name] = value

    def remove(self, feature_name):
        "clear a feature, as a -NAME token does"
        self.load_feature('-' + feature_name)

    def load(self, line):
        """
        Load the features from an ISUPPORT line, given as text or as a
        sequence of tokens.

        Legacy features that depend on others are applied in a second pass.

        >>> f = FeatureSet()
        >>> f.load('MAXCHANNELS=10 CHANTYPES=#&')
        >>> f.chanlimit
        {'#&': 10}
        """
        tokens = line.split() if isinstance(line, str) else line
        current, legacy = more_itertools.partition(self._is_deferred, tokens)
        for token in current:
            self.load_feature(token)
        for token in legacy:
            rewritten = self._rewrite(token)
            if rewritten:
                self.load_feature(rewritten)

    def _is_deferred(self, feature):
        name, sep, value = feature.partition('=')
        return name.lstrip('-').lower() in self.deferred

    def _rewrite(self, feature):
        name, sep, value = feature.partition('=')
        name = name.lstrip('-')
        if not value or feature.startswith('-'):
            log.warning("No %s value", name.upper())
            return None
        chantypes = self['chantypes']
        if not chantypes:
            log.warning("Ignoring %s: the server supports no channels", feature)
            return None
        template = self.deferred[name.lower()]
        return template.format(chantypes=chantypes, value=value)

    def load_feature(self, feature):
        """
        Load a single KEY, KEY=VALUE or -KEY token.

        A negated feature is loaded with the value False, so that each
        feature decides what clearing means for it.

        >>> f = FeatureSet()
        >>> f.load_feature('-PREFIX')
        >>> f.prefix
        {'modes': [], 'prefixes': []}
        >>> f.load_feature('-EXCEPTS')
        >>> f.excepts
        'e'
        """
        if not feature:
            return

        # negating
        negated = feature[0] == '-'
        if negated:
            feature = feature[1:]

        name, sep, value = feature.partition('=')
        name = name.lower()
        # KEY= is the same as KEY
        value = False if negated else value or None

        loader = getattr(self, '_load_' + name, self._other)
        try:
            loader(name, value)
        except ValueError as exc:
            log.warning("Malformed %s value %r: %s", name.upper(), value, exc)

    @staticmethod
    def _require(name, value):
        if not value:
            log.warning("No %s value", name.upper())
            return False
        return True

    def _load_casemapping(self, name, value):
        if not self._require(name, value):
            return
        if value not in casemaps.names():
            log.warning("Unknown casemapping %s, using %s", value, casemaps.DEFAULT)
        self[name] = value

    def _load_network(self, name, value):
        if self._require(name, value):
            self[name] = value

    def _load_chanlimit(self, name, value):
        """
        >>> f = FeatureSet()
        >>> f.load_feature('CHANLIMIT=#&:50,+:')
        >>> f.chanlimit == {'#&': 50, '+': None}
        True
        >>> f.load_feature('TARGMAX=PRIVMSG:4,kick:1')
        >>> f.targmax['KICK']
        1
        """
        if not self._require(name, value):
            return
        for group in value.split(','):
            target, count = string_int_pair(group)
            self[name][target] = count

    _load_idchan = _load_maxlist = _load_targmax = _load_chanlimit

    def _load_maxtargets(self, name, value):
        if not self._require(name, value):
            return
        count = int(value)
        self['targmax']['PRIVMSG'] = count
        self['targmax']['NOTICE'] = count

    def _load_chanmodes(self, name, value):
        "channel mode letters"
        if not self._require(name, value):
            return
        groups = more_itertools.padded(value.split(','), '', 4)
        for kind, letters in zip(('typea', 'typeb', 'typec', 'typed'), groups):
            self[name][kind] = list(letters)

    def _integer(self, name, value):
        self[name] = int(value) if value else None

    _load_channellen = _load_kicklen = _load_modes = _load_topiclen = _integer

    def _load_chantypes(self, name, value):
        # None when the server supports no channels at all
        self[name] = value or None

    def _load_excepts(self, name, value):
        self[name] = value or 'e'

    def _load_invex(self, name, value):
        self[name] = value or 'I'

    def _load_nicklen(self, name, value):
        if self._require(name, value):
            self[name] = int(value)

    def _load_prefix(self, name, value):
        """
        channel user prefixes

        >>> f = FeatureSet()
        >>> f.load_feature('PREFIX=')
        >>> f.prefix
        {'modes': [], 'prefixes': []}
        """
        if not value:
            self[name] = dict(modes=[], prefixes=[])
            return
        match = re.fullmatch(r'\((.*)\)(.*)', value)
        if not match or len(match.group(1)) != len(match.group(2)):
            raise ValueError("expected (modes)prefixes of equal length")
        modes, prefixes = match.groups()
        self[name] = dict(modes=list(modes), prefixes=list(prefixes))

    def _load_safelist(self, name, value):
        if value not in (None, False):
            log.warning("No %s value must be specified, got %s", name.upper(), value)
            return
        self[name] = True if value is None else None

    def _load_statusmsg(self, name, value):
        if self._require(name, value):
            self[name] = list(value)

    def _load_std(self, name, value):
        if self._require(name, value):
            self[name] = value.split(',')

    def _other(self, name, value):
        if value is False:
            self.pop(name, None)
            return
        self[name] = True if value is None else value

    def prefix_modes(self):
        """
        The user modes given by each status prefix, in order.

        >>> list(FeatureSet().prefix_modes().items())
        [('@', 'o'), ('+', 'v')]
        """
        prefix = self['prefix']
        return collections.OrderedDict(zip(prefix['prefixes'], prefix['modes']))

    def casemap(self):
        "The advertised Casemap, or the default one if it is unknown"
        try:
            return casemaps.lookup(self['casemapping'])
        except UnknownCasemap:
            return casemaps.DEFAULT


def string_int_pair(target, sep=':'):
    name, value = target.split(sep)
    value = int(value) if value else None
    return name, value
