import logging

import pytest

from ircstate.features import FeatureSet


@pytest.fixture
def features():
    return FeatureSet()


def test_defaults(features):
    assert features['casemapping'] == 'rfc1459'
    assert features['chantypes'] == '#&'
    assert features['nicklen'] == 9
    assert features['modes'] == 3
    assert features['prefix'] == dict(modes=['o', 'v'], prefixes=['@', '+'])
    assert features['chanmodes'] == dict(typea=None, typeb=None, typec=None, typed=None)


def test_defaults_are_not_shared():
    first, second = FeatureSet(), FeatureSet()
    first.load('CHANLIMIT=#:10')
    assert second['chanlimit'] == {}


def test_chanmodes(features):
    features.load('CHANMODES=b,k,l,imnpst')
    assert features['chanmodes'] == dict(
        typea=['b'],
        typeb=['k'],
        typec=['l'],
        typed=['i', 'm', 'n', 'p', 's', 't'],
    )


def test_chanmodes_missing_groups(features):
    features.load('CHANMODES=beI,k')
    assert features['chanmodes']['typec'] == []
    assert features['chanmodes']['typed'] == []


def test_maxchannels_rewrites_to_chanlimit():
    legacy, modern = FeatureSet(), FeatureSet()
    legacy.load('CHANTYPES=#& MAXCHANNELS=10')
    modern.load('CHANTYPES=#& CHANLIMIT=#&:10')
    assert legacy['chanlimit'] == modern['chanlimit'] == {'#&': 10}


def test_maxchannels_uses_chantypes_of_the_same_line(features):
    features.load('MAXCHANNELS=20 CHANTYPES=#')
    assert features['chanlimit'] == {'#': 20}


def test_maxchannels_without_chantypes(features, caplog):
    features.load('CHANTYPES= MAXCHANNELS=20')
    assert features['chanlimit'] == {}
    assert 'supports no channels' in caplog.text


def test_limit_groups_merge(features):
    features.load('CHANLIMIT=#:20 MAXLIST=b:50,eI:30')
    features.load('CHANLIMIT=&:5')
    assert features['chanlimit'] == {'#': 20, '&': 5}
    assert features['maxlist'] == {'b': 50, 'eI': 30}


def test_idchan(features):
    features.load('IDCHAN=!:5')
    assert features['idchan'] == {'!': 5}


def test_maxtargets(features):
    features.load('MAXTARGETS=4')
    assert features['targmax']['privmsg'] == 4
    assert features['targmax']['NOTICE'] == 4


def test_targmax_unlimited(features):
    features.load('TARGMAX=PRIVMSG:3,WHOIS:1,NAMES:')
    assert features['targmax']['whois'] == 1
    assert features['targmax']['names'] is None


@pytest.mark.parametrize('name', ['CHANNELLEN', 'KICKLEN', 'MODES', 'TOPICLEN'])
def test_integers(features, name):
    features.load('%s=42' % name)
    assert features[name] == 42
    features.load(name)
    assert features[name] is None


def test_nicklen(features, caplog):
    features.load('NICKLEN=30')
    assert features['nicklen'] == 30
    features.load('NICKLEN')
    assert features['nicklen'] == 30
    assert 'No NICKLEN value' in caplog.text


def test_chantypes(features):
    features.load('CHANTYPES=#&!+')
    assert features['chantypes'] == '#&!+'
    features.load('CHANTYPES=')
    assert features['chantypes'] is None


def test_excepts_and_invex(features):
    features.load('EXCEPTS INVEX')
    assert features['excepts'] == 'e'
    assert features['invex'] == 'I'
    features.load('EXCEPTS=x INVEX=y')
    assert (features['excepts'], features['invex']) == ('x', 'y')


def test_prefix(features):
    features.load('PREFIX=(qaohv)~&@%+')
    assert features['prefix']['modes'] == ['q', 'a', 'o', 'h', 'v']
    assert features['prefix']['prefixes'] == ['~', '&', '@', '%', '+']
    assert features.prefix_modes()['%'] == 'h'


def test_prefix_cleared(features):
    features.load('PREFIX')
    assert features['prefix'] == dict(modes=[], prefixes=[])


def test_malformed_prefix_keeps_rest_of_line(features, caplog):
    features.load('PREFIX=(ov)@ NETWORK=Example')
    assert features['prefix']['modes'] == ['o', 'v']
    assert features['network'] == 'Example'
    assert 'Malformed PREFIX value' in caplog.text


def test_malformed_numbers_keep_rest_of_line(features, caplog):
    with caplog.at_level(logging.WARNING):
        features.load('NICKLEN=nine CHANLIMIT=#10 TOPICLEN=300')
    assert features['nicklen'] == 9
    assert features['chanlimit'] == {}
    assert features['topiclen'] == 300
    assert 'Malformed NICKLEN value' in caplog.text
    assert 'Malformed CHANLIMIT value' in caplog.text


def test_network_and_casemapping(features, caplog):
    features.load('NETWORK=ExampleNet CASEMAPPING=ascii')
    assert features['network'] == 'ExampleNet'
    assert features.casemap().name == 'ascii'
    features.load('NETWORK')
    assert features['network'] == 'ExampleNet'
    assert 'No NETWORK value' in caplog.text


def test_unknown_casemapping(features, caplog):
    features.load('CASEMAPPING=rfc7613')
    assert features['casemapping'] == 'rfc7613'
    assert features.casemap().name == 'rfc1459'
    assert 'Unknown casemapping rfc7613' in caplog.text


def test_safelist(features, caplog):
    features.load('SAFELIST')
    assert features['safelist'] is True
    features = FeatureSet()
    features.load('SAFELIST=yes')
    assert features['safelist'] is None
    assert 'SAFELIST' in caplog.text


def test_statusmsg_and_std(features):
    features.load('STATUSMSG=@+ STD=i-d,rfc2812')
    assert features['statusmsg'] == ['@', '+']
    assert features['std'] == ['i-d', 'rfc2812']


def test_other_features(features):
    features.load('WALLCHOPS EXTBAN=~,qjncrR CHARSET=ascii')
    assert features['wallchops'] is True
    assert features['extban'] == '~,qjncrR'
    assert features.charset == 'ascii'


def test_negation_clears_through_each_feature(features):
    features.load('PREFIX=(qov)~@+ EXCEPTS=x CHANTYPES=#& CHANNELLEN=50 WALLCHOPS')
    features.load('-PREFIX -EXCEPTS -INVEX -CHANTYPES -CHANNELLEN -WALLCHOPS -UNHEARD')
    assert features['prefix'] == dict(modes=[], prefixes=[])
    assert features['excepts'] == 'e'
    assert features['invex'] == 'I'
    assert features['chantypes'] is None
    assert features['channellen'] is None
    assert 'wallchops' not in features
    assert 'unheard' not in features


def test_negation_of_features_needing_a_value(features, caplog):
    features.load('NICKLEN=30 NETWORK=Example')
    features.load('-NICKLEN -NETWORK -MAXCHANNELS')
    assert features['nicklen'] == 30
    assert features['network'] == 'Example'
    assert features['chanlimit'] == {}
    assert 'No NICKLEN value' in caplog.text
    assert 'No MAXCHANNELS value' in caplog.text


def test_negated_safelist(features):
    features.load('SAFELIST')
    features.remove('SAFELIST')
    assert features['safelist'] is None


def test_empty_value_is_no_value(features):
    features.load('PREFIX= EXCEPTS= WHOX=')
    assert features['prefix'] == dict(modes=[], prefixes=[])
    assert features['excepts'] == 'e'
    assert features['whox'] is True



def test_token_list(features):
    features.load(['CHANTYPES=#', 'NICKLEN=16'])
    assert features.chantypes == '#'
    assert features.nicklen == 16


def test_missing_attribute(features):
    with pytest.raises(AttributeError):
        features.no_such_feature
