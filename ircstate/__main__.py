"""
Inspect the state an IRC server advertises.

Feed the text of the 004 (MYINFO) and 005 (ISUPPORT) replies and see the
features the client model derives from them:

    python -m ircstate --myinfo "irc.example.net ircd-2.11 aoOirw abeIklmnoOpqrstv" \\
        CHANTYPES=#& PREFIX=(ov)@+ CHANMODES=beI,k,l,imnpst MAXCHANNELS=20

With --match, report which of the --user netmasks a mask selects.
"""

import argparse
import pprint

import jaraco.logging

from . import _get_version
from .server import Server


def get_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='ircstate', description=__doc__.strip().split('\n\n')[0]
    )
    parser.add_argument('isupport', nargs='*', help="ISUPPORT tokens")
    parser.add_argument('--myinfo', help="text of the MYINFO reply")
    parser.add_argument(
        '--casemap', help="casemapping to assume, as if advertised first"
    )
    parser.add_argument(
        '--user',
        dest='users',
        action='append',
        default=[],
        help="netmask of a known user (repeatable)",
    )
    parser.add_argument('--match', help="mask to look up among the users")
    parser.add_argument('--version', action='version', version=_get_version())
    jaraco.logging.add_arguments(parser)
    return parser.parse_args(argv)


def main(argv=None):
    args = get_args(argv)
    jaraco.logging.setup(args)
    server = Server()
    if args.myinfo:
        server.parse_my_info(args.myinfo)
    if args.casemap:
        server.parse_isupport('CASEMAPPING=' + args.casemap)
    server.parse_isupport(args.isupport)
    for mask in args.users:
        server.user(mask)

    print("server:", server.hostname, server.version)
    print("casemap:", server.casemap)
    pprint.pprint(dict(server.supports))
    if args.match:
        for user in server.find_users(args.match):
            print("match:", user.fullform)


if __name__ == '__main__':
    main()
