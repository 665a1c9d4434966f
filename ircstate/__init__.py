"""
A client's model of IRC state: casemaps, netmasks, users, channels and
their modes, and the features a server advertises.
"""

import contextlib
from importlib import metadata


def _get_version():
    with contextlib.suppress(Exception):
        return metadata.version('ircstate')
    return 'unknown'
