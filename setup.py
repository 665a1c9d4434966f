#!/usr/bin/env python

# Project skeleton maintained at https://github.com/jaraco/skeleton

import setuptools

name = 'ircstate'
description = 'Client-side model of IRC servers, channels, users and netmasks'

params = dict(
    name=name,
    version='1.0.0',
    description=description or name,
    packages=setuptools.find_packages(),
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'jaraco.collections',
        'jaraco.text',
        'jaraco.logging',
        'pytz',
        'more_itertools',
    ],
    extras_require={
        'testing': [
            'pytest>=3.5,!=3.7.3',
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
    entry_points={
        'console_scripts': [
            'ircstate = ircstate.__main__:main',
        ],
    },
)
if __name__ == '__main__':
    setuptools.setup(**params)
