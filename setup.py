#!/usr/bin/env python
#
# muxcodec: self-describing, multiplexed serialization codecs.
#
# Copyright 2018-eternity Tyler Goodlet.

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.

# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

from setuptools import setup

with open('docs/README.rst', encoding='utf-8') as f:
    readme = f.read()


setup(
    name="muxcodec",
    version='0.1.0a1dev0',  # alpha zone
    description='self-describing header-prefixed codecs with multiplexed dispatch',
    long_description=readme,
    license='AGPLv3',
    author='Tyler Goodlet',
    maintainer='Tyler Goodlet',
    maintainer_email='goodboy_foss@protonmail.com',
    platforms=['linux', 'windows'],
    packages=[
        'muxcodec',
        'muxcodec.codecs',  # built-in codecs and the mux
    ],
    install_requires=[

        # task-name aware logging
        'trio',

        # tooling
        'colorlog',

        # structured data codecs
        'msgspec',
    ],
    extras_require={
        'test': ['pytest'],
    },
    tests_require=['pytest'],
    python_requires=">=3.11",
    keywords=[
        'codec',
        'serialization',
        'multicodec',
        'msgpack',
        'msgspec',
    ],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Operating System :: POSIX :: Linux",
        "Operating System :: Microsoft :: Windows",
        "License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.11",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
    ],
)
