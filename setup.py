#!/usr/bin/env python3
"""
Setup script for yamlrep.

yamlrep resolves YAML tags through the Failsafe, JSON and Core schemas and
maps node trees to native Python values and back. Scanning, parsing and
emitting YAML text are delegated to PyYAML.
"""

import os
import re
from setuptools import setup


def read_version():
    """Read __version__ from the package without importing it."""
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                        'yamlrep', '__init__.py')
    with open(path, encoding='utf-8') as f:
        match = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M)
    if match is None:
        raise RuntimeError("Unable to find __version__ in %s" % path)
    return match.group(1)


setup(
    name='yamlrep',
    version=read_version(),
    description='YAML schema tag resolution and native value mapping',
    packages=['yamlrep'],
    python_requires='>=3.8',
    install_requires=['PyYAML>=5.1'],
    extras_require={'test': ['pytest']},
)
