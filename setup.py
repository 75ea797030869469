#!/usr/bin/env python
"""
<Program Name>
  setup.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  setup.py script to install the pgp_engine package and the pgp-tool script

"""
import io
import os
import re

from setuptools import setup, find_packages


base_dir = os.path.dirname(os.path.abspath(__file__))

def get_version(filename="pgp_engine/__init__.py"):
  """
  Gather version number from specified file.

  This is done through regex processing, so the file is not imported or
  otherwise executed.

  No format verification of the resulting version number is done.
  """
  with io.open(os.path.join(base_dir, filename), encoding="utf-8") as initfile:
    for line in initfile.readlines():
      m = re.match("__version__ *= *['\"](.*)['\"]", line)
      if m:
        return m.group(1)

with io.open(os.path.join(base_dir, "README.md"), encoding="utf-8") as f:
  long_description = f.read()

setup(
  name="pgp-engine",
  description=("Encrypt, decrypt, sign, verify and manage OpenPGP keys by"
    " driving the locally installed gpg"),
  long_description_content_type="text/markdown",
  long_description=long_description,
  license="Apache-2.0",
  keywords="openpgp gpg gnupg encryption signatures",
  classifiers = [
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: Apache Software License',
    'Natural Language :: English',
    'Operating System :: POSIX',
    'Operating System :: POSIX :: Linux',
    'Operating System :: MacOS :: MacOS X',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: Implementation :: CPython',
    'Topic :: Security',
    'Topic :: Security :: Cryptography',
  ],
  python_requires=">=3.8, <4",
  packages=find_packages(exclude=["*.tests", "*.tests.*", "tests.*", "tests"]),
  install_requires=["securesystemslib>=0.18.0", "attrs"],
  extras_require={
    "test": ["pytest"]
  },
  entry_points={
    "console_scripts": ["pgp-tool = pgp_engine.pgp_tool:main"]
  },
  version=get_version(),
)
