# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  tmp_path.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Scoped staging paths for payloads handed to and received from gpg.

  Each path lives in its own freshly created directory that only the current
  user can access. The directory, and with it anything written to the path,
  is removed when the scope is left, no matter how it is left:

  ```
  with pgp_engine.tmp_path.create() as input_path, \
      pgp_engine.tmp_path.create() as output_path:
    pgp_engine.tmp_path.write(input_path, plaintext)
    ...
  ```

"""
import contextlib
import logging
import os
import shutil
import tempfile

import pgp_engine.settings

# Inherits from pgp_engine base logger (c.f. pgp_engine.log)
LOG = logging.getLogger(__name__)

PREFIX = "pgp-engine-"
FILENAME = "payload"


def _remove(directory):
  """Remove the passed staging directory. Errors are logged, not raised, so
  that they never replace an error raised inside the scope or the scope's
  result. """
  try:
    shutil.rmtree(directory)

  except OSError as e:
    LOG.warning("Could not remove temporary directory '{}': {}".format(
        directory, e))


@contextlib.contextmanager
def create():
  """
  <Purpose>
    Create a private temporary directory below `settings.TEMP_DIR` and yield
    the path of a not yet existing file inside of it. The directory is
    created with mode 0700 and a unique name, so that concurrent callers
    never share a path.

  <Exceptions>
    OSError:
            If the staging directory cannot be created.

  <Side Effects>
    Creates a directory, which is removed with all its contents on exit.

  <Returns>
    (yields) The path (str) of a file that does not exist yet.

  """
  directory = tempfile.mkdtemp(prefix=PREFIX,
      dir=pgp_engine.settings.TEMP_DIR)
  try:
    yield os.path.join(directory, FILENAME)

  finally:
    _remove(directory)


def write(path, data):
  """Write data (bytes or str, the latter is UTF-8 encoded) to path. """
  if isinstance(data, str):
    data = data.encode("utf-8")

  with open(path, "wb") as f:
    f.write(data)


def read(path):
  """Return the contents of path as bytes. """
  with open(path, "rb") as f:
    return f.read()
