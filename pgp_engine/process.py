# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  process.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Provide a common interface for Python's subprocess module to:

  - namespace subprocess constants (DEVNULL, PIPE) and
  - provide a custom `subprocess.run` wrapper, used by the gpg runner

"""
import logging
import shlex
import subprocess

import pgp_engine.formats as formats
import pgp_engine.settings


DEVNULL = subprocess.DEVNULL
PIPE = subprocess.PIPE
TimeoutExpired = subprocess.TimeoutExpired


# Inherits from pgp_engine base logger (c.f. pgp_engine.log)
LOG = logging.getLogger(__name__)


def run(cmd, check=False, timeout=None, **kwargs):
  """
  <Purpose>
    Provide wrapper for `subprocess.run` where:

    * `timeout` defaults to `pgp_engine.settings.SUBPROCESS_TIMEOUT`, read at
      call time (None, i.e. wait indefinitely, unless configured),
    * `check` is `False` by default, callers inspect `returncode`,
    * there is only one positional argument, i.e. `cmd` that can be either
      a str (will be split with shlex) or a list of str and
    * instead of raising a ValueError if both `input` and `stdin` are passed,
      `stdin` is ignored.

  <Arguments>
    cmd:
            The command and its arguments. (list of str, or str)

    check: (default False)
            If true, and the process exits with a non-zero exit code,
            a CalledProcessError exception is raised.

    timeout: (default see settings.SUBPROCESS_TIMEOUT)
            If the timeout expires, the child process is killed and waited
            for and then subprocess.TimeoutExpired is raised.

    **kwargs:
            See subprocess.run and Frequently Used Arguments to Popen
            constructor for available kwargs.

  <Exceptions>
    securesystemslib.exceptions.FormatError:
            If the `cmd` is a list and is not a non-empty list of str.

    OSError:
            If the given command is not present or non-executable.

    subprocess.TimeoutExpired:
            If the process does not terminate after timeout seconds.

  <Side Effects>
    The side effects of executing the given command in this environment.

  <Returns>
    A subprocess.CompletedProcess instance.

  """
  # Make list of command passed as string for convenience
  if isinstance(cmd, str):
    cmd = shlex.split(cmd)
  else:
    formats.check_command(cmd)

  if timeout is None:
    timeout = pgp_engine.settings.SUBPROCESS_TIMEOUT

  # NOTE: The CPython implementation would raise a ValueError here, we just
  # don't pass on `stdin` if the user passes `input` and `stdin`
  if kwargs.get("input") is not None and "stdin" in kwargs:
    LOG.debug("stdin and input arguments may not both be used. "
        "Ignoring passed stdin: " + str(kwargs["stdin"]))
    del kwargs["stdin"]

  return subprocess.run(cmd, check=check, timeout=timeout, **kwargs)
