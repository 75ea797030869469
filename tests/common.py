#!/usr/bin/env python
"""
<Program Name>
  common.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Common code for pgp_engine unittests, import like so:
  `import tests.common`

  Tests importing this module, should be run from the project root, e.g.:
  `python -m unittest tests.test_engine`
  or using the aggregator script (preferred way):
  `python tests/runtests.py`.

"""
import os
import sys
import inspect
import shutil
import tempfile
import unittest
from unittest.mock import patch

import pgp_engine.process as process
from pgp_engine.gpg.runner import Runner


def _find_gpg2():
  """Return True if a gpg 2.x is available for tests that use the real
  tool. """
  if os.getenv("TEST_SKIP_GPG"):
    return False

  return Runner().version().startswith("2.")

HAVE_GPG2 = _find_gpg2()


class TmpDirMixin():
  """Mixin with classmethods to create and change into a temporary directory,
  and to change back to the original CWD and remove the temporary directory.

  """
  @classmethod
  def set_up_test_dir(cls):
    """Back up CWD, and create and change into temporary directory. """
    cls.original_cwd = os.getcwd()
    cls.test_dir = os.path.realpath(tempfile.mkdtemp())
    os.chdir(cls.test_dir)

  @classmethod
  def tear_down_test_dir(cls):
    """Change back to original CWD and remove temporary directory. """
    os.chdir(cls.original_cwd)
    shutil.rmtree(cls.test_dir)


class GPGHomeMixin():
  """Mixin with classmethods to create isolated gpg home directories with
  freshly generated keys, and to remove them again (stopping the gpg-agent
  started for each home).

  Home directories are created in the system temporary directory, because
  gpg-agent socket paths must be short.

  """
  gpg_homes = None

  @classmethod
  def _gpg(cls, homedir, args, **kwargs):
    cmd = [Runner().gpg_command, "--batch", "--no-tty", "--homedir",
        homedir] + args
    return process.run(cmd, check=True, stdout=process.PIPE,
        stderr=process.PIPE, **kwargs)

  @classmethod
  def generate_key(cls, homedir, user_id, passphrase=""):
    """Generate a key without expiration for user_id in homedir, protected by
    passphrase ("" for none). """
    cls._gpg(homedir, ["--pinentry-mode", "loopback", "--passphrase",
        passphrase, "--quick-generate-key", user_id, "default", "default",
        "never"])

  @classmethod
  def set_up_gpg_home(cls, user_id=None, passphrase=""):
    """Create a gpg home and, if user_id is passed, generate a key for it.
    Returns the home. """
    homedir = tempfile.mkdtemp(prefix="gpg-")
    if cls.gpg_homes is None:
      cls.gpg_homes = []
    cls.gpg_homes.append(homedir)

    if user_id:
      cls.generate_key(homedir, user_id, passphrase)

    return homedir

  @classmethod
  def export_public_key(cls, homedir, user_id):
    """Return the armored public key of user_id from homedir. """
    return cls._gpg(homedir, ["--armor", "--export", user_id]).stdout

  @classmethod
  def export_private_key(cls, homedir, user_id, passphrase=""):
    """Return the armored private key of user_id from homedir. """
    return cls._gpg(homedir, ["--pinentry-mode", "loopback", "--passphrase",
        passphrase, "--armor", "--export-secret-keys", user_id]).stdout

  @classmethod
  def tear_down_gpg_homes(cls):
    for homedir in cls.gpg_homes or []:
      try:
        process.run(["gpgconf", "--homedir", homedir, "--kill", "gpg-agent"],
            stdout=process.DEVNULL, stderr=process.DEVNULL)
      except OSError:
        pass
      shutil.rmtree(homedir, ignore_errors=True)

    cls.gpg_homes = []


class FakeRunner():
  """In-memory stand-in for pgp_engine.gpg.runner.Runner.

  Payload capabilities read the staged input and, if `succeed` is true,
  write `output_prefix + input` to the output path. On failure they write
  `PARTIAL_OUTPUT`, which must never reach a caller.

  Keys are kept in dicts of fingerprint to recipient id, deleting removes
  them unless the fingerprint is in `undeletable`.

  All paths the fake is handed are recorded in `paths`, all capability calls
  in `calls`.

  """
  PARTIAL_OUTPUT = b"partial garbage"

  def __init__(self, version="2.2.27", succeed=True, output_prefix=b"out:"):
    self.gpg_version = version
    self.succeed = succeed
    self.output_prefix = output_prefix
    self.verbose = False
    self.calls = []
    self.paths = []
    self.inputs = []
    self.private_keys = {}
    self.public_keys = {}
    self.undeletable = set()

  def _record(self, name, *args):
    self.calls.append((name,) + args)

  def _transform(self, input_path, output_path):
    self.paths += [input_path, output_path]
    with open(input_path, "rb") as f:
      data = f.read()
    self.inputs.append(data)

    with open(output_path, "wb") as f:
      if self.succeed:
        f.write(self.output_prefix + data)
      else:
        f.write(self.PARTIAL_OUTPUT)

    return self.succeed

  def call_names(self):
    return [call[0] for call in self.calls]

  def version(self):
    self._record("version")
    return self.gpg_version

  def import_key_from_file(self, path):
    self._record("import_key_from_file", path)
    self.paths.append(path)
    with open(path, "rb") as f:
      self.inputs.append(f.read())
    return self.succeed

  def verify_signature_file(self, signature_path, output_path):
    self._record("verify_signature_file", signature_path, output_path)
    return self._transform(signature_path, output_path)

  def decrypt_file(self, input_path, output_path, passphrase=None):
    self._record("decrypt_file", input_path, output_path, passphrase)
    return self._transform(input_path, output_path)

  def encrypt_file(self, input_path, output_path, recipients):
    self._record("encrypt_file", input_path, output_path, recipients)
    return self._transform(input_path, output_path)

  def sign_file(self, input_path, output_path, passphrase=None):
    self._record("sign_file", input_path, output_path, passphrase)
    return self._transform(input_path, output_path)

  def read_private_key_fingerprints(self):
    self._record("read_private_key_fingerprints")
    return list(self.private_keys)

  def read_public_key_fingerprints(self):
    self._record("read_public_key_fingerprints")
    return list(self.public_keys)

  def delete_private_key(self, fingerprint):
    self._record("delete_private_key", fingerprint)
    if fingerprint in self.undeletable:
      return False
    del self.private_keys[fingerprint]
    return True

  def delete_public_key(self, fingerprint):
    self._record("delete_public_key", fingerprint)
    if fingerprint in self.undeletable:
      return False
    del self.public_keys[fingerprint]
    return True

  def read_public_key_recipients(self):
    self._record("read_public_key_recipients")
    return list(self.public_keys.values())

  def read_private_key_recipients(self):
    self._record("read_private_key_recipients")
    return list(self.private_keys.values())


class CliTestCase(unittest.TestCase):
  """TestCase subclass providing a test helper that patches sys.argv with
  passed arguments and asserts a SystemExit with a return code equal
  to the passed status argument.

  Subclasses of CliTestCase require a class variable that stores the main
  function of the cli tool to test as staticmethod, e.g.:

  ```
  import tests.common
  from pgp_engine.pgp_tool import main as pgp_tool_main

  class TestPGPTool(tests.common.CliTestCase):
    cli_main_func = staticmethod(pgp_tool_main)
    ...

  ```
  """
  cli_main_func = None

  def __init__(self, *args, **kwargs):
    """Constructor that checks for the presence of a callable cli_main_func
    class variable. And stores the filename of the module containing that
    function, to be used as first argument when patching sys.argv in
    self.assert_cli_sys_exit.
    """
    if not callable(self.cli_main_func):
      raise Exception("Subclasses of `CliTestCase` need to assign the main"
          " function of the cli tool to test using `staticmethod()`: {}"
          .format(self.__class__.__name__))

    file_path = inspect.getmodule(self.cli_main_func).__file__
    self.file_name = os.path.basename(file_path)

    super(CliTestCase, self).__init__(*args, **kwargs)


  def assert_cli_sys_exit(self, cli_args, status):
    """Test helper to mock command line call and assert return value.
    The passed args does not need to contain the command line tool's name.
    This is assessed from  `self.cli_main_func`
    """
    with patch.object(sys, "argv", [self.file_name]
        + cli_args), self.assertRaises(SystemExit) as raise_ctx:
      self.cli_main_func() # pylint: disable=not-callable

    self.assertEqual(raise_ctx.exception.code, status)
