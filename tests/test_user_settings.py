"""
<Program Name>
  test_user_settings.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Test pgp_engine/user_settings.py

"""
import os
import unittest
from unittest.mock import patch

import pgp_engine.settings
import pgp_engine.user_settings


class TestUserSettings(unittest.TestCase):
  @classmethod
  def setUpClass(self):
    self.working_dir = os.getcwd()

    # Backup settings to restore them in `tearDownClass`
    self.settings_backup = {}
    for key in dir(pgp_engine.settings):
      self.settings_backup[key] = getattr(pgp_engine.settings, key)

    # We use `rc_test` as test dir because it has a `.pgp_enginerc`, which
    # is loaded (from CWD) in `user_settings.set_settings` related tests
    self.test_dir = os.path.join(os.path.dirname(__file__), "rc_test")
    os.chdir(self.test_dir)

    os.environ["PGP_ENGINE_GPG_HOME"] = "e/n/v"
    os.environ["PGP_ENGINE_GPG_COMMAND"] = "gpg-env"
    os.environ["PGP_ENGINE_NOT_WHITELISTED"] = "parsed"
    os.environ["NOT_PARSED"] = "ignored"

    # Only consider the rcfile in CWD
    self.rc_paths_patcher = patch.object(pgp_engine.user_settings,
        "RC_PATHS", [".pgp_enginerc"])
    self.rc_paths_patcher.start()


  @classmethod
  def tearDownClass(self):
    os.chdir(self.working_dir)
    self.rc_paths_patcher.stop()

    # Other unittests might depend on defaults:
    # Restore monkey patched settings ...
    for key, val in self.settings_backup.items():
      setattr(pgp_engine.settings, key, val)

    # ... and delete test environment variables
    del os.environ["PGP_ENGINE_GPG_HOME"]
    del os.environ["PGP_ENGINE_GPG_COMMAND"]
    del os.environ["PGP_ENGINE_NOT_WHITELISTED"]
    del os.environ["NOT_PARSED"]


  def test_get_rc(self):
    """ Test rcfile parsing in CWD. """
    rc_dict = pgp_engine.user_settings.get_rc()

    # Parsed and used by `set_settings` to monkeypatch settings
    self.assertEqual(rc_dict["GPG_HOME"], "r/c/home")
    self.assertEqual(rc_dict["SUBPROCESS_TIMEOUT"], "20")

    # Parsed but ignored in `set_settings` (not in case sensitive whitelist)
    self.assertEqual(rc_dict["gpg_command"], "ignored/lowercase")
    self.assertEqual(rc_dict["new_rc_setting"], "new rc setting")


  def test_get_env(self):
    """ Test environment variables parsing and prefix. """
    env_dict = pgp_engine.user_settings.get_env()

    # Parsed but overriden by rcfile setting in `set_settings`
    self.assertEqual(env_dict["GPG_HOME"], "e/n/v")

    # Parsed and used by `set_settings`
    self.assertEqual(env_dict["GPG_COMMAND"], "gpg-env")

    # Parsed but ignored in `set_settings` (not in case sensitive whitelist)
    self.assertEqual(env_dict["NOT_WHITELISTED"], "parsed")

    # Not parsed because of missing prefix
    self.assertFalse("NOT_PARSED" in env_dict)


  def test_set_settings(self):
    """ Test precedence of rc over env, whitelisting and conversion. """
    pgp_engine.user_settings.set_settings()

    # From envvar PGP_ENGINE_GPG_COMMAND
    self.assertEqual(pgp_engine.settings.GPG_COMMAND, "gpg-env")

    # From RCfile setting (has precedence over envvar setting)
    self.assertEqual(pgp_engine.settings.GPG_HOME, "r/c/home")

    # Converted to float
    self.assertEqual(pgp_engine.settings.SUBPROCESS_TIMEOUT, 20.0)

    # Not set anywhere, default is kept
    self.assertIsNone(pgp_engine.settings.TEMP_DIR)
    self.assertEqual(pgp_engine.settings.REQUIRED_GPG_VERSION_PREFIX, "2.")

    # Not whitelisted rcfile settings are ignored by `set_settings`
    self.assertTrue("new_rc_setting" in pgp_engine.user_settings.get_rc())
    self.assertRaises(AttributeError, getattr, pgp_engine.settings,
        "NEW_RC_SETTING")

    # Not whitelisted envvars are ignored by `set_settings`
    self.assertTrue("NOT_WHITELISTED" in pgp_engine.user_settings.get_env())
    self.assertRaises(AttributeError, getattr, pgp_engine.settings,
        "NOT_WHITELISTED")

if __name__ == "__main__":
  unittest.main()
