# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  user_settings.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Provides methods to parse environment variables (`get_env`) and RCfiles
  (`get_rc`) and to override default settings (`set_settings`) defined in the
  `pgp_engine.settings` module.

  Check out the respective docstrings to learn about the requirements for
  environment variables and RCfiles (includes examples).

"""
import configparser
import logging
import os

import pgp_engine.settings

# Inherits from pgp_engine base logger (c.f. pgp_engine.log)
LOG = logging.getLogger(__name__)


USER_PATH = os.path.expanduser("~")

# Prefix required by environment variables to be considered as settings
ENV_PREFIX = "PGP_ENGINE_"

# List of considered rcfile paths in the order they get parsed and overridden,
# i.e. the same setting in `/etc/pgp_engine/config` and `.pgp_enginerc` (cwd)
# uses the latter
RC_PATHS = [
  os.path.join("/etc", "pgp_engine", "config"),
  os.path.join(USER_PATH, ".config", "pgp_engine", "config"),
  os.path.join(USER_PATH, ".pgp_enginerc"),
  ".pgp_enginerc"
]

# List of settings, for which defaults exist in `settings.py`
PGP_ENGINE_SETTINGS = [
  "GPG_COMMAND", "GPG_CONNECT_AGENT_COMMAND", "GPG_HOME",
  "REQUIRED_GPG_VERSION_PREFIX", "TEMP_DIR", "SUBPROCESS_TIMEOUT"
]

# Settings that are not used as str
CONVERTERS = {
  "SUBPROCESS_TIMEOUT": float
}


def get_env():
  """
  <Purpose>
    Parse environment for variables with prefix `ENV_PREFIX` and return
    a dict of key-value pairs.

    The prefix `ENV_PREFIX` is stripped from the keys in the returned dict.

    Example:

    ```
    # Exporting variables in e.g. bash
    export PGP_ENGINE_GPG_HOME='/home/user/.gnupg-app'
    export PGP_ENGINE_SUBPROCESS_TIMEOUT='30'
    ```

    produces

    ```
    {
      "GPG_HOME": "/home/user/.gnupg-app",
      "SUBPROCESS_TIMEOUT": "30"
    }
    ```

  <Exceptions>
    None.

  <Side Effects>
    None.

  <Returns>
    A dictionary containing the parsed key-value pairs.

  """
  env_dict = {}

  for name, value in os.environ.items():
    if (name.startswith(ENV_PREFIX) and
        len(name) > len(ENV_PREFIX)):
      stripped_name = name[len(ENV_PREFIX):]

      env_dict[stripped_name] = value

  return env_dict


def get_rc():
  """
  <Purpose>
    Reads RCfiles from the paths defined in `RC_PATHS` and returns
    a dictionary with all parsed key-value pairs.

    The RCfile format is as expected by Python's builtin `ConfigParser`.
    Section titles in RCfiles are ignored when parsing the key-value pairs.
    However, there has to be at least one section defined.

    The paths in `RC_PATHS` are ordered in reverse precedence, i.e. each file's
    settings override a previous file's settings.

    Example:

    ```
    # E.g. file `.pgp_enginerc` in current working directory
    [pgp-engine settings]
    GPG_COMMAND = gpg2
    GPG_HOME = /home/user/.gnupg-app
    ```

    produces

    ```
    {
      "GPG_COMMAND": "gpg2",
      "GPG_HOME": "/home/user/.gnupg-app"
    }
    ```

  <Exceptions>
    None.

  <Side Effects>
    Reads files from disk.

  <Returns>
    A dictionary containing the parsed key-value pairs.

  """
  rc_dict = {}

  config = configparser.ConfigParser()
  # Reset `optionxform`'s default case conversion to enable case-sensitivity
  config.optionxform = str
  config.read(RC_PATHS)

  for section in config.sections():
    for name, value in config.items(section):
      rc_dict[name] = value

  return rc_dict


def set_settings():
  """
  <Purpose>
    Calls functions that read pgp_engine related environment variables and
    RCfiles and overrides variables in `settings.py` with the retrieved
    values, if they are whitelisted in `PGP_ENGINE_SETTINGS`.

    Settings defined in RCfiles take precedence over settings defined in
    environment variables.

  <Exceptions>
    ValueError:
            If a setting can't be converted to the type it is used as, e.g.
            a non-numeric SUBPROCESS_TIMEOUT.

  <Side Effects>
    Reads environment variables and files from disk.

  <Returns>
    None.

  """
  user_settings = get_env()
  user_settings.update(get_rc())

  # If the user has specified one of the settings whitelisted in
  # PGP_ENGINE_SETTINGS per envvar or rcfile, override the item in
  # `settings.py`
  for setting in PGP_ENGINE_SETTINGS:
    user_setting = user_settings.get(setting)
    if user_setting:
      if setting in CONVERTERS:
        user_setting = CONVERTERS[setting](user_setting)

      LOG.info("Setting (user): {0}={1}".format(
          setting, user_setting))
      setattr(pgp_engine.settings, setting, user_setting)

    else:
      default_setting = getattr(pgp_engine.settings, setting)
      LOG.info("Setting (default): {0}={1}".format(
          setting, default_setting))
