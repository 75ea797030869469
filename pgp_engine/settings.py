# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  settings.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  A central place to define default settings that can be used throughout the
  package.

  Defaults can be changed,
   - here (hardcoded),
   - programmatically, e.g.
     ```
     import pgp_engine.settings
     pgp_engine.settings.GPG_HOME = "/home/user/.gnupg-app"
     ```
  - or, when using pgp-tool, with environment variables or RCfiles, see the
    `pgp_engine.user_settings` module

"""
# The debug setting is used to set to the pgp_engine base logger to
# logging.DEBUG
DEBUG = False

# Name or path of the gpg executable. If None, `gpg2` is used if it is found
# on the PATH, `gpg` otherwise (see pgp_engine.gpg.constants)
GPG_COMMAND = None

# Name or path of the gpg-connect-agent executable. If None,
# `gpg-connect-agent` is looked up on the PATH
GPG_CONNECT_AGENT_COMMAND = None

# Passed to gpg as `--homedir`. If None, gpg uses its default home directory
GPG_HOME = None

# Version gated engine operations require the installed gpg to report a
# version starting with this prefix
REQUIRED_GPG_VERSION_PREFIX = "2."

# Parent directory for staging directories. If None, the platform default
# temporary directory is used
TEMP_DIR = None

# Seconds to wait for a gpg subprocess. None waits indefinitely
SUBPROCESS_TIMEOUT = None
