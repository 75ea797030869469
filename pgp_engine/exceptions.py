# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  exceptions.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Define the errors that pgp_engine raises instead of reporting a failed
  result. Following the practice from securesystemslib the names chosen for
  exception classes end in 'Error'.

  Ordinary cryptographic failures (bad passphrase, invalid signature, unknown
  key) are never raised, see pgp_engine.models.result.

"""
from securesystemslib.exceptions import Error


class ConfigurationError(Error):
  """Indicates that the installed gpg can't be used by pgp_engine. """

class GPGVersionError(ConfigurationError):
  """Indicates that the installed gpg is missing or reports a version that
  does not start with the required prefix. """

  def __init__(self, required_prefix, version):
    super(GPGVersionError, self).__init__()
    self.required_prefix = required_prefix
    self.version = version

  def __str__(self):
    if not self.version:
      return ("GPG version could not be determined, is gpg installed? "
          "Version '{}*' is required.".format(self.required_prefix))

    return "GPG version '{}' is incorrect, version '{}*' is required.".format(
        self.version, self.required_prefix)
