# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Module Name>
  constants.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  aggregates the gpg command line fragments and the record types of gpg's
  `--with-colons` key listings
"""
import shutil

# By default, we use gpg2 if it exists. Otherwise, we assume gpg is the
# GnuPG 2.x executable.
GPG2_COMMAND = "gpg2"
GPG_COMMAND = "gpg"

GPG_VERSION_ARGS = ["--version"]

# Options passed to every other gpg invocation to never prompt or block on
# the terminal
GPG_BATCH_ARGS = ["--batch", "--yes", "--no-tty"]
GPG_HOME_ARG = "--homedir"

# The passphrase is written to gpg's stdin (file descriptor 0), which requires
# the loopback pinentry on gpg >= 2.1
GPG_PASSPHRASE_ARGS = ["--pinentry-mode", "loopback", "--passphrase-fd", "0"]

GPG_IMPORT_ARG = "--import"
GPG_OUTPUT_ARG = "--output"
GPG_DECRYPT_ARG = "--decrypt"
GPG_ENCRYPT_ARG = "--encrypt"
GPG_SIGN_ARG = "--sign"
GPG_RECIPIENT_ARG = "--recipient"
# Imported keys are not certified, encrypting to them requires overriding the
# trust model
GPG_TRUST_ARGS = ["--trust-model", "always"]

GPG_LIST_PUBLIC_KEYS_ARGS = ["--with-colons", "--fingerprint", "--list-keys"]
GPG_LIST_PRIVATE_KEYS_ARGS = ["--with-colons", "--fingerprint",
    "--list-secret-keys"]

GPG_DELETE_PUBLIC_KEY_ARG = "--delete-keys"
GPG_DELETE_PRIVATE_KEY_ARG = "--delete-secret-keys"

# Machine readable status lines are written to stdout (file descriptor 1),
# commands that use them must write their payload to an `--output` file
GPG_STATUS_ARGS = ["--status-fd", "1"]

# See doc/DETAILS in the GnuPG sources for status lines. A good signature
# yields VALIDSIG, signatures by expired or revoked keys are not accepted.
STATUS_PREFIX = "[GNUPG:]"
STATUS_VALID_SIGNATURE = "VALIDSIG"
STATUS_INVALID_SIGNATURE = {"BADSIG", "ERRSIG", "EXPSIG", "EXPKEYSIG",
    "REVKEYSIG"}

# gpg-agent answers from its passphrase cache regardless of the passphrase
# passed via loopback pinentry, `reloadagent` flushes that cache. An agent
# that is not running has nothing cached and is not started.
GPG_CONNECT_AGENT_COMMAND = "gpg-connect-agent"
GPG_CONNECT_AGENT_ARGS = ["--no-autostart"]
GPG_CLEAR_PASSPHRASE_CACHE_ARGS = ["reloadagent", "/bye"]

# See doc/DETAILS in the GnuPG sources for the `--with-colons` format. Fields
# are separated by ':', the record type is field 1.
RECORD_PUBLIC_KEY = "pub"
RECORD_PRIVATE_KEY = "sec"
RECORD_PUBLIC_SUB_KEY = "sub"
RECORD_PRIVATE_SUB_KEY = "ssb"
RECORD_FINGERPRINT = "fpr"
RECORD_USER_ID = "uid"

# Field 2 (validity) of a uid record, 'r' is revoked, 'e' is expired
INVALID_USER_ID_VALIDITY = {"r", "e"}

# Field 10 holds the fingerprint of fpr records and the user id of uid records
USER_ID_FIELD = 9
FINGERPRINT_FIELD = 9
VALIDITY_FIELD = 1


def find_gpg_command():
  """Return `gpg2` if it is found on the PATH, `gpg` otherwise. """
  if shutil.which(GPG2_COMMAND):
    return GPG2_COMMAND

  return GPG_COMMAND
