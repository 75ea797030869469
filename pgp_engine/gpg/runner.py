# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Module Name>
  runner.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Invoke the gpg command line tool, one method per capability needed by the
  engine.

  Success is decided by gpg's exit status only. Every method that runs a gpg
  command reports a failed run (non-zero exit status, missing executable or
  an expired `settings.SUBPROCESS_TIMEOUT`) as `False`, `""` or `[]` rather
  than raising. Contract violations, such as an empty list of recipients,
  are raised.

  Passphrases are never passed as command line argument or environment
  variable. They are written to a pipe connected to gpg's stdin, which gpg
  reads as passphrase file descriptor (see constants.GPG_PASSPHRASE_ARGS).
  Before each command that uses a private key, gpg-agent's passphrase cache
  for the key store is flushed, so that the passed passphrase (or its
  absence) alone decides whether the key can be unlocked.

  A signed message only counts as verified if gpg exits with status zero
  and reports a valid signature on its status channel. Plain, encrypt-only
  or unverifiable messages, which gpg also "decrypts" with status zero, are
  rejected.

"""
import email.utils
import logging
import re

import pgp_engine.formats as formats
import pgp_engine.process as process
import pgp_engine.settings
from pgp_engine.gpg import constants

# Inherits from pgp_engine base logger (c.f. pgp_engine.log)
LOG = logging.getLogger(__name__)


def parse_fingerprints(listing, primary_record):
  """
  <Purpose>
    Return the fingerprints of the primary keys in a `--with-colons
    --fingerprint` key listing. Fingerprints of subkeys are skipped.

  <Arguments>
    listing:
            The listing printed by gpg. (str)

    primary_record:
            constants.RECORD_PUBLIC_KEY or constants.RECORD_PRIVATE_KEY

  <Returns>
    A list of fingerprints (str) in listing order.

  """
  fingerprints = []
  # Record type of the key the next 'fpr' record belongs to
  owner = None
  for line in listing.splitlines():
    fields = line.split(":")
    record = fields[0]

    if record == constants.RECORD_FINGERPRINT:
      if owner == primary_record and len(fields) > constants.FINGERPRINT_FIELD:
        fingerprint = fields[constants.FINGERPRINT_FIELD]
        if fingerprint and fingerprint not in fingerprints:
          fingerprints.append(fingerprint)
      owner = None

    elif record in (constants.RECORD_PUBLIC_KEY, constants.RECORD_PRIVATE_KEY,
        constants.RECORD_PUBLIC_SUB_KEY, constants.RECORD_PRIVATE_SUB_KEY):
      owner = record

  return fingerprints


def _unescape(value):
  """gpg escapes ':' and control characters in colon listings as C-style
  '\\xNN' sequences. """
  return re.sub(r"\\x([0-9a-fA-F]{2})",
      lambda match: chr(int(match.group(1), 16)), value)


def parse_recipients(listing):
  """
  <Purpose>
    Return identifiers usable with `--recipient` from the user ids in a
    `--with-colons` key listing.

    The e-mail address of a user id is used if it has one, the complete
    user id otherwise. Revoked and expired user ids are skipped.

  <Arguments>
    listing:
            The listing printed by gpg. (str)

  <Returns>
    A list of recipient ids (str) in listing order, without duplicates.

  """
  recipients = []
  for line in listing.splitlines():
    fields = line.split(":")
    if (fields[0] != constants.RECORD_USER_ID or
        len(fields) <= constants.USER_ID_FIELD):
      continue

    if fields[constants.VALIDITY_FIELD] in constants.INVALID_USER_ID_VALIDITY:
      continue

    user_id = _unescape(fields[constants.USER_ID_FIELD])
    _, address = email.utils.parseaddr(user_id)
    recipient = address if "@" in address else user_id

    if recipient and recipient not in recipients:
      recipients.append(recipient)

  return recipients


def parse_signature_status(status):
  """
  <Purpose>
    Return True if gpg's `--status-fd` output reports a valid signature and
    no bad, unverifiable or expired one.

  <Arguments>
    status:
            The status lines printed by gpg. (str)

  <Returns>
    True or False.

  """
  codes = set()
  for line in status.splitlines():
    fields = line.split()
    if len(fields) >= 2 and fields[0] == constants.STATUS_PREFIX:
      codes.add(fields[1])

  return (constants.STATUS_VALID_SIGNATURE in codes and
      not codes & constants.STATUS_INVALID_SIGNATURE)


class Runner:
  """Runs gpg for each engine capability.

  Attributes:
    gpg_command: Name or path of the gpg executable.

    homedir: gpg home directory, i.e. the key store, or None for gpg's
        default.

    verbose: If true, the error output of failed gpg runs is logged.

    agent_command: Name or path of the gpg-connect-agent executable, used
        to flush gpg-agent's passphrase cache.

  """

  def __init__(self, gpg_command=None, homedir=None, verbose=False):
    self.gpg_command = (gpg_command or pgp_engine.settings.GPG_COMMAND or
        constants.find_gpg_command())
    self.homedir = homedir or pgp_engine.settings.GPG_HOME
    self.verbose = verbose
    self.agent_command = (pgp_engine.settings.GPG_CONNECT_AGENT_COMMAND or
        constants.GPG_CONNECT_AGENT_COMMAND)


  def _command(self, args, passphrase=False):
    """Return the full gpg command for the passed capability args. """
    cmd = [self.gpg_command] + constants.GPG_BATCH_ARGS
    if self.homedir:
      cmd += [constants.GPG_HOME_ARG, self.homedir]

    if passphrase:
      cmd += constants.GPG_PASSPHRASE_ARGS

    return cmd + args


  def _run(self, cmd, passphrase=None):
    """Run cmd, return the CompletedProcess or None if gpg could not be run
    to completion. """
    kwargs = {"stdout": process.PIPE, "stderr": process.PIPE}
    if passphrase is None:
      kwargs["stdin"] = process.DEVNULL

    else:
      kwargs["input"] = passphrase.encode("utf-8") + b"\n"

    LOG.debug("Running '{}'".format(" ".join(cmd)))
    try:
      proc = process.run(cmd, **kwargs)

    except (OSError, process.TimeoutExpired) as e:
      LOG.debug("Could not run '{}': {}".format(cmd[0], e))
      return None

    if proc.returncode != 0 and self.verbose:
      LOG.info("'{}' exited with {}: {}".format(" ".join(cmd),
          proc.returncode, proc.stderr.decode("utf-8", "replace").strip()))

    return proc


  def _succeeds(self, args, passphrase=None):
    proc = self._run(self._command(args, passphrase is not None), passphrase)
    return proc is not None and proc.returncode == 0


  def _clear_passphrase_cache(self):
    """Flush the passphrases gpg-agent cached for the key store. A failure is
    only logged, as no agent means no cache. """
    cmd = [self.agent_command] + constants.GPG_CONNECT_AGENT_ARGS
    if self.homedir:
      cmd += [constants.GPG_HOME_ARG, self.homedir]

    proc = self._run(cmd + constants.GPG_CLEAR_PASSPHRASE_CACHE_ARGS)
    if proc is None or proc.returncode != 0:
      LOG.debug("Could not flush gpg-agent's passphrase cache")


  def _succeeds_with_private_key(self, args, passphrase=None):
    self._clear_passphrase_cache()
    return self._succeeds(args, passphrase)


  def _listing(self, args):
    """Return the stdout of a successful listing command, '' otherwise. """
    proc = self._run(self._command(args))
    if proc is None or proc.returncode != 0:
      return ""

    return proc.stdout.decode("utf-8", "replace")


  def version(self):
    """Return the version reported by `gpg --version`, e.g. '2.2.27', or '' if
    gpg could not be run or exited with non-zero status. """
    proc = self._run([self.gpg_command] + constants.GPG_VERSION_ARGS)
    if proc is None or proc.returncode != 0:
      return ""

    lines = proc.stdout.decode("utf-8", "replace").splitlines()
    if not lines or not lines[0].split():
      return ""

    # e.g. 'gpg (GnuPG) 2.2.27'
    return lines[0].split()[-1]


  def import_key_from_file(self, path):
    """Import the keys in the file at path into the key store. """
    return self._succeeds([constants.GPG_IMPORT_ARG, path])


  def verify_signature_file(self, signature_path, output_path):
    """Verify the signed message at signature_path and write the signed
    content to output_path. Returns True only if gpg reports a valid
    signature. """
    proc = self._run(self._command(constants.GPG_STATUS_ARGS +
        [constants.GPG_OUTPUT_ARG, output_path, constants.GPG_DECRYPT_ARG,
        signature_path]))
    if proc is None or proc.returncode != 0:
      return False

    if not parse_signature_status(proc.stdout.decode("utf-8", "replace")):
      if self.verbose:
        LOG.info("'{}' holds no valid signature".format(signature_path))
      return False

    return True


  def decrypt_file(self, input_path, output_path, passphrase=None):
    """Decrypt the message at input_path and write the plaintext to
    output_path. """
    return self._succeeds_with_private_key([constants.GPG_OUTPUT_ARG,
        output_path, constants.GPG_DECRYPT_ARG, input_path], passphrase)


  def encrypt_file(self, input_path, output_path, recipients):
    """
    <Purpose>
      Encrypt the file at input_path for recipients and write the message to
      output_path.

    <Arguments>
      input_path:
              Path to the plaintext.

      output_path:
              Path, which must not exist yet, to write the message to.

      recipients:
              Non-empty list or tuple of recipient ids, e.g. key ids or
              e-mail addresses.

    <Exceptions>
      securesystemslib.exceptions.FormatError:
              If recipients is empty or not a sequence of non-empty str.

    <Returns>
      True if gpg exited with status zero, False otherwise.

    """
    formats.check_recipients(recipients)

    recipient_args = []
    for recipient in recipients:
      recipient_args += [constants.GPG_RECIPIENT_ARG, recipient]

    return self._succeeds(constants.GPG_TRUST_ARGS +
        [constants.GPG_OUTPUT_ARG, output_path] + recipient_args +
        [constants.GPG_ENCRYPT_ARG, input_path])


  def sign_file(self, input_path, output_path, passphrase=None):
    """Sign the file at input_path with the default key and write the signed
    message to output_path. """
    return self._succeeds_with_private_key([constants.GPG_OUTPUT_ARG,
        output_path, constants.GPG_SIGN_ARG, input_path], passphrase)


  def read_private_key_fingerprints(self):
    return parse_fingerprints(
        self._listing(constants.GPG_LIST_PRIVATE_KEYS_ARGS),
        constants.RECORD_PRIVATE_KEY)


  def read_public_key_fingerprints(self):
    return parse_fingerprints(
        self._listing(constants.GPG_LIST_PUBLIC_KEYS_ARGS),
        constants.RECORD_PUBLIC_KEY)


  def delete_private_key(self, fingerprint):
    formats.check_fingerprint(fingerprint)
    return self._succeeds([constants.GPG_DELETE_PRIVATE_KEY_ARG, fingerprint])


  def delete_public_key(self, fingerprint):
    formats.check_fingerprint(fingerprint)
    return self._succeeds([constants.GPG_DELETE_PUBLIC_KEY_ARG, fingerprint])


  def read_public_key_recipients(self):
    return parse_recipients(
        self._listing(constants.GPG_LIST_PUBLIC_KEYS_ARGS))


  def read_private_key_recipients(self):
    return parse_recipients(
        self._listing(constants.GPG_LIST_PRIVATE_KEYS_ARGS))
