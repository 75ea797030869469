# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Module Name>
  engine.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  publicly-usable operations for importing and deleting keys, encrypting,
  decrypting, signing and verifying data with the installed gpg.

  Every payload operation follows the same steps: check the gpg version (if
  the operation is version gated), stage the payload in a scoped temporary
  file, let the runner point gpg at it and, only if gpg succeeded, read gpg's
  output file. Staged files are removed before the operation returns.

  ```
  engine = Engine(verbose=True)
  engine.import_key(armored_public_key)

  ok, message = engine.encrypt(b"attack at dawn", ["alice@example.com"])
  ```

"""
import logging

import pgp_engine.formats as formats
import pgp_engine.log
import pgp_engine.settings
import pgp_engine.tmp_path as tmp_path
from pgp_engine.exceptions import GPGVersionError
from pgp_engine.gpg.runner import Runner
from pgp_engine.models.result import Failure, Success

# Inherits from pgp_engine base logger (c.f. pgp_engine.log)
LOG = logging.getLogger(__name__)


class Engine:
  """Stages payloads for gpg and returns uniform results.

  Attributes:
    runner: The object invoking gpg, see pgp_engine.gpg.runner.Runner for
        the capabilities it must provide.

    verbose: If true, each operation is logged at INFO level, on the
        pgp_engine base logger's handler unless the caller reconfigured
        logging.

  """

  def __init__(self, runner=None, verbose=False, runner_factory=Runner):
    """
    <Arguments>
      runner: (optional)
              A runner instance. If not passed, one is created with
              runner_factory.

      verbose: (optional)
              Log each operation. Also passed on to the runner. If the
              pgp_engine base logger does not show INFO messages, its level
              is lowered to INFO.

      runner_factory: (optional)
              Callable without arguments returning a runner. Default is
              pgp_engine.gpg.runner.Runner.

    """
    self.runner = runner if runner is not None else runner_factory()
    self.verbose = verbose
    self.runner.verbose = verbose

    if verbose and not LOG.isEnabledFor(logging.INFO):
      pgp_engine.log.LOGGER.setLevelVerboseOrQuiet(True, False)


  def _log(self, message):
    if self.verbose:
      LOG.info(message)


  def _validate_gpg_version(self):
    """Raise GPGVersionError unless the runner reports a gpg version that
    starts with settings.REQUIRED_GPG_VERSION_PREFIX. """
    required_prefix = pgp_engine.settings.REQUIRED_GPG_VERSION_PREFIX
    version = self.runner.version()
    if not version.startswith(required_prefix):
      raise GPGVersionError(required_prefix, version)


  def _run_staged(self, run, payload, *args):
    """Write payload to a scoped input path, call run with the input path, a
    scoped output path and args, and return the output on success. """
    with tmp_path.create() as input_path, tmp_path.create() as output_path:
      tmp_path.write(input_path, payload)
      if not run(input_path, output_path, *args):
        return Failure()

      try:
        return Success(tmp_path.read(output_path))

      except OSError as e:
        LOG.warning("gpg succeeded but its output could not be read: "
            "{}".format(e))
        return Failure()


  def import_key(self, key_contents):
    """
    <Purpose>
      Import the (armored or binary) key material into gpg's key store.

    <Arguments>
      key_contents:
              Public or private key material. (bytes or str)

    <Exceptions>
      pgp_engine.exceptions.GPGVersionError:
              If gpg is missing or not of the required version.

    <Side Effects>
      Adds keys to gpg's key store.

    <Returns>
      Success (without data) or Failure.

    """
    self._log("Import Key")
    self._validate_gpg_version()

    with tmp_path.create() as path:
      tmp_path.write(path, key_contents)
      if self.runner.import_key_from_file(path):
        return Success()

      return Failure()


  def verify_signature(self, signature_data):
    """
    <Purpose>
      Verify a signed message, e.g. one created with `sign`, and recover the
      signed content.

    <Arguments>
      signature_data:
              The signed message. (bytes or str)

    <Exceptions>
      pgp_engine.exceptions.GPGVersionError:
              If gpg is missing or not of the required version.

    <Returns>
      Success with the signed content, or Failure, e.g. if the signature is
      invalid or the signing key is unknown.

    """
    self._log("Verify Signature")
    self._validate_gpg_version()
    return self._run_staged(self.runner.verify_signature_file,
        signature_data)


  def decrypt(self, encrypted_data, passphrase=None):
    """
    <Purpose>
      Decrypt a message for a private key in gpg's key store.

    <Arguments>
      encrypted_data:
              The encrypted message. (bytes or str)

      passphrase: (optional)
              Passphrase of the private key. It is handed to gpg through a
              pipe, never as argument.

    <Exceptions>
      pgp_engine.exceptions.GPGVersionError:
              If gpg is missing or not of the required version.

    <Returns>
      Success with the plaintext, or Failure.

    """
    self._log("Decrypt")
    self._validate_gpg_version()
    return self._run_staged(self.runner.decrypt_file, encrypted_data,
        passphrase)


  def encrypt(self, plaintext_data, recipients):
    """
    <Purpose>
      Encrypt data for one or more recipients whose public keys are in gpg's
      key store.

    <Arguments>
      plaintext_data:
              The data to encrypt. (bytes or str)

      recipients:
              Non-empty list or tuple of recipient ids, see read_recipients.

    <Exceptions>
      securesystemslib.exceptions.FormatError:
              If recipients is empty or malformed. Nothing is staged or run.

    <Returns>
      Success with the encrypted message, or Failure.

    """
    self._log("Encrypt")
    formats.check_recipients(recipients)
    return self._run_staged(self.runner.encrypt_file, plaintext_data,
        recipients)


  def sign(self, plaintext_data, passphrase=None):
    """Sign data with gpg's default private key, see verify_signature.
    Returns Success with the signed message, or Failure. """
    self._log("Sign")
    return self._run_staged(self.runner.sign_file, plaintext_data,
        passphrase)


  def delete_all_keys(self):
    """Delete all private keys, then all public keys. Returns True if every
    attempted deletion succeeded, which includes having nothing to delete. """
    deleted_private = self.delete_all_private_keys()
    deleted_public = self.delete_all_public_keys()
    return all(deleted_private.values()) and all(deleted_public.values())


  def delete_all_private_keys(self):
    """
    <Purpose>
      Attempt to delete each private key in gpg's key store. A failed
      deletion does not stop the deletion of the remaining keys.

    <Exceptions>
      pgp_engine.exceptions.GPGVersionError:
              If gpg is missing or not of the required version.

    <Returns>
      A dict mapping each fingerprint to whether its deletion succeeded.

    """
    self._log("Delete all private keys")
    self._validate_gpg_version()

    results = {}
    for fingerprint in self.runner.read_private_key_fingerprints():
      results[fingerprint] = self.runner.delete_private_key(fingerprint)

    return results


  def delete_all_public_keys(self):
    """Same as delete_all_private_keys, for public keys. A public key can only
    be deleted once its private key is gone. """
    self._log("Delete all public keys")
    self._validate_gpg_version()

    results = {}
    for fingerprint in self.runner.read_public_key_fingerprints():
      results[fingerprint] = self.runner.delete_public_key(fingerprint)

    return results


  def read_recipients(self):
    """Return the recipient ids of the public and then of the private keys in
    gpg's key store, without duplicates, in first-seen order. """
    self._log("Read recipients")
    recipients = []
    for recipient in (self.runner.read_public_key_recipients() +
        self.runner.read_private_key_recipients()):
      if recipient not in recipients:
        recipients.append(recipient)

    return recipients
