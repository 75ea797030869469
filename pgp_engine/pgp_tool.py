#!/usr/bin/env python
# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  pgp_tool.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  A CLI tool to encrypt, decrypt, sign and verify data and to manage keys
  with the installed gpg, using pgp_engine.gpg.engine.Engine.

<Return Codes>
  2 if an exception occurred, including argument parsing
  1 if the gpg operation failed
  0 if the gpg operation succeeded

"""
import argparse
import logging
import sys

import pgp_engine.user_settings
from pgp_engine import __version__
from pgp_engine.common_args import (
    INPUT_ARGS, INPUT_KWARGS, OUTPUT_ARGS, OUTPUT_KWARGS, RECIPIENT_ARGS,
    RECIPIENT_KWARGS, PASSPHRASE_ARGS, PASSPHRASE_KWARGS, GPG_HOME_ARGS,
    GPG_HOME_KWARGS, VERBOSE_ARGS, VERBOSE_KWARGS, QUIET_ARGS, QUIET_KWARGS,
    parse_passphrase_args, title_case_action_groups)
from pgp_engine.gpg.engine import Engine
from pgp_engine.gpg.runner import Runner

# Command line interfaces should use pgp_engine base logger (c.f.
# pgp_engine.log)
LOG = logging.getLogger("pgp_engine")


def _read_input(path):
  if path == "-":
    return sys.stdin.buffer.read()

  with open(path, "rb") as f:
    return f.read()


def _write_output(path, data):
  if path is None:
    sys.stdout.buffer.write(data)
    sys.stdout.flush()
    return

  with open(path, "wb") as f:
    f.write(data)


def _write_result(args, result):
  """Write the data of a successful result, return result.success. """
  if result:
    _write_output(args.output, result.data)

  return result.success


def _encrypt(engine, args):
  return _write_result(args,
      engine.encrypt(_read_input(args.input), args.recipients))


def _decrypt(engine, args):
  return _write_result(args, engine.decrypt(_read_input(args.input),
      parse_passphrase_args(args)))


def _sign(engine, args):
  return _write_result(args, engine.sign(_read_input(args.input),
      parse_passphrase_args(args)))


def _verify(engine, args):
  return _write_result(args, engine.verify_signature(_read_input(args.input)))


def _import(engine, args):
  success = True
  for path in args.inputs:
    if not engine.import_key(_read_input(path)):
      LOG.warning("Could not import keys from '{}'".format(path))
      success = False

  return success


def _recipients(engine, args): # pylint: disable=unused-argument
  for recipient in engine.read_recipients():
    print(recipient)

  return True


def _delete_keys(engine, args): # pylint: disable=unused-argument
  return engine.delete_all_keys()


def create_parser():
  """Create and return the parser for pgp-tool and its subcommands. """
  parser = argparse.ArgumentParser(
      formatter_class=argparse.RawDescriptionHelpFormatter,
      description="pgp-tool encrypts, decrypts, signs and verifies data and"
                  " manages keys using the installed gpg (version 2.x).")

  parser.epilog = """EXAMPLE USAGE

Import Alice's public key and encrypt 'report.txt' for her.

  pgp-tool import alice.asc
  pgp-tool encrypt -r alice@example.com -o report.txt.gpg report.txt


Decrypt 'report.txt.gpg', prompting for the passphrase of the private key.

  pgp-tool decrypt -P -o report.txt report.txt.gpg


Sign a message read from standard input and verify it again.

  echo "hello" | pgp-tool sign - | pgp-tool verify -

"""
  parser.add_argument(*GPG_HOME_ARGS, **GPG_HOME_KWARGS)

  verbosity_args = parser.add_mutually_exclusive_group(required=False)
  verbosity_args.add_argument(*VERBOSE_ARGS, **VERBOSE_KWARGS)
  verbosity_args.add_argument(*QUIET_ARGS, **QUIET_KWARGS)

  parser.add_argument("--version", action="version",
                      version="{} {}".format(parser.prog, __version__))

  subparsers = parser.add_subparsers(dest="command", metavar="<command>")
  subparsers.required = True

  encrypt_parser = subparsers.add_parser("encrypt",
      help="encrypt data for one or more recipients")
  encrypt_parser.add_argument(*RECIPIENT_ARGS, **RECIPIENT_KWARGS)
  encrypt_parser.add_argument(*OUTPUT_ARGS, **OUTPUT_KWARGS)
  encrypt_parser.add_argument(*INPUT_ARGS, **INPUT_KWARGS)
  encrypt_parser.set_defaults(func=_encrypt)

  decrypt_parser = subparsers.add_parser("decrypt",
      help="decrypt data with a private key from the key store")
  decrypt_parser.add_argument(*PASSPHRASE_ARGS, **PASSPHRASE_KWARGS)
  decrypt_parser.add_argument(*OUTPUT_ARGS, **OUTPUT_KWARGS)
  decrypt_parser.add_argument(*INPUT_ARGS, **INPUT_KWARGS)
  decrypt_parser.set_defaults(func=_decrypt)

  sign_parser = subparsers.add_parser("sign",
      help="sign data with the default private key")
  sign_parser.add_argument(*PASSPHRASE_ARGS, **PASSPHRASE_KWARGS)
  sign_parser.add_argument(*OUTPUT_ARGS, **OUTPUT_KWARGS)
  sign_parser.add_argument(*INPUT_ARGS, **INPUT_KWARGS)
  sign_parser.set_defaults(func=_sign)

  verify_parser = subparsers.add_parser("verify",
      help="verify a signed message and output the signed content")
  verify_parser.add_argument(*OUTPUT_ARGS, **OUTPUT_KWARGS)
  verify_parser.add_argument(*INPUT_ARGS, **INPUT_KWARGS)
  verify_parser.set_defaults(func=_verify)

  import_parser = subparsers.add_parser("import",
      help="import public or private keys into the key store")
  import_parser.add_argument("inputs", nargs="+", metavar="<file>",
      help="path to a key file, or '-' to read from standard input.")
  import_parser.set_defaults(func=_import)

  recipients_parser = subparsers.add_parser("recipients",
      help="list the recipient ids of all keys in the key store")
  recipients_parser.set_defaults(func=_recipients)

  delete_parser = subparsers.add_parser("delete-keys",
      help="delete all private and public keys from the key store")
  delete_parser.set_defaults(func=_delete_keys)

  title_case_action_groups(parser)

  return parser


def main():
  """Parse arguments, load user settings and run the requested subcommand
  on an Engine. Exits with 0, 1 or 2, see <Return Codes>. """
  parser = create_parser()
  args = parser.parse_args()

  LOG.setLevelVerboseOrQuiet(args.verbose, args.quiet)

  try:
    # Override defaults in settings.py with environment variables and RCfiles
    pgp_engine.user_settings.set_settings()

    engine = Engine(runner=Runner(homedir=args.gpg_home),
        verbose=args.verbose)
    success = args.func(engine, args)

  except Exception as e:
    LOG.error("(pgp-tool) {0}: {1}".format(type(e).__name__, e))
    sys.exit(2)

  if not success:
    LOG.error("(pgp-tool) gpg {} failed".format(args.command))
    sys.exit(1)

  sys.exit(0)


if __name__ == "__main__":
  main()
