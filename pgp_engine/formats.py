# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  formats.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Helpers to validate API inputs. A failed check is a caller contract
  violation and raises securesystemslib.exceptions.FormatError.

"""
from securesystemslib.exceptions import FormatError


def _err(arg, expected):
  return FormatError("expected {}, got '{} ({})'".format(
      expected, arg, type(arg)))


def _check_str(arg):
  if not isinstance(arg, str):
    raise _err(arg, "str")


def _check_non_empty_str(arg):
  _check_str(arg)
  if not arg:
    raise _err(arg, "non-empty str")


def _check_str_list(arg):
  if not isinstance(arg, list):
    raise _err(arg, "list")

  for item in arg:
    _check_str(item)


def check_command(cmd):
  """Raise FormatError if cmd is not a non-empty list of str. """
  _check_str_list(cmd)
  if not cmd:
    raise _err(cmd, "non-empty command list")


def check_recipients(recipients):
  """Raise FormatError unless recipients is a non-empty ordered sequence of
  non-empty str. """
  if isinstance(recipients, (str, bytes)) or \
      not isinstance(recipients, (list, tuple)):
    raise _err(recipients, "list or tuple of recipient ids")

  if not recipients:
    raise FormatError("Recipients cannot be empty")

  for recipient in recipients:
    _check_non_empty_str(recipient)


def check_fingerprint(fingerprint):
  """Raise FormatError if fingerprint is not a non-empty str. Fingerprints
  are opaque, their structure is not checked. """
  _check_non_empty_str(fingerprint)
