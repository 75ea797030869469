# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  result.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Provides the result types returned by engine operations.

  A result is either a Success, carrying the payload produced by gpg, or a
  Failure, which never carries a payload. Both unpack like a
  `(success, data)` pair and are truthy only on success:

  ```
  ok, plaintext = engine.decrypt(ciphertext)

  result = engine.sign(message)
  if result:
    send(result.data)
  ```

"""
import attr


@attr.s(frozen=True, slots=True)
class Result:
  """Base class of Success and Failure. """

  def __iter__(self):
    return iter((self.success, self.data))

  def __bool__(self):
    return self.success


@attr.s(frozen=True, slots=True)
class Success(Result):
  """An operation for which gpg exited with status zero.

  Attributes:
    data: The bytes read from gpg's output file, empty for operations that
        do not produce output.

  """
  data = attr.ib(default=b"", validator=attr.validators.instance_of(bytes))
  success = True


@attr.s(frozen=True, slots=True)
class Failure(Result):
  """An operation for which gpg exited with a non-zero status, or could not
  be run at all. Anything gpg may have written is discarded. """
  success = False
  data = b""
