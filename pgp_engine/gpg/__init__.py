# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Module Name>
  gpg

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Drive a locally installed gpg through its command line. We opted for a
  Popen-based construction over the gpgme python bindings, given that gpgme
  is often shipped separately, while users of OpenPGP are almost guaranteed
  to have gpg installed.

  `runner.Runner` knows how to invoke gpg for each capability and how to
  read its exit status and listings. `engine.Engine` stages payloads in
  temporary files, calls the runner and returns uniform results.
"""
