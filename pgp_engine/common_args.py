# Copyright the pgp-engine contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  common_args.py

<Started>
  Oct 19, 2026

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Provides a collection of constants that can be used as `*args` or `**kwargs`
  to argparse.ArgumentParser.add_argument() for pgp-tool subcommands with
  common command line arguments.

  Example Usage:

  ```
  from pgp_engine.common_args import OUTPUT_ARGS, OUTPUT_KWARGS
  parser = argparse.ArgumentParser()
  parser.add_argument(*OUTPUT_ARGS, **OUTPUT_KWARGS)
  ```

"""
import getpass

INPUT_ARGS = ["input"]
INPUT_KWARGS = {
  "metavar": "<file>",
  "help": "path to the input file, or '-' to read from standard input."
}

OUTPUT_ARGS = ["-o", "--output"]
OUTPUT_KWARGS = {
  "dest": "output",
  "required": False,
  "metavar": "<file>",
  "help": ("path to write the result to. If '--output' is not passed, the"
           " result is written to standard output.")
}

RECIPIENT_ARGS = ["-r", "--recipient"]
RECIPIENT_KWARGS = {
  "dest": "recipients",
  "required": True,
  "action": "append",
  "metavar": "<id>",
  "help": ("key id, fingerprint or e-mail address of a recipient. Can be"
           " passed multiple times. See 'pgp-tool recipients' for the"
           " available ids.")
}

PASSPHRASE_ARGS = ["-P", "--passphrase"]
PASSPHRASE_KWARGS = {
  "nargs": "?",
  "const": True,
  "metavar": "<passphrase>",
  "help": ("passphrase of the private key. Passing '-P' without <passphrase>"
           " opens a prompt. If no passphrase is passed, the key is treated"
           " as unprotected.")
}
def parse_passphrase_args(args):
  """Parse -P/--passphrase optional arg (nargs=?, const=True) and prompt if
  it was passed without value. """
  # -P was provided without argument (True)
  if args.passphrase is True:
    return getpass.getpass("Enter passphrase: ")

  # -P was not provided (None), or provided with argument (<passphrase>)
  return args.passphrase

GPG_HOME_ARGS = ["--gpg-home"]
GPG_HOME_KWARGS = {
  "dest": "gpg_home",
  "type": str,
  "metavar": "<path>",
  "help": ("path to a GPG home directory used as key store. If '--gpg-home'"
           " is not passed, the configured or default GPG home directory is"
           " used.")
}

VERBOSE_ARGS = ["-v", "--verbose"]
VERBOSE_KWARGS = {
  "dest": "verbose",
  "action": "store_true",
  "help": "show more output"
}

QUIET_ARGS = ["-q", "--quiet"]
QUIET_KWARGS = {
  "dest": "quiet",
  "action": "store_true",
  "help": "suppress all output"
}


def title_case_action_groups(parser):
  """Capitalize the first character of all words in the title of each action
  group of the passed parser. """
  for action_group in parser._action_groups: # pylint: disable=protected-access
    action_group.title = action_group.title.title()
