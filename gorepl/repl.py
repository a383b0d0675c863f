# --                                                            ; {{{1
#
# File        : gorepl/repl.py
# Maintainer  : Felix C. Stegerman <flx@obfusk.net>
# Date        : 2026-10-18
#
# Copyright   : Copyright (C) 2026  Felix C. Stegerman
# Version     : v0.0.1
# License     : GPLv3+
#
# --                                                            ; }}}1

                                                                # {{{1
r"""
The interactive loop, and the colon-directives it understands.

>>> import io
>>> from gorepl.eval import Session
>>> s = Session(io.StringIO(), io.StringIO())
>>> dispatch(s, ":quit")
False
>>> dispatch(s, ":frobnicate")
True
>>> s.stderr.getvalue()
'unknown command: :frobnicate\n'
>>> dispatch(s, ":import")
True
>>> s.stderr.getvalue().splitlines()[-1]
'usage: :import PATH...'
>>> s.clear()
"""                                                             # }}}1

import logging, shlex, sys

from . import read as R

from .data import GoreplError, DirectiveError

logger = logging.getLogger(__name__)

PS1, PS2 = "gorepl> ", "..... "

def prompt(s = PS1): return input(s)

def cmd_import(session, args):
  if not args: raise DirectiveError("usage: :import PATH...")
  for path in args: session.add_import(path)

def cmd_include(session, args):
  if len(args) != 1: raise DirectiveError("usage: :include PATH")
  session.include(args[0])

def cmd_quit(session, args):
  return False

COMMANDS = {
  "import"  : cmd_import,
  "include" : cmd_include,
  "quit"    : cmd_quit,
}

def dispatch(session, line):                                    # {{{1
  """
  Handle one (complete) input: a directive or Go code.  Returns False
  to end the loop.
  """

  if not line.lstrip().startswith(":"):
    session.eval(line); return True
  try:
    cmd, *args = shlex.split(line.strip()[1:]) or [""]
    f = COMMANDS.get(cmd)
    if f is None:
      raise DirectiveError("unknown command: " + line.strip())
    return f(session, args) is not False
  except ValueError as e:
    print("bad command:", e, file = session.stderr)
  except GoreplError as e:
    logger.debug("directive failed: %r", e)
    print(e, file = session.stderr)
  return True
                                                                # }}}1

def read(first = PS1):
  """
  Read lines until the input is complete; EOF at the first prompt
  raises EOFError.
  """
  lines = [prompt(first)]
  while not R.complete("\n".join(lines)):
    try:
      lines.append(prompt(PS2))
    except EOFError:
      break
  return "\n".join(lines)

def repl(session):                                              # {{{1
  """
  Read-Eval-Print loop.  Committed fragments are not shown again;
  only the output of each new fragment is printed.
  """
  if sys.stdin.isatty():
    try:
      import readline
    except ImportError:
      pass
  while True:
    try:
      line = read()
    except EOFError:
      print(); break
    except KeyboardInterrupt:
      print(); continue
    if line.strip() and not dispatch(session, line): break
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
