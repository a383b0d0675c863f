# --                                                            ; {{{1
#
# File        : gorepl/data.py
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
Exceptions and data types.

>>> f = Fragment(1, "1+1", "1+1", EXPRESSION, ())
>>> f
<fragment #1 expression: '1+1'>
>>> f.toplevel
False
>>> Fragment(2, "func f() {}", "func f() {}", DECLARATION, ("f",)).toplevel
True
>>> Config()
Config(toolchain='go', timeout=30.0, autoimport=False)

>>> e = CompileError([Diagnostic("undefined: foo", UNDEFINED, "foo",
...                              "./main.go", 12, 1)])
>>> print(e)
undefined: foo
>>> print(UnresolvedSymbolError(e.diagnostics[0], "foo/bar"))
undefined: foo (try :import foo/bar)
"""                                                             # }}}1

import sys

from collections import namedtuple

from . import misc as M

# === Exceptions ===

class GoreplError(Exception):
  """Base class for gorepl errors"""

class ToolchainError(GoreplError):
  """The toolchain could not be invoked."""

class ToolchainTimeout(ToolchainError):
  """The toolchain was killed after a timeout."""
  def __init__(self, cmd, timeout):
    super().__init__("timeout: {} killed after {}s".format(cmd, timeout))

class CompileError(GoreplError):                                # {{{1
  """Compilation failed; carries the diagnostics."""

  def __init__(self, diagnostics = (), rest = (), msg = None):
    self.diagnostics  = tuple(diagnostics)
    self.rest         = tuple(rest)
    if msg is None:
      msg = "\n".join([ d.message for d in self.diagnostics ] +
                      list(self.rest))
    super().__init__(msg)
                                                                # }}}1

class UnresolvedSymbolError(CompileError):
  """Undefined identifier naming a known package."""
  def __init__(self, diagnostic, path):
    self.path = path
    super().__init__([diagnostic], msg = "{} (try :import {})"
                                         .format(diagnostic.message, path))

class RuntimeFailure(GoreplError):
  """The program failed while running."""
  def __init__(self, headline, trace = ""):
    self.headline, self.trace = headline, trace
    super().__init__(headline)

class DirectiveError(GoreplError):
  """Unknown or malformed meta-command."""

# === Fragments ===

IMPORT, DECLARATION, STATEMENT, EXPRESSION = \
  "import", "declaration", "statement", "expression"

class Fragment(namedtuple("Fragment",                           # {{{1
                          "id text source kind idents".split())):
  """
  One unit of user input.  The source is what goes into the program;
  quick fixes rewrite it by creating a new fragment.
  """

  def __repr__(self):
    return "<fragment #{} {}: {!r}>".format(self.id, self.kind,
                                            self.source)

  @property
  def toplevel(self):
    """Does this declaration live outside of main()?"""
    return self.kind == DECLARATION and \
      bool(M.RX_TOPLEVEL_C.match(self.source))
                                                                # }}}1

# === Diagnostics ===

UNUSED_VALUE, UNUSED_VAR, NO_VALUE, UNDEFINED, UNUSED_IMPORT, \
SYNTAX, OTHER = "unused-value", "unused-var", "no-value", \
  "undefined", "unused-import", "syntax", "other"

Diagnostic = namedtuple("Diagnostic",
                        "message category subject file line col".split())

# === Toolchain ===

BUILD, RUN = "build", "run"

RunResult = namedtuple("RunResult", "stdout stderr code stage".split())

# candidate source starts on line start; its first line is shifted
Program = namedtuple("Program", "text start shift".split())

Config = namedtuple("Config", "toolchain timeout autoimport".split(),
                    defaults = ("go", 30.0, False))

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
