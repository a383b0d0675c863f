# --                                                            ; {{{1
#
# File        : gorepl/misc.py
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
Regexes and small helpers shared by the reader, the diagnostic parser
and the synthesizer.

>>> pkgname("encoding/json")
'json'
"""                                                             # }}}1

import regex, sys

                                                                # {{{1
RX_IDENT          = r"[\p{L}_][\p{L}\p{N}_]*"
RX_IDENT_C        = regex.compile(RX_IDENT)

RX_COMMENT        = r"//[^\n]*|/\*(?:[^*]|\*(?!/))*\*/"
RX_NUMBER         = r"0[xX][0-9a-fA-F_]*(?:\.[0-9a-fA-F_]*)?" \
                    r"(?:[pP][+-]?[0-9_]+)?i?|0[bB][01_]+|0[oO][0-7_]+|" \
                    r"(?:[0-9][0-9_]*(?:\.[0-9_]*)?|\.[0-9][0-9_]*)" \
                    r"(?:[eE][+-]?[0-9_]+)?i?"
RX_OP             = r"\.\.\.|<<=|>>=|&\^=|&&|\|\||<-|\+\+|--|==|!=|" \
                    r"<=|>=|:=|\+=|-=|\*=|/=|%=|&=|\|=|\^=|<<|>>|&\^|" \
                    r"[-+*/%&|^<>=!()\[\]{},;.:~]"
RX_SPACE          = r"[ \t\r\f]+"

RX_DIAG           = r"(?P<file>[^\s:][^:]*\.go):(?P<line>[0-9]+)" \
                    r"(?::(?P<col>[0-9]+))?:\s?(?P<msg>.*)"
RX_HEADER         = r"#\s.*"
RX_TOO_MANY       = r"too many errors"
RX_PANIC          = r"(?:panic|fatal error): .*"
RX_EXIT           = r"exit status [0-9]+"

RX_PACKAGE_C      = regex.compile(r"^package\s+" + RX_IDENT,
                                  regex.MULTILINE)
RX_TOPLEVEL_C     = regex.compile(r"(?:func|type)\b")
RX_VERSION_C      = regex.compile(r"v[0-9]+")

KEYWORDS          = frozenset("""
  break case chan const continue default defer else fallthrough for
  func go goto if import interface map package range return select
  struct switch type var
""".split())

# keywords after which a newline ends the statement
SEMI_KEYWORDS     = frozenset("break continue fallthrough return".split())

# keywords that can only start a statement
STMT_KEYWORDS     = frozenset("""
  break continue defer fallthrough for go goto if return select switch
""".split())

# keywords whose statements have a header (init; cond; post)
HEADER_KEYWORDS   = frozenset("for if switch".split())

ASSIGN_OPS        = frozenset("""
  = := += -= *= /= %= &= |= ^= <<= >>= &^=
""".split())

OPENERS, CLOSERS  = "([{", ")]}"
                                                                # }}}1

def isident(s):                                                 # {{{1
  """
  Is the string a Go identifier (keywords included)?

  >>> isident("foo")
  True
  >>> isident("_x1")
  True
  >>> isident("子猫")
  True
  >>> isident("1x")
  False
  >>> isident("a.b")
  False
  """

  return bool(RX_IDENT_C.fullmatch(s))
                                                                # }}}1

def pkgname(path):                                              # {{{1
  """
  Guess the package name an import path is referred to by; follows
  the usual conventions (major version suffixes, gopkg.in versions,
  go- prefixes and -go suffixes).

  >>> pkgname("fmt")
  'fmt'
  >>> pkgname("path/filepath")
  'filepath'
  >>> pkgname("math/rand/v2")
  'rand'
  >>> pkgname("gopkg.in/yaml.v3")
  'yaml'
  >>> pkgname("github.com/mattn/go-isatty")
  'isatty'
  >>> pkgname("github.com/foo/bar-go")
  'bar'
  """

  parts = path.rstrip("/").split("/")
  name  = parts[-1]
  if len(parts) > 1 and RX_VERSION_C.fullmatch(name):
    name = parts[-2]
  name = regex.sub(r"\.v[0-9]+$", "", name)
  name = regex.sub(r"^go-|-go$", "", name)
  return regex.sub(r"[^\p{L}\p{N}_]", "", name)
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
