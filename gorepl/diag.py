# --                                                            ; {{{1
#
# File        : gorepl/diag.py
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
Parsing the toolchain's error stream.

The compiler reports one diagnostic per line, prefixed with its
position; type errors may continue on tab-indented lines, which are joined
onto the first.  Messages
are matched against the wording of both older and current releases.

>>> ds, rest = parse("# command-line-arguments\n"
...                  "./main.go:14:15: undefined: foo\n"
...                  "something odd\n")
>>> d = ds[0]
>>> d.message, d.category, d.subject, d.line, d.col
('undefined: foo', 'undefined', 'foo', 14, 15)
>>> rest
['something odd']
"""                                                             # }}}1

import os, regex, sys

from . import data as D
from . import misc as M

RX_DIAG_C, RX_HEADER_C, RX_TOO_MANY_C, RX_PANIC_C, RX_EXIT_C = \
  [ regex.compile(x) for x in (M.RX_DIAG, M.RX_HEADER, M.RX_TOO_MANY,
                               M.RX_PANIC, M.RX_EXIT) ]

# NB: order matters; e.g. "declared and not used" before "is not used"
CATEGORIES = tuple( (c, regex.compile(x)) for c, x in (
  (D.UNUSED_VAR   , r"declared and not used: (?P<s>\S+)"            ),
  (D.UNUSED_VAR   , r"(?P<s>\S+) declared (?:but|and) not used"     ),
  (D.UNUSED_IMPORT, r'"(?P<s>[^"]+)" imported (?:as \S+ )?and not used'),
  (D.NO_VALUE     , r"(?P<s>.+?) (?:\(no value\) )?used as value"   ),
  (D.UNUSED_VALUE , r"(?P<s>.+) evaluated but not used"             ),
  (D.UNUSED_VALUE , r"(?P<s>.+) is not used"                        ),
  (D.UNDEFINED    , r"undefined: (?P<s>\S+)"                        ),
  (D.SYNTAX       , r"syntax error: (?P<s>.*)"                      ),
))

# e.g. "(value of type func())", "(untyped int constant 2)"
RX_NOTE_C = regex.compile(r"\s+\((?:value|untyped|constant|variable)\b"
                          r"(?:[^()]|(\((?:[^()]|(?1))*\)))*\)$")

def categorize(msg):                                            # {{{1
  """
  Map a message onto a (category, subject) pair.

  >>> categorize("a declared but not used")
  ('unused-var', 'a')
  >>> categorize("declared and not used: a")
  ('unused-var', 'a')
  >>> categorize('"os" imported and not used')
  ('unused-import', 'os')
  >>> categorize('"math/rand" imported as r and not used')
  ('unused-import', 'math/rand')
  >>> categorize('log.SetPrefix("") (no value) used as value')
  ('no-value', 'log.SetPrefix("")')
  >>> categorize("1 + 1 evaluated but not used")
  ('unused-value', '1 + 1')
  >>> categorize("1 + 1 (untyped int constant 2) is not used")
  ('unused-value', '1 + 1')
  >>> categorize("func() {} (value of type func()) is not used")
  ('unused-value', 'func() {}')
  >>> categorize("f(x) is not used")
  ('unused-value', 'f(x)')
  >>> categorize("syntax error: unexpected newline")
  ('syntax', 'unexpected newline')
  >>> categorize("invalid argument: 100 (untyped int constant) for len")
  ('other', None)
  """

  for category, rx in CATEGORIES:
    m = rx.fullmatch(msg)
    if m:
      s = m.group("s")
      if category == D.UNUSED_VALUE: s = RX_NOTE_C.sub("", s)
      return category, s
  return D.OTHER, None
                                                                # }}}1

def parse(stderr):                                              # {{{1
  r"""
  Parse the error stream into diagnostics; returns (diagnostics,
  unstructured lines).  Package headers and the "too many errors"
  trailer are dropped, as are repeated diagnostics.

  >>> ds, rest = parse("./main.go:3:2: x declared and not used\n"
  ...                  "./main.go:3:2: x declared and not used\n"
  ...                  "./main.go:4: cannot use f (variable of type\n"
  ...                  "\tfunc()) as int value\n"
  ...                  "./main.go:9:1: too many errors\n")
  >>> [ (d.category, d.line, d.col) for d in ds ]
  [('unused-var', 3, 2), ('other', 4, None)]
  >>> ds[1].message
  'cannot use f (variable of type func()) as int value'
  >>> rest
  []
  """

  diags, rest, seen = [], [], set()
  for line in stderr.splitlines():
    if not line.strip() or RX_HEADER_C.fullmatch(line): continue
    if line.startswith("\t") and diags and diags[-1] is not None:
      d = diags[-1]
      diags[-1] = d._replace(message = d.message + " " + line.strip())
      continue
    m = RX_DIAG_C.fullmatch(line)
    if m is None:
      rest.append(line); continue
    msg = m.group("msg")
    if RX_TOO_MANY_C.fullmatch(msg): continue
    col = m.group("col")
    d = D.Diagnostic(msg, *categorize(msg), file = m.group("file"),
                     line = int(m.group("line")),
                     col = int(col) if col else None)
    key = (d.file, d.line, d.col, d.message)
    if key in seen: continue
    seen.add(key); diags.append(d)
  return diags, rest
                                                                # }}}1

def parse_trace(stderr):                                        # {{{1
  r"""
  Split a runtime failure into its headline and trace; the headline
  is None if there was no panic (e.g. os.Exit).

  >>> h, t = parse_trace("out\npanic: boom\n\ngoroutine 1 [running]:\n"
  ...                    "main.main()\nexit status 2\n")
  >>> h
  'panic: boom'
  >>> t.splitlines()
  ['panic: boom', '', 'goroutine 1 [running]:', 'main.main()']
  >>> parse_trace("")
  (None, '')
  """

  lines = [ x for x in stderr.splitlines()
              if not RX_EXIT_C.fullmatch(x) ]
  for i, line in enumerate(lines):
    if RX_PANIC_C.fullmatch(line):
      return line, "\n".join(lines[i:])
  return None, "\n".join(lines)
                                                                # }}}1

def in_main(d):
  """Does the diagnostic point into the synthesized main.go?"""
  return d.line is not None and os.path.basename(d.file) == "main.go"

def locate(d, program, source):                                 # {{{1
  """
  Map a diagnostic onto an offset in the candidate source, or None if
  it lies outside of it.  Columns are byte columns.

  >>> p = D.Program("a\\nb\\n__gorepl_p(x + 1)\\n", 3, 11)
  >>> d = D.Diagnostic("", D.OTHER, None, "./main.go", 3, 14)
  >>> locate(d, p, "x + 1")
  2
  >>> locate(d._replace(line = 2), p, "x + 1") is None
  True
  >>> p = D.Program("\\"猫\\" + x\\n", 1, 0)
  >>> locate(d._replace(line = 1, col = 9), p, '"猫" + x')
  6
  """

  if program is None or not in_main(d): return None
  i, lines = d.line - program.start, source.split("\n")
  if not 0 <= i < len(lines): return None
  col = (d.col or 1) - 1 - (program.shift if i == 0 else 0)
  col = len(lines[i].encode()[:max(col, 0)].decode(errors = "ignore"))
  return sum( len(x) + 1 for x in lines[:i] ) + col
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
