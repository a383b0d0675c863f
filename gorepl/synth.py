# --                                                            ; {{{1
#
# File        : gorepl/synth.py
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
Synthesizing one complete program from the session's fragments and
the candidate.

Functions and types go to the top level; every other fragment opens a
nested block in main(), so a later declaration shadows an earlier one
instead of clashing with it.  Committed fragments are replayed on each
run; a marker line separates their output from the candidate's.

>>> from gorepl.read import classify
>>> y = Synthesizer("MARK")
>>> p = y.render((), {}, classify("1 + 1", 1))
>>> lines = p.text.splitlines()
>>> lines[p.start - 1]
'__gorepl_p(1 + 1)'
>>> p.shift
11
>>> lines[p.start - 3:]
['__gorepl_mark()', '{', '__gorepl_p(1 + 1)', '}', '}']
"""                                                             # }}}1

import sys, uuid

from string import Template

from . import data as D
from . import read as R
from . import misc as M

from .fix import PRINTER, DISCARD, MARK

FMT, OS = "__gorepl_fmt", "__gorepl_os"

PREAMBLE = Template("""package main

import (
\t$fmt "fmt"
\t$os "os"
$imports)

func $p(xx ...interface{}) {
\tfor i, x := range xx {
\t\tif i > 0 {
\t\t\t$fmt.Print(" ")
\t\t}
\t\t$fmt.Printf("%#v", x)
\t}
\t$fmt.Println()
}

func $x(xx ...interface{}) {}

func $m() {
\t$fmt.Fprintln($os.Stdout, "$marker")
\t$fmt.Fprintln($os.Stderr, "$marker")
}
""")

def silence(source):
  """Committed fragments don't print."""
  return source.replace(PRINTER + "(", DISCARD + "(")

def disarm(source):                                             # {{{1
  r"""
  Committed defers belong to an earlier run of main(); replayed, they
  would fire again after the candidate.  Those inside function
  literals are left alone.

  >>> disarm('defer fmt.Println("bye")')
  'if false { defer fmt.Println("bye") }'
  >>> disarm("f := func() { defer g() }")
  'f := func() { defer g() }'
  >>> print(disarm("if x {\n  defer g()\n}"))
  if x {
    if false { defer g() }
  }
  """

  spans, funcs, pending = [], [], False
  for t in R.tokens(source):
    if t.kind == "semi":
      pending = False
    elif t.kind == "ident" and t.text == "func":
      pending = True
    elif t.kind == "op" and t.text == "{":
      funcs.append(pending); pending = False
    elif t.kind == "op" and t.text == "}":
      if funcs: funcs.pop()
    elif t.kind == "ident" and t.text == "defer" and not any(funcs):
      span = R.statement_at(source, t.start)
      if span: spans.append(span)
  for start, end in reversed(spans):
    source = source[:start] + "if false { " + source[start:end] + \
             " }" + source[end:]
  return source
                                                                # }}}1

def latest(fragments):                                          # {{{1
  """
  Drop top-level declarations that a later fragment declares again.

  >>> from gorepl.read import classify
  >>> fs = [ classify(x, i) for i, x in enumerate([
  ...   "func f() int { return 1 }", "type T int",
  ...   "func f() string { return \\"\\" }" ]) ]
  >>> [ f.id for f in latest(fs) ]
  [1, 2]
  """

  seen, keep = set(), []
  for f in reversed(fragments):
    if f.idents and seen.intersection(f.idents): continue
    seen.update(f.idents); keep.append(f)
  return keep[::-1]
                                                                # }}}1

class Synthesizer:                                              # {{{1
  """Renders programs; the marker is unique per session."""

  def __init__(self, marker = None):
    self.marker = marker or \
      "__GOREPL_MARK_{}__".format(uuid.uuid4().hex[:8])

  def imports(self, imports, sources, dropped = ()):            # {{{2
    """
    Import lines for the session imports the sources use.

    >>> Synthesizer("MARK").imports({"fmt": None, "os": None,
    ...   "image/png": "_", "encoding/json": "j"},
    ...   ["fmt.Sprint(j.Valid(nil))"])
    ['\\t"fmt"', '\\t_ "image/png"', '\\tj "encoding/json"']
    >>> Synthesizer("MARK").imports({"fmt": None}, ["fmt.Sprint()"],
    ...                             dropped = {"fmt"})
    []
    """

    used, lines = set(), []
    for s in sources: used |= R.selector_names(s)
    for path, name in imports.items():
      if path in dropped: continue
      if name in ("_", ".") or (name or M.pkgname(path)) in used:
        lines.append("\t" + (name + " " if name else "") +
                     '"' + path + '"')
    return lines
                                                                # }}}2

  def render(self, fragments, imports, candidate = None,        # {{{2
             dropped = ()):
    """
    Render the program; returns a Program that records where the
    candidate's source starts.

    >>> from gorepl.read import classify
    >>> y = Synthesizer("MARK")
    >>> hist = [ classify("a := 1", 1)._replace(
    ...          source = "a := 1\\n__gorepl_p(a)") ]
    >>> p = y.render(hist, {}, classify("a := 2", 2))
    >>> print(p.text[p.text.index("func main"):].rstrip())
    func main() {
    {
    a := 1
    __gorepl_x(a)
    __gorepl_mark()
    {
    a := 2
    }
    }
    }
    >>> p.text.splitlines()[p.start - 1], p.shift
    ('a := 2', 0)
    >>> p = y.render(hist, {}, classify("func g() {}", 2))
    >>> p.text.splitlines()[p.start - 1]
    'func g() {}'
    """

    frags   = list(fragments) + ([candidate] if candidate else [])
    top     = latest([ f for f in frags if f.toplevel ])
    local   = [ f for f in fragments
                if f.kind != D.IMPORT and not f.toplevel ]
    sources = [ f.source for f in frags if f.kind != D.IMPORT ]
    lines   = self.imports(imports, sources, dropped)
    text    = PREAMBLE.substitute(
      fmt = FMT, os = OS, p = PRINTER, x = DISCARD, m = MARK,
      marker = self.marker,
      imports = "".join( x + "\n" for x in lines ))
    parts, start, shift = [text], None, 0

    def add(s):
      parts.append(s)
      return sum( x.count("\n") + 1 for x in parts[:-1] ) + 1

    for f in top:
      if f is candidate:
        start = add(f.source)
      else:
        add(silence(f.source))
    add("func main() {")
    for f in local:
      add("{")
      add(DISCARD + "(" + silence(f.source) + ")"
          if f.kind == D.EXPRESSION else silence(disarm(f.source)))
    add(MARK + "()")
    if candidate and not candidate.toplevel and \
       candidate.kind != D.IMPORT:
      add("{")
      if candidate.kind == D.EXPRESSION:
        start, shift = add(PRINTER + "(" + candidate.source + ")"), \
                       len(PRINTER) + 1
      else:
        start = add(candidate.source)
      add("}")
    for f in local: add("}")
    add("}")
    return D.Program("\n".join(parts) + "\n", start, shift)
                                                                # }}}2
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
