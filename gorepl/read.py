# --                                                            ; {{{1
#
# File        : gorepl/read.py
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
Reading Go fragments: a small pyparsing lexer (with Go's automatic
semicolon insertion) and what we need on top of it to classify user
input, find statement boundaries and split documents.

We never build a syntax tree; the compiler is the judge of validity.

>>> classify("1+1", 1)
<fragment #1 expression: '1+1'>
>>> classify("a := 1", 2).idents
('a',)
>>> split("a := 1\nb := 2; a + b")
['a := 1', 'b := 2', 'a + b']
"""                                                             # }}}1

import sys

from collections import namedtuple

import pyparsing as P

from . import data as D
from . import misc as M

Token = namedtuple("Token", "kind text start end depth".split())

def _make_lexer():                                              # {{{1
  # NB: the order in which alternatives are tried is important;
  # e.g. comments before operators, numbers before operators.
  # NB: identifiers need \p{L}, which only the regex module knows.

  q, r  = P.QuotedString, P.Regex
  n     = lambda x, kind: x.set_name(kind).set_parse_action(
            lambda s, l, t: [(kind, t[0], l)])

  token = n(r(M.RX_COMMENT)                                 , "comment") \
        | n(q('"', esc_char = "\\", unquote_results = False), "string" ) \
        | n(q("`", multiline = True, unquote_results = False), "string") \
        | n(q("'", esc_char = "\\", unquote_results = False), "rune"   ) \
        | n(r(M.RX_NUMBER)                                  , "number" ) \
        | n(r(M.RX_IDENT_C)                                 , "ident"  ) \
        | n(r(M.RX_OP)                                      , "op"     ) \
        | n(r(M.RX_SPACE)                                   , "space"  ) \
        | n(r(r"\n")                                        , "newline") \
        | n(r(r"."),                                          "other"  )
  return P.ZeroOrMore(token).leave_whitespace().parse_with_tabs()
                                                                # }}}1

_lexer = _make_lexer()

def _ends_statement(tok):
  """Does a newline after this token insert a semicolon?"""
  if tok.kind == "ident":
    return tok.text not in M.KEYWORDS or tok.text in M.SEMI_KEYWORDS
  if tok.kind == "op":
    return tok.text in (")", "]", "}", "++", "--")
  return tok.kind in ("number", "string", "rune")

def tokens(s):                                                  # {{{1
  r"""
  Split source into tokens; comments and spaces are dropped, newlines
  that end a statement (and explicit semicolons) become "semi" tokens.
  Each token records its bracket nesting depth (closing brackets get
  the depth of their opening bracket).

  >>> [ t.text for t in tokens('x := "a;b" // c\ny') ]
  ['x', ':=', '"a;b"', '\n', 'y']
  >>> [ t.kind for t in tokens("f(1,\n2); `raw\nstring`") ]
  ['ident', 'op', 'number', 'op', 'number', 'op', 'semi', 'string']
  >>> [ (t.text, t.depth) for t in tokens("a[i](x)") ]
  [('a', 0), ('[', 0), ('i', 1), (']', 0), ('(', 0), ('x', 1), (')', 0)]
  """

  toks, depth, prev = [], 0, None
  for kind, text, start in _lexer.parse_string(s, parse_all = True):
    if kind in ("space", "comment"): continue
    if kind == "newline":
      if prev is None or prev.kind == "semi" or \
         not _ends_statement(prev): continue
      kind = "semi"
    elif kind == "op" and text == ";":
      kind = "semi"
    if kind == "op" and text in M.CLOSERS: depth = max(depth - 1, 0)
    prev = Token(kind, text, start, start + len(text), depth)
    if kind == "op" and text in M.OPENERS: depth += 1
    toks.append(prev)
  return toks
                                                                # }}}1

def complete(s):                                                # {{{1
  """
  Is the input complete (all brackets closed, no open raw string)?

  >>> complete("func f() {")
  False
  >>> complete("f(1,\\n2)")
  True
  >>> complete("`abc")
  False
  >>> complete("")
  True
  """

  depth = 0
  for kind, text, _ in _lexer.parse_string(s, parse_all = True):
    if kind == "op" and text in M.OPENERS: depth += 1
    if kind == "op" and text in M.CLOSERS: depth -= 1
    if kind == "other" and text == "`": return False
  return depth <= 0
                                                                # }}}1

def _separators(toks):                                          # {{{1
  """
  Indices of the semicolons that end a statement; those in the header
  of a for, if or switch statement don't.
  """

  seps, header, start = set(), set(), True
  for j, t in enumerate(toks):
    if start and t.kind == "ident" and t.text in M.HEADER_KEYWORDS:
      header.add(t.depth)
    start = False
    if t.kind == "semi":
      if t.depth not in header:
        seps.add(j); start = True
    elif t.kind == "op" and t.text == "{":
      header.discard(t.depth); start = True
    elif t.text in ("else", ":"):
      start = True
  return seps
                                                                # }}}1

def _segments(toks, depth = 0):
  """Split tokens into statements at the given depth."""
  segs, cur, seps = [], [], _separators(toks)
  for j, t in enumerate(toks):
    if j in seps and t.depth == depth:
      if cur: segs.append(cur)
      cur = []
    else:
      cur.append(t)
  if cur: segs.append(cur)
  return segs

def split(s):                                                   # {{{1
  r"""
  Split a document into its top-level statements.

  >>> split("if x {\n  y()\n}\nz")
  ['if x {\n  y()\n}', 'z']
  >>> split("const ( a = iota; b )\n\n// done\n")
  ['const ( a = iota; b )']
  """

  return [ s[seg[0].start:seg[-1].end]
           for seg in _segments(tokens(s)) ]
                                                                # }}}1

def statement_at(s, offset):                                    # {{{1
  """
  Find the statement enclosing the offset: the innermost statement of
  the innermost block (parentheses and brackets don't start one).
  Returns (start, end) or None.

  >>> s = "x := 1; x * 2"
  >>> statement_at(s, s.index("*"))
  (8, 13)
  >>> s = "if true {\\n  a := f(1)\\n}"
  >>> start, end = statement_at(s, s.index("1"))
  >>> s[start:end]
  'a := f(1)'
  >>> statement_at("x", 5) is None
  True
  """

  toks = tokens(s); seps = _separators(toks)
  i = next(( j for j, t in enumerate(toks) if t.end > offset ), None)
  if i is None: return None
  level, need, lo = 0, toks[i].depth, -1
  for j in range(i - 1, -1, -1):
    t = toks[j]
    if t.kind == "op" and t.text in M.OPENERS and t.depth < need:
      if t.text == "{":
        level, lo = t.depth + 1, j; break
      need = t.depth
  first = lo + 1
  for j in range(i - 1, lo, -1):
    if j in seps and toks[j].depth == level:
      first = j + 1; break
  last = len(toks) - 1
  for j in range(i, len(toks)):
    t = toks[j]
    if t.depth < level or (j in seps and t.depth == level):
      last = j - 1; break
  if last < first: return None
  return toks[first].start, toks[last].end
                                                                # }}}1

def _names(toks):
  """Leading identifier list: a, b, c ..."""
  names = []
  for t in toks:
    if t.kind == "ident" and t.text not in M.KEYWORDS and \
       len(names) % 2 == 0:
      names.append(t.text)
    elif t.kind == "op" and t.text == "," and len(names) % 2:
      names.append(",")
    else:
      break
  return tuple( x for x in names if x not in (",", "_") )

def _spec_names(toks):
  """Names declared by a var/const/type declaration."""
  if len(toks) > 1 and toks[1].text == "(":
    inner = [ t for t in toks[2:] if t.depth >= 1 ]
    return tuple( x for seg in _segments(inner, 1)
                    for x in _names(seg) )
  return _names(toks[1:])

def _func_names(toks):
  """Name of a function or method declaration; None for literals."""
  if len(toks) > 1 and toks[1].kind == "ident":
    return (toks[1].text,)
  if len(toks) > 1 and toks[1].text == "(":
    close = next(( j for j, t in enumerate(toks)
                   if j > 1 and t.text == ")" and t.depth == 0 ), None)
    if close is None or close + 2 >= len(toks): return None
    name, paren = toks[close + 1], toks[close + 2]
    if name.kind == "ident" and name.text not in M.KEYWORDS and \
       paren.text in ("(", "["):
      recv = [ t.text for t in toks[2:close]
               if t.kind == "ident" and t.depth == 1 ]
      return (recv[-1] + "." + name.text,) if recv else (name.text,)
  return None

def _is_statement(seg):
  """Is this (top-level) token segment a simple or compound statement?"""
  head = seg[0]
  if head.kind == "ident" and head.text in M.STMT_KEYWORDS: return True
  if head.kind == "op" and head.text == "{": return True
  if seg[-1].kind == "op" and seg[-1].text in ("++", "--"): return True
  if len(seg) > 1 and head.kind == "ident" and seg[1].text == ":":
    return True                                                 # label
  for j, t in enumerate(seg):
    if t.depth != 0 or t.kind != "op": continue
    if t.text in M.ASSIGN_OPS: return True
    if t.text == "<-" and j > 0 and _ends_statement(seg[j-1]):
      return True                                               # send
  return False

def _defined(seg):
  """Names a short variable declaration defines."""
  for j, t in enumerate(seg):
    if t.depth == 0 and t.text == ":=":
      return _names(seg[:j])
  return ()

def classify(text, id = 0):                                     # {{{1
  """
  Turn user input into a fragment: decide its kind and collect the
  identifiers it introduces.  Returns None for blank input.

  >>> classify("   ") is None
  True
  >>> classify('import "fmt"').idents
  ('fmt',)
  >>> classify("func() {}").kind
  'expression'
  >>> classify("func f() int { return 1 }").idents
  ('f',)
  >>> classify("func (p *Point) Abs() float64 { return 0 }").idents
  ('Point.Abs',)
  >>> classify("const ( a = iota; b )").idents
  ('a', 'b')
  >>> classify("var x, y int").idents
  ('x', 'y')
  >>> classify("type ( A int; B string )").idents
  ('A', 'B')
  >>> classify("b, err := json.Marshal(nil)").idents
  ('b', 'err')
  >>> classify("π, größe := 3.14, 2").idents
  ('π', 'größe')
  >>> classify("(4 & (1 << 1))").kind
  'expression'
  >>> classify("x++").kind
  'statement'
  >>> classify("for i := 0; i < 3; i++ {}").idents
  ()
  >>> classify("ch <- 1").kind, classify("<-ch").kind
  ('statement', 'expression')
  >>> classify("x := 3; x * 2").kind
  'statement'
  """

  source = text.strip()
  toks = tokens(source)
  if not toks: return None
  head, kind, idents = toks[0], D.EXPRESSION, ()
  if head.text == "import":
    kind    = D.IMPORT
    idents  = tuple( name or M.pkgname(path)
                     for path, name in import_specs(source) )
  elif head.text == "func" and _func_names(toks):
    kind, idents = D.DECLARATION, _func_names(toks)
  elif head.text in ("type", "var", "const"):
    kind, idents = D.DECLARATION, _spec_names(toks)
  else:
    segs = _segments(toks)
    if len(segs) > 1 or _is_statement(segs[0]):
      kind    = D.STATEMENT
      idents  = tuple( x for seg in segs for x in _defined(seg) )
  return D.Fragment(id, text, source, kind, idents)
                                                                # }}}1

def import_specs(s):                                            # {{{1
  """
  Parse import declarations into (path, name) pairs.

  >>> import_specs('import ( "fmt"; j "encoding/json" )')
  [('fmt', None), ('encoding/json', 'j')]
  >>> import_specs('import _ "image/png"')
  [('image/png', '_')]
  """

  specs = []
  for seg in _segments(tokens(s)):
    if seg[0].text != "import": continue
    name = None
    for t in seg[1:]:
      if t.kind == "string":
        specs.append((t.text[1:-1], name)); name = None
      elif t.kind == "ident" or t.text == ".":
        name = t.text
  return specs
                                                                # }}}1

def selector_names(s):                                          # {{{1
  """
  Identifiers used as the left-hand side of a selector.

  >>> sorted(selector_names("json.Marshal(x.y.z)"))
  ['json', 'x']
  """

  toks, names = tokens(s), set()
  for j, t in enumerate(toks[:-1]):
    if t.kind == "ident" and toks[j+1].text == "." and \
       (j == 0 or toks[j-1].text != "."):
      names.add(t.text)
  return names
                                                                # }}}1

def selector_at(s, offset):                                     # {{{1
  """
  The selector following the identifier at offset, if any.

  >>> s = "rand.Reader"
  >>> selector_at(s, 0)
  'Reader'
  >>> selector_at("rand", 0) is None
  True
  """

  toks = tokens(s)
  for j, t in enumerate(toks):
    if t.start <= offset < t.end:
      if j + 2 < len(toks) and toks[j+1].text == "." and \
         toks[j+2].kind == "ident":
        return toks[j+2].text
      return None
  return None
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
