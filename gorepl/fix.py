# --                                                            ; {{{1
#
# File        : gorepl/fix.py
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
Quick fixes: rewriting a candidate in response to the compiler
complaining that a value or a fresh variable is never used.  The
value is routed to the printer instead, which both shows it and uses
it, so the same diagnostic cannot come back.

>>> from gorepl.data import Diagnostic, Program
>>> from gorepl.read import classify
>>> f = classify("b, err := json.Marshal(nil)", 1)
>>> d = Diagnostic("declared and not used: b", "unused-var", "b",
...                "./main.go", 1, 1)
>>> e = d._replace(subject = "err", col = 4)
>>> print(quickfix(f, [e, d], Program(f.source + "\n", 1, 0)).source)
b, err := json.Marshal(nil)
__gorepl_p(b)
__gorepl_p(err)
"""                                                             # }}}1

import logging, sys

from . import data as D
from . import diag as G
from . import read as R

logger = logging.getLogger(__name__)

PRINTER, DISCARD, MARK = "__gorepl_p", "__gorepl_x", "__gorepl_mark"

def fix_unused_value(fragment, offset, d):                      # {{{1
  """
  Wrap the expression statement at offset in a printer call.

  >>> from gorepl.read import classify
  >>> f = classify("x := 3; x * 2", 1)
  >>> fix_unused_value(f, f.source.index("*"), None).source
  'x := 3; __gorepl_p(x * 2)'
  >>> fix_unused_value(f, 0, None) is None
  True
  """

  span = R.statement_at(fragment.source, offset)
  if span is None: return None
  start, end = span; stmt = fragment.source[start:end]
  f = R.classify(stmt)
  if f is None or f.kind != D.EXPRESSION: return None
  source = fragment.source[:start] + PRINTER + "(" + stmt + ")" + \
           fragment.source[end:]
  return fragment._replace(source = source)
                                                                # }}}1

def fix_unused_var(fragment, offset, d):                        # {{{1
  """
  Print a freshly declared variable right after its declaration; only
  for short variable declarations and var declarations, not for the
  headers of if, for and switch.

  >>> from gorepl.read import classify
  >>> d = D.Diagnostic("", D.UNUSED_VAR, "i", "main.go", 1, 5)
  >>> f = classify("for i := 0; i < 3; i++ {}", 1)
  >>> fix_unused_var(f, 4, d) is None
  True
  >>> f = classify("var i int", 1)
  >>> fix_unused_var(f, 4, d).source
  'var i int\\n__gorepl_p(i)'
  """

  span = R.statement_at(fragment.source, offset)
  if span is None: return None
  start, end = span
  f = R.classify(fragment.source[start:end])
  if f is None or d.subject not in f.idents or \
     f.kind not in (D.STATEMENT, D.DECLARATION) or f.toplevel:
    return None
  source = fragment.source[:end] + "\n" + PRINTER + "(" + d.subject + \
           ")" + fragment.source[end:]
  return fragment._replace(source = source)
                                                                # }}}1

def fix_no_value(fragment, offset, d):
  """Don't print the result of a call without one."""
  if fragment.kind != D.EXPRESSION: return None
  return fragment._replace(kind = D.STATEMENT)

RULES = (
  (D.UNUSED_VALUE , fix_unused_value),
  (D.UNUSED_VAR   , fix_unused_var  ),
  (D.NO_VALUE     , fix_no_value    ),
)

def rule_for(category):
  return next(( f for c, f in RULES if c == category ), None)

def fixable(d):
  """Is there a rule for this diagnostic?"""
  return rule_for(d.category) is not None

def quickfix(fragment, diagnostics, program):                   # {{{1
  """
  Apply the rules for all diagnostics of one compile attempt; returns
  the rewritten fragment, or None if any of them can't be fixed.
  Later positions are rewritten first so earlier offsets stay valid
  (and variables print in declaration order).

  >>> from gorepl.read import classify
  >>> f = classify('log.SetPrefix("")', 1)
  >>> d = D.Diagnostic('log.SetPrefix("") (no value) used as value',
  ...                  D.NO_VALUE, 'log.SetPrefix("")', "./main.go", 9, 12)
  >>> p = D.Program("", 9, 11)
  >>> quickfix(f, [d], p).kind
  'statement'
  >>> quickfix(f, [d._replace(line = 3)], p) is None
  True
  >>> quickfix(f, [d._replace(category = D.SYNTAX)], p) is None
  True
  """

  todo = []
  for d in diagnostics:
    rule, offset = rule_for(d.category), G.locate(d, program,
                                                  fragment.source)
    if rule is None or offset is None: return None
    todo.append((offset, rule, d))
  for offset, rule, d in sorted(todo, key = lambda x: x[0],
                                reverse = True):
    new = rule(fragment, offset, d)
    if new is None:
      logger.debug("no fix for %r", d.message); return None
    logger.debug("%s: %r -> %r", rule.__name__, fragment.source,
                 new.source)
    fragment = new
  return fragment
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
