# --                                                            ; {{{1
#
# File        : gorepl/eval.py
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
Evaluation sessions.

Each fragment is evaluated by synthesizing the whole program (history
plus candidate), building and running it.  When the build fails, the
diagnostics decide what happens next: unused imports are left out,
undefined package names are imported (with autoimport), unused values
and variables are routed to the printer by a quick fix; anything else
is reported.  Only a successful run commits the candidate.

These examples use a canned runner instead of the toolchain.

>>> import io
>>> from gorepl.data import RunResult
>>> def at(text, needle, msg):
...   i = text.rindex(needle); line = text.count("\n", 0, i) + 1
...   return "./main.go:{}:{}: {}\n".format(
...     line, i - text.rfind("\n", 0, i), msg)
>>> class Canned:
...   def __init__(self, *results):
...     self.results, self.programs = list(results), []
...   def run(self, text, extra = ()):
...     self.programs.append(text)
...     return self.results.pop(0)(text)
>>> def ok(out):
...   return lambda t: RunResult(s.synth.marker + "\n" + out,
...                              s.synth.marker + "\n", 0, "run")

A fresh variable is printed instead of being reported as unused:

>>> out, err = io.StringIO(), io.StringIO()
>>> runner = Canned(
...   lambda t: RunResult("", at(t, "a := 1", "declared and not used: a"),
...                       1, "build"),
...   ok("1\n"))
>>> s = Session(out, err, runner = runner)
>>> s.eval("a := 1")
True
>>> out.getvalue()
'1\n'
>>> "__gorepl_p(a)" in runner.programs[1]
True

A failing evaluation leaves the state alone:

>>> before = s.state.snapshot()
>>> runner.results = [
...   lambda t: RunResult("", "# command-line-arguments\n" +
...                       at(t, "foo", "undefined: foo"), 1, "build") ]
>>> s.eval("foo")
False
>>> err.getvalue()
'undefined: foo\n'
>>> s.state.snapshot() == before
True

So does a panic:

>>> runner.results = [ lambda t: RunResult(
...   s.synth.marker + "\n", s.synth.marker + "\npanic: boom\n\n"
...   "goroutine 1 [running]:\nexit status 2\n", 2, "run") ]
>>> s.eval('panic("boom")')
False
>>> err.getvalue().splitlines()[-1]
'panic: boom'
>>> s.state.snapshot() == before
True

A timeout fails the evaluation, changes nothing, and the session
stays usable:

>>> from gorepl.data import ToolchainTimeout
>>> def hang(t): raise ToolchainTimeout("gorepl_main", 2.0)
>>> runner.results = [ hang, ok("2\n") ]
>>> s.eval("1 + 1")
False
>>> err.getvalue().splitlines()[-1]
'timeout: gorepl_main killed after 2.0s'
>>> s.state.snapshot() == before
True
>>> s.eval("1 + 1"), out.getvalue()
(True, '1\n2\n')

Quick fixes give up after two rewrites:

>>> before = s.state.snapshot()
>>> unused = lambda t: RunResult("", at(t, "x * 2",
...   "x * 2 (value of type int) is not used"), 1, "build")
>>> runner.results, runner.programs = [unused] * 3, []
>>> s.eval("x := 3; x * 2")
False
>>> "__gorepl_p(__gorepl_p(x * 2))" in runner.programs[2]
True
>>> len(runner.programs), err.getvalue().splitlines()[-1]
(3, 'x * 2 (value of type int) is not used')
>>> s.state.snapshot() == before
True

Auxiliary packages are compiled along with every program, but stay
out of the history:

>>> import os, shutil, tempfile
>>> from gorepl.data import CompileError
>>> def package(**files):
...   d = tempfile.mkdtemp()
...   for name, text in files.items():
...     with open(os.path.join(d, name), "w") as f: f.write(text)
...   return d
>>> pkg = package(**{"a.go": "package aux\n\ntype T struct{ N int }\n",
...                  "a_test.go": "package aux\n"})
>>> runner.results, runner.programs = [ ok("") ], []
>>> s.include(pkg), s.state.aux_files(), len(s.state.fragments)
(True, ['aux_1_a.go'], 2)
>>> with open(os.path.join(s.state.workspace, "aux_1_a.go")) as f:
...   f.readline()
'package main\n'
>>> s.include(pkg), len(runner.programs)
(False, 1)

A package that doesn't build is removed again:

>>> bad = package(**{"b.go": "package b\n\nvar V = oops\n"})
>>> runner.results = [ lambda t: RunResult(
...   "", "./aux_2_b.go:3:9: undefined: oops\n", 1, "build") ]
>>> try: s.include(bad)
... except CompileError as e: print(e)
undefined: oops
>>> os.listdir(s.state.workspace).count("aux_2_b.go")
0
>>> s.state.aux_files()
['aux_1_a.go']
>>> shutil.rmtree(pkg); shutil.rmtree(bad)
>>> s.clear()
"""                                                             # }}}1

import logging, os, sys

from collections import OrderedDict

from . import data as D
from . import diag as G
from . import fix as F
from . import imports as I
from . import misc as M
from . import read as R
from . import run as X
from . import state as S
from . import synth as Y

logger = logging.getLogger(__name__)

MAX_FIXES     = 2     # rewrite iterations per evaluation
MAX_ATTEMPTS  = 8     # compile attempts per evaluation

class Session:                                                  # {{{1
  """
  An evaluation session: owns the state and its workspace; use it as
  a context manager (or call clear()) to remove the workspace.
  """

  def __init__(self, stdout = None, stderr = None, config = None,
               runner = None):
    self.stdout = sys.stdout if stdout is None else stdout
    self.stderr = sys.stderr if stderr is None else stderr
    self.config = config or D.Config()
    self.state  = S.State()
    self.synth  = Y.Synthesizer()
    self.runner = runner or X.Runner(self.state.workspace,
                                     self.config.toolchain,
                                     self.config.timeout)

  def __enter__(self):
    return self

  def __exit__(self, *exc):
    self.clear()

  def clear(self):
    self.state.clear()

  def eval(self, text):                                         # {{{2
    """
    Evaluate a fragment; writes the result to stdout, or the error to
    stderr.  Returns whether it succeeded.
    """

    try:
      self.evaluate(text)
    except D.GoreplError as e:
      logger.debug("failed: %r", e)
      print(e, file = self.stderr)
      return False
    return True
                                                                # }}}2

  def evaluate(self, text):                                     # {{{2
    """
    Evaluate a fragment; raises GoreplError on failure.  Returns the
    committed fragment (None for blank input).
    """

    frag = R.classify(text, self.state.counter + 1)
    if frag is None: return None
    if frag.kind == D.IMPORT: return self._import(frag)
    staged, dropped, fixes, diags = OrderedDict(), set(), 0, ()
    for attempt in range(MAX_ATTEMPTS):
      imports = OrderedDict(self.state.imports); imports.update(staged)
      prog = self.synth.render(self.state.fragments, imports, frag,
                               dropped)
      logger.debug("attempt %d: %r", attempt + 1, frag)
      res = self.runner.run(prog.text, self.state.aux_files())
      if res.stage == D.RUN:
        return self._done(frag, res, staged)
      diags, rest = G.parse(res.stderr)
      if rest or not diags:
        rest = rest or ["build failed: exit status {}"
                        .format(res.code)]
        raise D.CompileError(diags, rest)
      unhandled, fixable = [], []
      for d in diags:
        if d.category == D.UNUSED_IMPORT and G.in_main(d) and \
           d.subject in imports and d.subject not in dropped:
          dropped.add(d.subject)
        elif d.category == D.UNDEFINED and G.in_main(d):
          path = I.lookup(d, frag, prog)
          if path is None or path in imports:
            unhandled.append(d)
          elif not self.config.autoimport:
            raise D.UnresolvedSymbolError(d, path)
          else:
            logger.debug("importing %s for %s", path, d.subject)
            staged[path] = None
        elif F.fixable(d):
          fixable.append(d)
        else:
          unhandled.append(d)
      if unhandled: raise D.CompileError(unhandled)
      if fixable:
        if fixes >= MAX_FIXES: raise D.CompileError(fixable)
        new = F.quickfix(frag, fixable, prog)
        if new is None: raise D.CompileError(fixable)
        frag, fixes = new, fixes + 1
    raise D.CompileError(diags)
                                                                # }}}2

  def _after(self, s):
    """Output of the candidate: whatever follows the marker."""
    head, sep, tail = s.partition(self.synth.marker + "\n")
    return tail if sep else None

  def _done(self, frag, res, staged):                           # {{{2
    out, err = self._after(res.stdout), self._after(res.stderr)
    if res.code != 0:
      headline, trace = G.parse_trace(res.stderr if err is None
                                      else err)
      raise D.RuntimeFailure(headline or
                             "exit status {}".format(res.code), trace)
    for path, name in staged.items():
      self.state.add_import(path, name)
    self.state.commit(frag)
    logger.debug("committed %r", frag)
    if out: self.stdout.write(out)
    if err: self.stderr.write(err)
    return frag
                                                                # }}}2

  def _import(self, frag):
    specs = R.import_specs(frag.source)
    for path, name in specs: self.runner.locate(path)
    for path, name in specs: self.state.add_import(path, name)
    self.state.commit(frag)
    return frag

  def add_import(self, path, name = None):
    """Validate and add an import; returns whether the set changed."""
    if path in self.state.imports: return False
    self.runner.locate(path)
    return self.state.add_import(path, name)

  def include(self, path):                                      # {{{2
    """
    Load the Go files of a package (a directory or an import path)
    into the session as part of package main, without adding them to
    the history.  Returns False if it was already included.
    """

    if path in self.state.aux: return False
    src   = path if os.path.isdir(path) else self.runner.locate(path)
    n     = len(self.state.aux) + 1
    files = []
    try:
      for name in sorted(os.listdir(src)):
        if not name.endswith(".go") or name.endswith("_test.go"):
          continue
        with open(os.path.join(src, name)) as f:
          text = M.RX_PACKAGE_C.sub("package main", f.read(), count = 1)
        dest = "aux_{}_{}".format(n, name)
        with open(os.path.join(self.state.workspace, dest), "w") as f:
          f.write(text)
        files.append(dest)
      if not files:
        raise D.CompileError(rest = ["no Go files in " + src])
      prog = self.synth.render(self.state.fragments, self.state.imports)
      res  = self.runner.run(prog.text, self.state.aux_files() + files)
      if res.stage == D.BUILD:
        raise D.CompileError(*G.parse(res.stderr))
      if res.code != 0:
        headline, trace = G.parse_trace(res.stderr)
        raise D.RuntimeFailure(headline or
                               "exit status {}".format(res.code), trace)
    except (D.GoreplError, OSError):
      for x in files:
        os.remove(os.path.join(self.state.workspace, x))
      raise
    self.state.include(path, files)
    logger.debug("included %s: %s", path, files)
    return True
                                                                # }}}2

  def eval_stream(self, s):
    """Evaluate stream contents, statement by statement."""
    return all( self.eval(x) for x in R.split("".join(s)) )

  def eval_file(self, name):
    """Evaluate file contents."""
    with open(name) as f:
      return self.eval_stream(f)
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
