# --                                                            ; {{{1
#
# File        : gorepl/__main__.py
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
Command line interface.

>>> p = _argument_parser()
>>> n = p.parse_args(["--autoimport", "--timeout", "5", "-e", "1+1"])
>>> _config(n)
Config(toolchain='go', timeout=5.0, autoimport=True)
>>> n.eval, n.script
('1+1', None)
"""                                                             # }}}1

import argparse, logging, os, shutil, sys

from . import __version__
from . import eval as E
from . import repl as R

from .data import Config

_me   = "gorepl"
_desc = "Go REPL: evaluate Go fragments incrementally"

def main(*args):                                                # {{{1
  """Main program."""
  p = _argument_parser(); n = p.parse_args(args)
  logging.basicConfig(level = logging.DEBUG if n.debug
                      else logging.WARNING,
                      format = "%(name)s: %(message)s")
  if n.test: return test(verbose = n.verbose, toolchain = n.go)
  ok = True
  with E.Session(config = _config(n)) as s:
    if n.script or n.eval:
      ok = s.eval_file(n.script) if n.script else s.eval(n.eval)
    if n.interactive or not (n.script or n.eval):
      if not sys.stdin.isatty() and not n.interactive:
        ok = s.eval_stream(sys.stdin) and ok
      else:
        R.repl(s)
  return 0 if ok else 1
                                                                # }}}1

def _config(n):
  return Config(toolchain = n.go, timeout = n.timeout,
                autoimport = n.autoimport)

def _argument_parser():                                         # {{{1
  p = argparse.ArgumentParser(description = _desc, prog = _me)
  g = p.add_mutually_exclusive_group()
  g.add_argument("script", metavar = "SCRIPT", nargs = "?",
                 help = "Go fragments to evaluate")
  g.add_argument("--eval", "-e", metavar = "CODE",
                 help = "code to evaluate (instead of a script)")
  p.add_argument("--interactive", "-i", action = "store_true",
                 help = "force interactive mode")
  p.add_argument("--go", metavar = "CMD", default = "go",
                 help = "go toolchain command (default: %(default)s)")
  p.add_argument("--timeout", metavar = "SECS", type = float,
                 default = 30.0,
                 help = "timeout per build or run "
                        "(default: %(default)s)")
  p.add_argument("--autoimport", action = "store_true",
                 help = "import packages for undefined names")
  p.add_argument("--debug", action = "store_true",
                 help = "log debug messages to stderr")
  p.add_argument("--version", action = "version",
                 version = "%(prog)s {}".format(__version__))
  p.add_argument("--test", action = "store_true",
                 help = "run tests (instead of the REPL)")
  p.add_argument("--verbose", "-v", action = "store_true",
                 help = "run tests verbosely")
  return p
                                                                # }}}1

def test(verbose = False, toolchain = "go"):                    # {{{1
  """
  Run doctest on all modules; and the end-to-end scenarios when the
  toolchain is available.
  """
  import doctest, importlib, pkgutil
  tot_f, tot_t = 0, 0
  for x in pkgutil.iter_modules([os.path.dirname(__file__)]):
    m = importlib.import_module("."+x.name, __package__)
    if verbose: print("Testing module {} ...".format(x.name))
    f, t = doctest.testmod(m, verbose = verbose)
    tot_f += f; tot_t += t
    if verbose: print()
  if shutil.which(toolchain):
    if verbose: print("Testing scenarios ...")
    f, t = doctest.testfile("scenarios.txt", package = __package__,
                            verbose = verbose)
    tot_f += f; tot_t += t
  elif verbose:
    print("Skipping scenarios: {} not found.".format(toolchain))
  if verbose:
    print("Summary:")
    print("{} passed and {} failed.".format(tot_t - tot_f, tot_f))
    if tot_f == 0: print("Test passed.")
    else: print("***Test Failed*** {} failures.".format(tot_f))
  return 0 if tot_f == 0 else 1
                                                                # }}}1

def main_():
  """Entry point for main program."""
  return main(*sys.argv[1:])

if __name__ == "__main__":
  sys.exit(main_())

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
