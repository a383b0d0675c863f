# --                                                            ; {{{1
#
# File        : gorepl/run.py
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
Running the toolchain: build the synthesized program in the session's
workspace, then run the binary.  Both steps are child processes with
captured output and a timeout.
"""                                                             # }}}1

import logging, os, subprocess, sys

from . import data as D

logger = logging.getLogger(__name__)

MAIN  = "main.go"
EXE   = "gorepl_main" + (".exe" if os.name == "nt" else "")

class Runner:                                                   # {{{1
  """Toolchain runner for one workspace."""

  def __init__(self, workspace, toolchain = "go", timeout = 30.0):
    self.workspace, self.toolchain, self.timeout = \
      workspace, toolchain, timeout

  def _call(self, args, cwd = None):                            # {{{2
    logger.debug("running %s", args)
    try:
      return subprocess.run(args, cwd = cwd, capture_output = True,
                            text = True, errors = "replace",
                            timeout = self.timeout)
    except subprocess.TimeoutExpired as e:
      raise D.ToolchainTimeout(os.path.basename(args[0]),
                               self.timeout) from e
    except OSError as e:
      raise D.ToolchainError("cannot run {}: {}"
                             .format(args[0], e.strerror)) from e
                                                                # }}}2

  def run(self, text, extra = ()):                              # {{{2
    """
    Build and run a program; extra files (already in the workspace)
    are compiled alongside it.
    """

    with open(os.path.join(self.workspace, MAIN), "w") as f:
      f.write(text)
    exe = os.path.join(self.workspace, EXE)
    p = self._call([self.toolchain, "build", "-o", exe, MAIN] +
                   list(extra), cwd = self.workspace)
    if p.returncode != 0:
      return D.RunResult(p.stdout, p.stderr, p.returncode, D.BUILD)
    p = self._call([exe])
    logger.debug("exit status %d", p.returncode)
    return D.RunResult(p.stdout, p.stderr, p.returncode, D.RUN)
                                                                # }}}2

  def locate(self, path):                                       # {{{2
    """Source directory of the package with this import path."""
    p = self._call([self.toolchain, "list", "-f", "{{.Dir}}", path],
                   cwd = self.workspace)
    if p.returncode != 0 or not p.stdout.strip():
      lines = [ x for x in p.stderr.splitlines() if x.strip() ]
      raise D.CompileError(rest = lines[:1] or
                           ["cannot find package " + path])
    return p.stdout.strip()
                                                                # }}}2
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
