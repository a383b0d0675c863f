# --                                                            ; {{{1
#
# File        : gorepl/state.py
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
Session state: committed fragments, imports, auxiliary modules and
the workspace they are built in.

>>> import os
>>> with State() as st:
...   st.add_import("fmt"), st.add_import("fmt"), list(st.imports)
(True, False, ['fmt'])
>>> os.path.isdir(st.workspace)
False
"""                                                             # }}}1

import logging, shutil, sys, tempfile

from collections import OrderedDict

logger = logging.getLogger(__name__)

class State:                                                    # {{{1
  """
  Mutated only when an evaluation succeeds: commit() appends a
  fragment, add_import() inserts an import (idempotently, keeping the
  first alias), include() registers auxiliary files.

  >>> from gorepl.data import Fragment, STATEMENT
  >>> st = State()
  >>> before = st.snapshot()
  >>> st.counter
  0
  >>> st.commit(Fragment(st.counter + 1, "a := 1", "a := 1",
  ...                    STATEMENT, ("a",)))
  >>> st.counter, len(st.fragments), st.snapshot() == before
  (1, 1, False)
  >>> st.include("example.com/aux", ["aux_1_a.go", "aux_1_b.go"])
  >>> st.aux_files()
  ['aux_1_a.go', 'aux_1_b.go']
  >>> st.clear()
  """

  def __init__(self):
    self.workspace  = tempfile.mkdtemp(prefix = "gorepl-")
    self.fragments  = []
    self.imports    = OrderedDict()
    self.aux        = OrderedDict()
    self.counter    = 0
    logger.debug("workspace %s", self.workspace)

  def __enter__(self):
    return self

  def __exit__(self, *exc):
    self.clear()

  def commit(self, fragment):
    self.fragments.append(fragment)
    self.counter = max(self.counter + 1, fragment.id)

  def add_import(self, path, name = None):
    """Add an import; returns whether the set changed."""
    if path in self.imports: return False
    self.imports[path] = name
    return True

  def include(self, path, files):
    self.aux[path] = tuple(files)

  def aux_files(self):
    return [ x for files in self.aux.values() for x in files ]

  def snapshot(self):
    """Immutable view of what a failed evaluation must not change."""
    return tuple(self.fragments), tuple(self.imports.items()), \
           tuple(self.aux.items()), self.counter

  def clear(self):
    """Remove the workspace; safe to call more than once."""
    shutil.rmtree(self.workspace, ignore_errors = True)
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
