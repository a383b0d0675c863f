# --                                                            ; {{{1
#
# File        : gorepl/__init__.py
# Maintainer  : Felix C. Stegerman <flx@obfusk.net>
# Date        : 2026-10-18
#
# Copyright   : Copyright (C) 2026  Felix C. Stegerman
# Version     : v0.0.1
# License     : GPLv3+
#
# --                                                            ; }}}1

"""gorepl - a Go REPL"""

__version__ = "0.0.1"

def main_():
  """Entry point for main program."""
  from .__main__ import main_
  return main_()

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
