# --                                                            ; {{{1
#
# File        : gorepl/imports.py
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
Resolving undefined identifiers to standard library packages.

>>> resolve("filepath")
'path/filepath'
"""                                                             # }}}1

import sys

from . import diag as G
from . import read as R

# package name -> import path
PACKAGES = {                                                    # {{{1
  "adler32"   : "hash/adler32",     "aes"       : "crypto/aes",
  "ascii85"   : "encoding/ascii85", "asn1"      : "encoding/asn1",
  "ast"       : "go/ast",           "atomic"    : "sync/atomic",
  "base32"    : "encoding/base32",  "base64"    : "encoding/base64",
  "big"       : "math/big",         "binary"    : "encoding/binary",
  "bits"      : "math/bits",        "bufio"     : "bufio",
  "bytes"     : "bytes",            "cipher"    : "crypto/cipher",
  "cmp"       : "cmp",              "cmplx"     : "math/cmplx",
  "color"     : "image/color",      "context"   : "context",
  "crc32"     : "hash/crc32",       "crc64"     : "hash/crc64",
  "csv"       : "encoding/csv",     "debug"     : "runtime/debug",
  "draw"      : "image/draw",       "ecdsa"     : "crypto/ecdsa",
  "ed25519"   : "crypto/ed25519",   "elliptic"  : "crypto/elliptic",
  "errors"    : "errors",           "exec"      : "os/exec",
  "expvar"    : "expvar",           "filepath"  : "path/filepath",
  "flag"      : "flag",             "fmt"       : "fmt",
  "fnv"       : "hash/fnv",         "fs"        : "io/fs",
  "gif"       : "image/gif",        "gob"       : "encoding/gob",
  "gzip"      : "compress/gzip",    "heap"      : "container/heap",
  "hex"       : "encoding/hex",     "hmac"      : "crypto/hmac",
  "html"      : "html",             "http"      : "net/http",
  "httptest"  : "net/http/httptest", "image"    : "image",
  "io"        : "io",               "ioutil"    : "io/ioutil",
  "iter"      : "iter",             "jpeg"      : "image/jpeg",
  "json"      : "encoding/json",    "list"      : "container/list",
  "log"       : "log",              "mail"      : "net/mail",
  "maps"      : "maps",             "math"      : "math",
  "md5"       : "crypto/md5",       "mime"      : "mime",
  "net"       : "net",              "netip"     : "net/netip",
  "os"        : "os",               "parser"    : "go/parser",
  "path"      : "path",             "pem"       : "encoding/pem",
  "png"       : "image/png",        "rand"      : "math/rand",
  "reflect"   : "reflect",          "regexp"    : "regexp",
  "ring"      : "container/ring",   "rsa"       : "crypto/rsa",
  "runtime"   : "runtime",          "scanner"   : "text/scanner",
  "sha1"      : "crypto/sha1",      "sha256"    : "crypto/sha256",
  "sha512"    : "crypto/sha512",    "signal"    : "os/signal",
  "slices"    : "slices",           "slog"      : "log/slog",
  "smtp"      : "net/smtp",         "sort"      : "sort",
  "sql"       : "database/sql",     "strconv"   : "strconv",
  "strings"   : "strings",          "subtle"    : "crypto/subtle",
  "sync"      : "sync",             "syscall"   : "syscall",
  "tabwriter" : "text/tabwriter",   "tar"       : "archive/tar",
  "template"  : "text/template",    "time"      : "time",
  "tls"       : "crypto/tls",       "token"     : "go/token",
  "unicode"   : "unicode",          "unsafe"    : "unsafe",
  "url"       : "net/url",          "user"      : "os/user",
  "utf16"     : "unicode/utf16",    "utf8"      : "unicode/utf8",
  "x509"      : "crypto/x509",      "xml"       : "encoding/xml",
  "zip"       : "archive/zip",      "zlib"      : "compress/zlib",
}                                                               # }}}1

# (package name, selector) -> import path, for ambiguous names
SELECTORS = {                                                   # {{{1
  ("rand"    , "Reader"      ): "crypto/rand",
  ("rand"    , "Read"        ): "crypto/rand",
  ("rand"    , "Prime"       ): "crypto/rand",
  ("rand"    , "Text"        ): "crypto/rand",
  ("template", "HTML"        ): "html/template",
  ("template", "HTMLEscape"  ): "html/template",
  ("template", "JS"          ): "html/template",
  ("template", "CSS"         ): "html/template",
  ("template", "URL"         ): "html/template",
  ("scanner" , "ErrorList"   ): "go/scanner",
  ("pprof"   , "StartCPUProfile"): "runtime/pprof",
  ("pprof"   , "Handler"     ): "net/http/pprof",
}                                                               # }}}1

def resolve(name, selector = None):                             # {{{1
  """
  Look up the import path for a package name (and the selector used
  on it, if known).

  >>> resolve("rand", "Reader")
  'crypto/rand'
  >>> resolve("rand", "Intn")
  'math/rand'
  >>> resolve("pprof", "Handler")
  'net/http/pprof'
  >>> resolve("foo") is None
  True
  >>> resolve("json.Foo") is None
  True
  """

  return SELECTORS.get((name, selector)) or PACKAGES.get(name)
                                                                # }}}1

def lookup(d, fragment, program):                               # {{{1
  """
  Resolve an undefined-identifier diagnostic in the candidate.  Only
  a name used with a selector is a package; the selector also
  disambiguates.

  >>> from gorepl.data import Diagnostic, Fragment, Program, EXPRESSION
  >>> f = Fragment(1, "rand.Reader", "rand.Reader", EXPRESSION, ())
  >>> p = Program("__gorepl_p(rand.Reader)\\n", 1, 11)
  >>> d = Diagnostic("undefined: rand", "undefined", "rand",
  ...                "./main.go", 1, 12)
  >>> lookup(d, f, p)
  'crypto/rand'
  >>> lookup(d._replace(line = 7), f, p)
  'math/rand'
  >>> f = f._replace(source = "rand + 1")
  >>> lookup(d, f, p._replace(text = "__gorepl_p(rand + 1)\\n")) is None
  True
  """

  offset = G.locate(d, program, fragment.source)
  if offset is None: return resolve(d.subject)
  sel = R.selector_at(fragment.source, offset)
  return None if sel is None else resolve(d.subject, sel)
                                                                # }}}1

if __name__ == "__main__":
  import doctest
  if doctest.testmod()[0]: sys.exit(1)

# vim: set tw=70 sw=2 sts=2 et fdm=marker :
