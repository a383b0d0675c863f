from setuptools import setup, find_packages
import gorepl

setup(
  name              = "gorepl",
  description       = "Go REPL with session continuity and quick fixes",
  version           = gorepl.__version__,
  author            = "Felix C. Stegerman",
  author_email      = "flx@obfusk.net",
  license           = "GPLv3+",
  classifiers       = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.7",
    "Programming Language :: Python :: 3.8",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: Implementation :: CPython",
    "Programming Language :: Python :: Implementation :: PyPy",
    "Topic :: Software Development :: Interpreters",
  ],
  keywords          = "go golang repl interpreter",
  packages          = find_packages(include = ["gorepl"]),
  entry_points      = { "console_scripts": ["gorepl=gorepl:main_"] },
  python_requires   = ">=3.7",
  install_requires  = ["pyparsing>=3", "regex"],
  extras_require    = { "test": ["coverage"] },
  package_data      = { "gorepl": ["scenarios.txt"] },
)
