"""
    penntree: Penn Treebank trees for Python

    Basic classes and constants

    Copyright (C) 2021 Miðeind ehf.

    This software is licensed under the MIT License:

        Permission is hereby granted, free of charge, to any person
        obtaining a copy of this software and associated documentation
        files (the "Software"), to deal in the Software without restriction,
        including without limitation the rights to use, copy, modify, merge,
        publish, distribute, sublicense, and/or sell copies of the Software,
        and to permit persons to whom the Software is furnished to do so,
        subject to the following conditions:

        The above copyright notice and this permission notice shall be
        included in all copies or substantial portions of the Software.

        THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
        EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
        MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
        IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY
        CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
        TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
        SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

    This module holds the node id type and its sentinel, the head
    direction enum, the exception classes shared by the other modules,
    and the line reader used for the head rule configuration files.

"""

from typing import IO, Iterator, Optional

import os

from enum import IntEnum
import importlib.resources as importlib_resources


# A node id within a Topology is a non-negative int; NO_NODE denotes
# "no such node", e.g. the root of an empty tree
NodeId = int
NO_NODE: NodeId = -1

# The label of the designated empty category
EMPTY_CATEGORY = "-NONE-"

# The package whose resources hold the default configuration files
_PACKAGE_NAME = "penntree"


class Direction(IntEnum):

    """The direction in which a head rule scans the children
    of a constituent"""

    UNKNOWN = 0
    INITIAL = 1
    FINAL = 2

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        """Convert a configuration string (initial, final, none)
        to a Direction"""
        name = name.strip().lower()
        if name == "initial":
            return cls.INITIAL
        if name == "final":
            return cls.FINAL
        if name in ("none", "unknown"):
            return cls.UNKNOWN
        raise ConfigError("Unknown head direction '{0}'".format(name))


class InvariantError(RuntimeError):

    """Exception class for violated structural invariants, i.e. misuse
    of the tree data structures by the caller. These are not meant to
    be caught and recovered from."""

    pass


class ConfigError(Exception):

    """Exception class for errors in the head rule configuration files.
    The position of the offending line is added by whoever knows it."""

    def __init__(self, s: str) -> None:
        super().__init__(s)
        self.fname: Optional[str] = None
        self.line = 0

    def set_pos(self, fname: str, line: int) -> None:
        """Record the file and line of the error; the first position
        recorded is the one that sticks"""
        if not self.fname:
            self.fname = fname
            self.line = line

    def __str__(self) -> str:
        s = Exception.__str__(self)
        if not self.fname:
            return s
        return "File {0}, line {1}: {2}".format(self.fname, self.line, s)


class LineReader:

    """Reads logical lines from a configuration file, either a package
    resource or a plain file. A line ending in a backslash continues on
    the next line, and a line '$include <name>' is replaced by the lines
    of the named file, which is looked up next to the including file."""

    def __init__(
        self,
        fname: str,
        *,
        package_name: Optional[str] = None,
        outer_fname: Optional[str] = None,
        outer_line: int = 0
    ) -> None:
        self._fname = fname
        self._package_name = package_name
        self._line = 0
        self._inner_rdr: Optional[LineReader] = None
        self._outer_fname = outer_fname
        self._outer_line = outer_line

    def fname(self) -> str:
        """The name of the file that the current line comes from"""
        return self._fname if self._inner_rdr is None else self._inner_rdr.fname()

    def line(self) -> int:
        """The physical line number of the current line in that file"""
        return self._line if self._inner_rdr is None else self._inner_rdr.line()

    def _open(self) -> IO[bytes]:
        if self._package_name:
            ref = importlib_resources.files(_PACKAGE_NAME).joinpath(self._fname)
            return ref.open("rb")
        return open(self._fname, "rb")

    def _read_error(self) -> ConfigError:
        if self._outer_fname:
            e = ConfigError("Cannot read include file '{0}'".format(self._fname))
            e.set_pos(self._outer_fname, self._outer_line)
        else:
            e = ConfigError("Cannot read config file '{0}'".format(self._fname))
        return e

    def _include(self, directive: str) -> Iterator[str]:
        a = directive.split(maxsplit=1)
        if len(a) < 2:
            raise ConfigError("$include without a file name")
        name = os.path.join(os.path.dirname(self._fname), a[1].strip())
        self._inner_rdr = LineReader(
            name,
            package_name=self._package_name,
            outer_fname=self._fname,
            outer_line=self._line,
        )
        yield from self._inner_rdr.lines()
        self._inner_rdr = None

    def lines(self) -> Iterator[str]:
        """Generate the logical lines of the file, with included
        files expanded in place"""
        self._line = 0
        pending = ""
        try:
            with self._open() as inp:
                for b in inp:
                    self._line += 1
                    s = b.decode("utf-8")
                    if s.rstrip().endswith("\\"):
                        pending += s.strip()[:-1] + " "
                        continue
                    if pending:
                        s, pending = pending + s.lstrip(), ""
                    if s.split(maxsplit=1)[:1] == ["$include"]:
                        yield from self._include(s)
                    else:
                        yield s
        except OSError as e:
            raise self._read_error() from e
        if pending:
            yield pending
