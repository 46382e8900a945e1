"""
    penntree: Penn Treebank trees for Python

    Label interning module

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

    This module implements BiMap, a bi-directional mapping between
    strings (node labels) and dense integer ids starting at 0, and
    declares the LabelInterner protocol that the annotation code in
    tree.py expects from such a mapping.

    A BiMap is not safe for concurrent mutation: do not call add()
    or intern() on the same instance from several threads without
    external locking.

"""

from typing import Dict, Iterable, List

from typing_extensions import Protocol

from .basics import InvariantError


# The id returned for strings that are not in the map
NO_INT = -1


class LabelInterner(Protocol):

    """The interning capability used to translate between the
    Label and Id annotations of a ParseTree"""

    def intern(self, s: str) -> int:
        ...

    def lookup(self, i: int) -> str:
        ...

    def intern_all(self, strs: Iterable[str]) -> List[int]:
        ...

    def lookup_all(self, ints: Iterable[int]) -> List[str]:
        ...


class BiMap:

    """A bi-directional mapping between strings and a dense
    range of integers starting at 0"""

    def __init__(self) -> None:
        self._str_to_int: Dict[str, int] = {}
        self._int_to_str: List[str] = []

    def __len__(self) -> int:
        """The size of the map, which is also the next id to be assigned"""
        return len(self._int_to_str)

    def __contains__(self, s: object) -> bool:
        return s in self._str_to_int

    def add(self, s: str) -> int:
        """Add s to the map if not already there and return its id"""
        if not s:
            raise InvariantError("Trying to add an empty string")
        i = self._str_to_int.get(s)
        if i is None:
            i = len(self._int_to_str)
            self._str_to_int[s] = i
            self._int_to_str.append(s)
        return i

    def find_string(self, s: str) -> int:
        """Return the id of s, or NO_INT if s is not in the map"""
        return self._str_to_int.get(s, NO_INT)

    def find_int(self, i: int) -> str:
        """Return the string with id i, or an empty string
        if there is no such id"""
        if 0 <= i < len(self._int_to_str):
            return self._int_to_str[i]
        return ""

    def translate_strings(self, strs: Iterable[str]) -> List[int]:
        """Translate strings to ids without adding new ones"""
        return [self.find_string(s) for s in strs]

    def translate_ints(self, ints: Iterable[int]) -> List[str]:
        """Translate ids to strings"""
        return [self.find_int(i) for i in ints]

    # LabelInterner protocol

    intern = add
    lookup = find_int

    def intern_all(self, strs: Iterable[str]) -> List[int]:
        return [self.add(s) for s in strs]

    lookup_all = translate_ints
