"""

    test_bimap.py

    Tests for the BiMap label interner

    Copyright (C) 2021 by Miðeind ehf.

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


"""

import pytest

from penntree import NO_INT, BiMap, InvariantError


def test_bimap() -> None:
    strs = ["a", "b", "c"]
    m = BiMap()
    assert len(m) == 0
    for i, s in enumerate(strs):
        assert m.add(s) == i
    # Adding again returns the existing id
    assert m.add("b") == 1
    assert len(m) == 3
    for i, s in enumerate(strs):
        assert m.find_string(s) == i
        assert m.find_int(i) == s
        assert s in m
    assert m.find_int(-1) == ""
    assert m.find_int(len(m)) == ""
    assert m.find_string("abc") == NO_INT
    assert "abc" not in m


def test_translate() -> None:
    m = BiMap()
    assert m.intern_all(["a", "b", "c", "a"]) == [0, 1, 2, 0]
    assert m.translate_strings(["c", "b", "a", "d"]) == [2, 1, 0, NO_INT]
    assert len(m) == 3
    assert m.translate_ints([0, 1, 2, 3]) == ["a", "b", "c", ""]
    assert m.lookup_all([2, 0]) == ["c", "a"]
    assert m.intern("d") == 3
    assert m.lookup(3) == "d"


def test_add_empty() -> None:
    with pytest.raises(InvariantError):
        BiMap().add("")
