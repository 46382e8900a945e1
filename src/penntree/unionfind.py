"""
    penntree: Penn Treebank trees for Python

    Union-find module

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

    This module implements find-with-path-compression over a pointer
    list indexed by node id. A node whose pointer refers to itself is
    a representative.

    The same find() is used for connected components in a Topology
    and for chasing head-child pointers down to head leaves in a
    ParseTree, where every chain ends at a leaf pointing to itself.

"""

from typing import List

from .basics import NodeId


def find(n: NodeId, p: List[NodeId]) -> NodeId:
    """Return the representative of n, pointing every node on the
    path from n directly at it"""
    r = n
    while p[r] != r:
        r = p[r]
    while n != r:
        m = p[n]
        p[n] = r
        n = m
    return r


def union(a: NodeId, b: NodeId, p: List[NodeId]) -> NodeId:
    """Merge the sets of a and b; the representative of a is kept"""
    ra = find(a, p)
    rb = find(b, p)
    p[rb] = ra
    return ra
