"""
    penntree: Penn Treebank trees for Python

    Topology module

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

    This module defines the Topology class, i.e. the shape of a forest
    of trees whose nodes are addressed by dense integer ids. The tree
    of interest is the one under the root node; other nodes may exist
    outside of it ("dangling" nodes), which supports building a tree
    incrementally from the bottom up or the top down.

    A Topology knows nothing about labels or other annotations. Those
    are kept in parallel lists in a ParseTree (see tree.py), which must
    re-derive them using the old-to-new id mapping returned by topsort().

"""

from typing import Dict, List, NamedTuple, Optional, Sequence

import logging

from .basics import NO_NODE, InvariantError, NodeId
from .unionfind import find, union


logger = logging.getLogger(__name__)


class UpLink(NamedTuple):

    """The link from a node up to its parent"""

    # The parent node id; NO_NODE for any node that has no parent
    parent: NodeId
    # The position of the node in its parent's children list;
    # arbitrary when parent is NO_NODE
    nth_child: int


class Topology:

    """The structure of a forest of trees over nodes 0..N-1.
    The tree under root is the tree that the Topology represents;
    when root is NO_NODE, the empty tree is represented
    (possibly by a Topology that has nodes).

    The up_link list is derived on demand by fill_up_link(). It is
    never read by any Topology method, and every mutation clears it."""

    def __init__(
        self,
        root: NodeId = NO_NODE,
        children: Optional[List[List[NodeId]]] = None,
    ) -> None:
        self.root = root
        self._children: List[List[NodeId]] = children if children is not None else []
        # The parent of each node, used to check that a node
        # is attached to at most one parent
        self._parent: List[NodeId] = [NO_NODE] * len(self._children)
        for parent, kids in enumerate(self._children):
            for child in kids:
                if self._parent[child] != NO_NODE:
                    raise InvariantError(
                        "Node {0} has more than one parent".format(child)
                    )
                self._parent[child] = parent
        self.up_link: Optional[List[UpLink]] = None

    @classmethod
    def empty(cls) -> "Topology":
        """Create an empty topology"""
        return cls()

    @classmethod
    def rooted(cls) -> "Topology":
        """Create a topology with a single root node"""
        return cls(0, [[]])

    def __repr__(self) -> str:
        return "<Topology root={0} children={1}>".format(self.root, self._children)

    def copy(self) -> "Topology":
        """Return a deep copy of this topology. The up-link
        list is not copied."""
        t = Topology.__new__(Topology)
        t.root = self.root
        t._children = [list(kids) for kids in self._children]
        t._parent = list(self._parent)
        t.up_link = None
        return t

    def equal(self, other: "Topology") -> bool:
        """Return True if other has the same root and the same children
        lists as this topology. The up-link lists are ignored."""
        return self.root == other.root and self._children == other._children

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Topology):
            return NotImplemented
        return self.equal(other)

    @property
    def num_nodes(self) -> int:
        """The number of nodes in the topology, including dangling ones"""
        return len(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def children(self, n: NodeId) -> Sequence[NodeId]:
        """Return the children of node n, in left-to-right order.
        The list must not be modified by the caller."""
        return self._children[n]

    def leaf(self, n: NodeId) -> bool:
        """Return True if n has no children in its own tree"""
        return not self._children[n]

    def pre_terminal(self, n: NodeId) -> bool:
        """Return True if n is a pre-terminal in its own tree,
        i.e. the POS tag node dominating a single leaf"""
        kids = self._children[n]
        return len(kids) == 1 and not self._children[kids[0]]

    def add_node(self) -> NodeId:
        """Add a node without a parent or children and return its id"""
        n = len(self._children)
        self._children.append([])
        self._parent.append(NO_NODE)
        self.up_link = None
        return n

    def append_child(self, parent: NodeId, child: NodeId) -> None:
        """Append child as the rightmost child of parent. The child may
        be the current root, in which case the topology still represents
        the subtree under it. It must not already have a parent."""
        if self._parent[child] != NO_NODE:
            raise InvariantError(
                "Node {0} already has a parent: {1}".format(child, self._parent[child])
            )
        if child == parent:
            raise InvariantError("Node {0} cannot be its own child".format(child))
        self._children[parent].append(child)
        self._parent[child] = parent
        self.up_link = None

    def fill_up_link(self) -> List[UpLink]:
        """Compute the link to the parent of every node"""
        up = [UpLink(NO_NODE, 0)] * len(self._children)
        for parent, kids in enumerate(self._children):
            for nth, child in enumerate(kids):
                up[child] = UpLink(parent, nth)
        self.up_link = up
        return up

    def components(self) -> Dict[NodeId, List[NodeId]]:
        """Return the connected components of the forest as a dict
        of representative node: list of nodes in the component, in
        increasing order. Every node belongs to exactly one component.
        The representative is any member of its component."""
        p = list(range(len(self._children)))
        for parent, kids in enumerate(self._children):
            for child in kids:
                union(parent, child, p)
        m: Dict[NodeId, List[NodeId]] = {}
        for n in range(len(p)):
            m.setdefault(find(n, p), []).append(n)
        return m

    def preorder(self) -> List[NodeId]:
        """Return the nodes of the tree under root in depth-first
        pre-order, i.e. with every parent before its descendants and
        the leaves in left-to-right order. Raises InvariantError if a
        node is reached twice."""
        order: List[NodeId] = []
        if self.root == NO_NODE:
            return order
        visited = [False] * len(self._children)
        stack = [self.root]
        while stack:
            n = stack.pop()
            if visited[n]:
                raise InvariantError("Cycle in Topology at node {0}".format(n))
            visited[n] = True
            order.append(n)
            # Push in reverse so that the leftmost child is visited first
            stack.extend(reversed(self._children[n]))
        return order

    def topsort(self) -> List[NodeId]:
        """Sort the topology in top-down order, renumbering the nodes so
        that each parent precedes its descendants and the root becomes 0.
        Nodes outside the tree under root are removed. Returns a list
        mapping old node ids to new ones, with NO_NODE for removed nodes.
        Raises InvariantError if the tree contains a cycle."""
        new_to_old = self.preorder()
        old_to_new = [NO_NODE] * len(self._children)
        for n, o in enumerate(new_to_old):
            old_to_new[o] = n
        # Reuse the children lists of the surviving nodes, rewriting them in place
        children = [self._children[o] for o in new_to_old]
        for kids in children:
            for i, child in enumerate(kids):
                kids[i] = old_to_new[child]
        parent = [NO_NODE] * len(children)
        for n, kids in enumerate(children):
            for child in kids:
                parent[child] = n
        dropped = len(self._children) - len(children)
        if dropped:
            logger.debug("Topsort dropped %d node(s) outside the tree", dropped)
        self.root = 0 if children else NO_NODE
        self._children = children
        self._parent = parent
        self.up_link = None
        return old_to_new

    def disconnect(self, remove: Sequence[bool]) -> int:
        """Detach every node marked True in remove from its parent;
        a marked root makes the tree empty. Node ids are not changed.
        Returns the number of links that were broken, so reapplying
        the same remove list returns 0."""
        if len(remove) != len(self._children):
            raise InvariantError(
                "Remove flags ({0}) and Topology ({1}) do not match in size".format(
                    len(remove), len(self._children)
                )
            )
        count = 0
        if self.root != NO_NODE and remove[self.root]:
            self.root = NO_NODE
            count += 1
        for parent, kids in enumerate(self._children):
            if not any(remove[child] for child in kids):
                continue
            kept = []
            for child in kids:
                if remove[child]:
                    self._parent[child] = NO_NODE
                    count += 1
                else:
                    kept.append(child)
            kids[:] = kept
        self.up_link = None
        return count
