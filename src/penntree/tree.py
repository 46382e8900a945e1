"""
    penntree: Penn Treebank trees for Python

    Parse tree module

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

    This module defines the ParseTree class, a Topology with annotations
    stored in lists that are indexed by node id and run parallel to it:

        label       the node label as a string
        id          the node label as an interned integer
        span        the half-open [left, right) token span of the node
        head        the index of the head child within the node's children;
                    -1 for leaves
        head_leaf   the head leaf dominated by the node; a leaf is its
                    own head leaf
        yield_      the leaves of the tree, left to right
        pos         the pre-terminal above each leaf of the yield

    Each annotation is either absent (None) or present with exactly one
    entry per node (yield_ and pos have one entry per leaf). The tree does
    not recompute annotations when its structure changes; that is up to
    the caller, with the exception of topsort(), which carries every
    present annotation over to the new node numbering.

"""

from typing import Any, Callable, List, NamedTuple, Optional, Sequence

from functools import lru_cache

from .basics import EMPTY_CATEGORY, NO_NODE, InvariantError, NodeId
from .bimap import LabelInterner
from .heads import HeadFinder
from .topology import Topology
from .unionfind import find


class Span(NamedTuple):
    left: int
    right: int


# Flags for ParseTree.fill(), selecting the annotations to compute.
# FILL_LABEL_ID fills Id from Label when Label is present, else Label from Id.
FILL_LABEL_ID = 1 << 0
FILL_SPAN = 1 << 1
FILL_HEAD = 1 << 2
FILL_HEAD_LEAF = 1 << 3
FILL_YIELD = 1 << 4
FILL_POS = 1 << 5
FILL_UP_LINK = 1 << 6
FILL_EVERYTHING = (
    FILL_LABEL_ID
    | FILL_SPAN
    | FILL_HEAD
    | FILL_HEAD_LEAF
    | FILL_YIELD
    | FILL_POS
    | FILL_UP_LINK
)

# The head of a leaf
NO_HEAD = -1


@lru_cache(maxsize=4096)
def strip_label_annotation(label: str) -> str:
    """Strip functional tags and indices off a label,
    e.g. NP-SBJ-1 -> NP, DT=2 -> DT, *T*-1 -> *T*"""
    for i, c in enumerate(label):
        if c == "-" or c == "=":
            return label[:i]
    return label


class ParseTree:

    """A tree topology with annotations of its nodes"""

    def __init__(
        self,
        topology: Optional[Topology] = None,
        label: Optional[List[str]] = None,
        *,
        interner: Optional[LabelInterner] = None,
    ) -> None:
        self.topology = topology if topology is not None else Topology.empty()
        self.interner = interner
        self.label: Optional[List[str]] = label
        self.id: Optional[List[int]] = None
        self.span: Optional[List[Span]] = None
        self.head: Optional[List[int]] = None
        self.head_leaf: Optional[List[NodeId]] = None
        self.yield_: Optional[List[NodeId]] = None
        self.pos: Optional[List[NodeId]] = None

    @property
    def root(self) -> NodeId:
        return self.topology.root

    @property
    def num_nodes(self) -> int:
        return self.topology.num_nodes

    def is_empty(self) -> bool:
        """Return True if this is the empty (no-parse) tree"""
        return self.topology.root == NO_NODE

    def _sized(self, a: Optional[Sequence[Any]]) -> bool:
        """Return True if the annotation a is present with
        one entry per node"""
        return a is not None and len(a) == self.topology.num_nodes

    def _require(self, a: Optional[Sequence[Any]], name: str) -> None:
        if not self._sized(a):
            raise InvariantError(
                "{0} ({1}) and Topology ({2}) do not match in size".format(
                    name,
                    "absent" if a is None else len(a),
                    self.topology.num_nodes,
                )
            )

    def copy(self) -> "ParseTree":
        """Return a deep copy of the tree and its annotations.
        The interner is shared, not copied."""
        t = ParseTree(self.topology.copy(), interner=self.interner)
        for attr in ("label", "id", "span", "head", "head_leaf", "yield_", "pos"):
            a = getattr(self, attr)
            setattr(t, attr, None if a is None else list(a))
        return t

    def __eq__(self, other: object) -> bool:
        """Two trees are equal if they have the same topology and labels"""
        if not isinstance(other, ParseTree):
            return NotImplemented
        return self.topology == other.topology and self.label == other.label

    def __repr__(self) -> str:
        return "<ParseTree {0}>".format(self)

    def __str__(self) -> str:
        """Return the tree in bracketed treebank notation. Label must be
        present; or if an interner and Id are, Label is rebuilt from them."""
        if not self._sized(self.label):
            if self.interner is not None and self._sized(self.id):
                self.remap_by_id()
            else:
                raise InvariantError("Cannot get a valid Label")
        if self.topology.root == NO_NODE:
            return "(())"
        return "(" + self.string_under(self.topology.root) + ")"

    def string_under(self, node: NodeId) -> str:
        """Return the subtree under node in bracketed notation,
        without the outer parentheses that wrap a whole tree"""
        self._require(self.label, "Label")
        if node == NO_NODE:
            return ""
        assert self.label is not None
        label = self.label
        topology = self.topology
        parts: List[str] = []
        # Stack of nodes to render, None meaning a closing parenthesis
        stack: List[Optional[NodeId]] = [node]
        visited = [False] * topology.num_nodes
        while stack:
            n = stack.pop()
            if n is None:
                parts.append(")")
                continue
            if visited[n]:
                raise InvariantError("Cycle in Topology at node {0}".format(n))
            visited[n] = True
            if parts:
                parts.append(" ")
            kids = topology.children(n)
            if not kids:
                parts.append(label[n])
            else:
                parts.append("(")
                parts.append(label[n])
                stack.append(None)
                stack.extend(reversed(kids))
        return "".join(parts)

    # Label and Id

    def _use_interner(self, interner: Optional[LabelInterner], what: str) -> LabelInterner:
        if interner is not None:
            self.interner = interner
        elif self.interner is None:
            raise InvariantError("{0} without specifying an interner".format(what))
        return self.interner

    def remap_by_label(self, interner: Optional[LabelInterner] = None) -> None:
        """Rebuild Id from Label, interning new labels. If interner
        is None, the interner already stored in the tree is used."""
        self._require(self.label, "Label")
        assert self.label is not None
        self.id = self._use_interner(interner, "remap_by_label").intern_all(self.label)

    def remap_by_id(self, interner: Optional[LabelInterner] = None) -> None:
        """Rebuild Label from Id. If interner is None, the interner
        already stored in the tree is used."""
        self._require(self.id, "Id")
        assert self.id is not None
        self.label = self._use_interner(interner, "remap_by_id").lookup_all(self.id)

    # Span

    def fill_span(self) -> None:
        """Fill Span with the token span of every node. Nodes outside
        the tree under root get an empty span at 0."""
        topology = self.topology
        span = [Span(0, 0)] * topology.num_nodes
        order = topology.preorder()
        cursor = 0
        for n in order:
            if topology.leaf(n):
                span[n] = Span(cursor, cursor + 1)
                cursor += 1
        # Children come after their parent in pre-order
        for n in reversed(order):
            kids = topology.children(n)
            if kids:
                span[n] = Span(span[kids[0]].left, span[kids[-1]].right)
        self.span = span

    # Head and HeadLeaf

    def fill_head(self, finder: HeadFinder) -> None:
        """Fill Head using the given head finder. Label must be present."""
        self._require(self.label, "Label")
        assert self.label is not None
        label = self.label
        topology = self.topology
        head = [NO_HEAD] * topology.num_nodes
        for n in range(topology.num_nodes):
            kids = topology.children(n)
            if kids:
                h = finder.find_head(label[n], [label[child] for child in kids])
                if not 0 <= h < len(kids):
                    raise InvariantError(
                        "Head finder returned {0} for {1} with {2} children".format(
                            h, label[n], len(kids)
                        )
                    )
                head[n] = h
        self.head = head

    def fill_head_leaf(self) -> None:
        """Fill HeadLeaf by following head children down to the leaves.
        Head must be present."""
        self._require(self.head, "Head")
        assert self.head is not None
        topology = self.topology
        # Point every node at its head child, and every leaf at itself;
        # the head leaf of a node is then its representative
        hl = [
            topology.children(n)[h] if h >= 0 else n
            for n, h in enumerate(self.head)
        ]
        for n in range(len(hl)):
            find(n, hl)
        self.head_leaf = hl

    # Yield and POS

    def fill_yield(self) -> None:
        """Fill the yield, i.e. the leaves of the tree in left-to-right order"""
        topology = self.topology
        self.yield_ = [n for n in topology.preorder() if topology.leaf(n)]

    def fill_pos(self) -> None:
        """Fill POS with the pre-terminal above each leaf of the tree,
        or the leaf itself if its parent is not a pre-terminal"""
        topology = self.topology
        order = topology.preorder()
        parent = [NO_NODE] * topology.num_nodes
        for n in order:
            for child in topology.children(n):
                parent[child] = n
        pos: List[NodeId] = []
        for n in order:
            if topology.leaf(n):
                p = parent[n]
                pos.append(p if p != NO_NODE and topology.pre_terminal(p) else n)
        self.pos = pos

    def fill(
        self,
        flags: int,
        interner: Optional[LabelInterner] = None,
        finder: Optional[HeadFinder] = None,
    ) -> None:
        """Fill the annotations selected by flags, in dependency order.
        interner may be None if one is already stored in the tree, and
        finder may be None unless FILL_HEAD or FILL_HEAD_LEAF is set."""
        if flags & FILL_LABEL_ID:
            if self._sized(self.label):
                self.remap_by_label(interner)
            else:
                self.remap_by_id(interner)
        if flags & FILL_SPAN:
            self.fill_span()
        if flags & (FILL_HEAD | FILL_HEAD_LEAF):
            if finder is None:
                raise InvariantError("Filling Head without a head finder")
            self.fill_head(finder)
        if flags & FILL_HEAD_LEAF:
            self.fill_head_leaf()
        if flags & FILL_YIELD:
            self.fill_yield()
        if flags & FILL_POS:
            self.fill_pos()
        if flags & FILL_UP_LINK:
            self.topology.fill_up_link()

    # Structural transformations

    def topsort(self) -> List[NodeId]:
        """Sort the topology in top-down order (see Topology.topsort())
        and carry the present annotations over to the new node ids.
        Annotations not of full length are dropped, as are a yield
        and POS that refer to removed nodes. Returns the mapping from
        old node ids to new ones."""
        old_num_nodes = self.topology.num_nodes

        def sized(a: Optional[Sequence[Any]]) -> bool:
            return a is not None and len(a) == old_num_nodes

        keep = {
            attr: sized(getattr(self, attr))
            for attr in ("label", "id", "span", "head", "head_leaf")
        }
        old_to_new = self.topology.topsort()
        num_nodes = self.topology.num_nodes
        new_to_old = [NO_NODE] * num_nodes
        for o, n in enumerate(old_to_new):
            if n != NO_NODE:
                new_to_old[n] = o

        def remap(a: Sequence[Any], func: Callable[[Any], Any] = lambda x: x) -> List[Any]:
            return [func(a[o]) for o in new_to_old]

        for attr in ("label", "id", "span", "head"):
            setattr(self, attr, remap(getattr(self, attr)) if keep[attr] else None)
        if keep["head_leaf"]:
            assert self.head_leaf is not None
            # A head leaf that was removed maps to NO_NODE
            self.head_leaf = remap(self.head_leaf, old_to_new.__getitem__)
        else:
            self.head_leaf = None
        for attr in ("yield_", "pos"):
            a = getattr(self, attr)
            if a is not None:
                mapped = [
                    old_to_new[n] if 0 <= n < old_num_nodes else NO_NODE for n in a
                ]
                setattr(self, attr, None if NO_NODE in mapped else mapped)
        return old_to_new

    def strip_annotation(self) -> "ParseTree":
        """Strip functional tags and indices off labels (e.g. NP-SBJ-1 -> NP).
        Leaf labels are only stripped if they begin with an asterisk
        (*T*-1, *PRO*-2, ...), and labels of inner nodes are kept intact
        if they begin with a hyphen (-NONE-, -LRB-, ...). Id is dropped,
        since it no longer matches Label. Returns the tree itself."""
        self._require(self.label, "Label")
        assert self.label is not None
        topology = self.topology
        label = self.label
        for n, s in enumerate(label):
            if topology.leaf(n):
                if s.startswith("*"):
                    label[n] = strip_label_annotation(s)
            elif s and not s.startswith("-"):
                label[n] = strip_label_annotation(s)
        self.id = None
        return self

    def remove_none(self) -> "ParseTree":
        """Remove the empty category nodes (-NONE-) and every ancestor
        whose children are all removed, then renumber the tree.
        Returns the tree itself."""
        self._require(self.label, "Label")
        self.topsort()
        assert self.label is not None
        topology = self.topology
        label = self.label
        num_nodes = topology.num_nodes
        invisible = [False] * num_nodes
        # After topsort, children have higher ids than their parents,
        # so marking in decreasing id order is bottom-up
        for n in range(num_nodes - 1, -1, -1):
            if label[n] == EMPTY_CATEGORY:
                invisible[n] = True
                continue
            kids = topology.children(n)
            if kids and all(invisible[child] for child in kids):
                invisible[n] = True
                # Only the topmost invisible node needs to be disconnected
                for child in kids:
                    invisible[child] = False
        topology.disconnect(invisible)
        self.topsort()
        return self
