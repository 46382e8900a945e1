"""

    test_tree.py

    Tests for ParseTree annotations and transformations

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

from typing import List, Sequence

import pytest

from penntree import (
    FILL_EVERYTHING,
    FILL_HEAD,
    FILL_HEAD_LEAF,
    FILL_LABEL_ID,
    FILL_POS,
    FILL_SPAN,
    FILL_UP_LINK,
    FILL_YIELD,
    NO_NODE,
    BiMap,
    Direction,
    InvariantError,
    ParseTree,
    Span,
    TableHeadFinder,
    Topology,
    from_text,
    strip_label_annotation,
)


@pytest.fixture
def finder() -> TableHeadFinder:
    """A head finder that always picks the last child"""
    return TableHeadFinder(None, Direction.FINAL)


def equiv(a: ParseTree, b: ParseTree) -> bool:
    """Compare the topology and every annotation of two trees"""
    return (
        a.topology == b.topology
        and a.label == b.label
        and a.id == b.id
        and a.span == b.span
        and a.head == b.head
        and a.head_leaf == b.head_leaf
    )


REMAP_CASES = ["((S (NP this) (VP (V is) (NP (DT a) (NN test)))))", "(())"]


@pytest.mark.parametrize("txt", REMAP_CASES)
def test_remap_by_label(txt: str) -> None:
    m = BiMap()
    tree = from_text(txt)
    assert tree.label is not None
    assert tree.num_nodes == len(tree.label)
    tree.remap_by_label(m)
    assert tree.id == [m.find_string(s) for s in tree.label]
    assert tree.interner is m
    # The stored interner is used when none is given
    tree.id = None
    tree.remap_by_label()
    assert tree.id == [m.find_string(s) for s in tree.label]


@pytest.mark.parametrize("txt", REMAP_CASES)
def test_remap_by_id(txt: str) -> None:
    m = BiMap()
    tree = from_text(txt)
    label = tree.label
    tree.remap_by_label(m)
    tree.label = None
    tree.interner = None
    with pytest.raises(InvariantError):
        tree.remap_by_id()
    tree.remap_by_id(m)
    assert tree.label == label


def test_remap_size_mismatch() -> None:
    tree = from_text("((A B))")
    tree.label = ["A"]
    with pytest.raises(InvariantError):
        tree.remap_by_label(BiMap())
    tree.id = None
    with pytest.raises(InvariantError):
        tree.remap_by_id(BiMap())


@pytest.mark.parametrize(
    "txt, span",
    [
        ("(())", []),
        ("((A B))", [Span(0, 1), Span(0, 1)]),
        (
            "((A (B C) (D (E F) (G H))))",
            [
                Span(0, 3),
                Span(0, 1),
                Span(0, 1),
                Span(1, 3),
                Span(1, 2),
                Span(1, 2),
                Span(2, 3),
                Span(2, 3),
            ],
        ),
    ],
)
def test_fill_span(txt: str, span: List[Span]) -> None:
    tree = from_text(txt)
    tree.fill_span()
    assert tree.span == span


HEAD_CASES = [
    ("(())", [], []),
    ("((A B))", [0, -1], [1, 1]),
    (
        "((A (B (C D) (E F)) (G H)))",
        [1, 1, 0, -1, 0, -1, 0, -1],
        [7, 5, 3, 3, 5, 5, 7, 7],
    ),
]


@pytest.mark.parametrize("txt, head, head_leaf", HEAD_CASES)
def test_fill_head(finder: TableHeadFinder, txt: str, head: List[int], head_leaf: List[int]) -> None:
    tree = from_text(txt)
    tree.fill_head(finder)
    assert tree.head == head


@pytest.mark.parametrize("txt, head, head_leaf", HEAD_CASES)
def test_fill_head_leaf(
    finder: TableHeadFinder, txt: str, head: List[int], head_leaf: List[int]
) -> None:
    tree = from_text(txt)
    tree.fill_head(finder)
    tree.fill_head_leaf()
    assert tree.head_leaf == head_leaf
    # Filling again gives the same result
    tree.fill_head_leaf()
    assert tree.head_leaf == head_leaf


def test_fill_head_leaf_initial() -> None:
    tree = from_text("((A (B (C D) (E F)) (G H)))")
    tree.fill_head(TableHeadFinder(None, Direction.INITIAL))
    tree.fill_head_leaf()
    assert tree.head_leaf == [3, 3, 3, 3, 5, 5, 7, 7]


def test_fill_head_preconditions(finder: TableHeadFinder) -> None:
    tree = from_text("((A B))")
    tree.label = None
    with pytest.raises(InvariantError):
        tree.fill_head(finder)
    tree = from_text("((A B))")
    with pytest.raises(InvariantError):
        tree.fill_head_leaf()
    tree.head = [0]
    with pytest.raises(InvariantError):
        tree.fill_head_leaf()
    with pytest.raises(InvariantError):
        tree.fill(FILL_HEAD)


class BadFinder:
    def find_head(self, parent: str, children: Sequence[str]) -> int:
        return len(children)


def test_fill_head_bad_finder() -> None:
    with pytest.raises(InvariantError):
        from_text("((A B))").fill_head(BadFinder())


@pytest.mark.parametrize(
    "txt, yield_, pos",
    [
        ("(())", [], []),
        ("((A B))", [1], [0]),
        ("((A (B (C D) (E F)) (G H)))", [3, 5, 7], [2, 4, 6]),
    ],
)
def test_fill_yield_pos(txt: str, yield_: List[int], pos: List[int]) -> None:
    tree = from_text(txt)
    tree.fill_yield()
    tree.fill_pos()
    assert tree.yield_ == yield_
    assert tree.pos == pos


def test_fill_pos_no_pre_terminal() -> None:
    # (A B (C D) E), where B and E are leaves directly under A
    tree = ParseTree(Topology(0, [[1, 2, 4], [], [3], [], []]), ["A", "B", "C", "D", "E"])
    tree.fill_yield()
    tree.fill_pos()
    assert tree.yield_ == [1, 3, 4]
    assert tree.pos == [1, 2, 4]


@pytest.mark.parametrize(
    "flag",
    [
        0,
        FILL_LABEL_ID,
        FILL_SPAN,
        FILL_HEAD,
        FILL_HEAD_LEAF,
        FILL_YIELD,
        FILL_POS,
        FILL_UP_LINK,
        FILL_EVERYTHING,
    ],
)
def test_fill(finder: TableHeadFinder, flag: int) -> None:
    m = BiMap()
    tree = from_text("((A (B C) (D E)))")
    tree.remap_by_label(m)
    tree.fill_span()
    tree.fill_head(finder)
    tree.fill_head_leaf()
    tree.fill_yield()
    tree.fill_pos()
    tree.topology.fill_up_link()

    tree1 = from_text("((A (B C) (D E)))")
    tree1.fill(flag, m, finder)
    for attr, bit in (
        ("id", FILL_LABEL_ID),
        ("span", FILL_SPAN),
        ("head", FILL_HEAD | FILL_HEAD_LEAF),
        ("head_leaf", FILL_HEAD_LEAF),
        ("yield_", FILL_YIELD),
        ("pos", FILL_POS),
    ):
        if flag & bit:
            assert getattr(tree1, attr) == getattr(tree, attr)
        else:
            assert getattr(tree1, attr) is None
    if flag & FILL_UP_LINK:
        assert tree1.topology.up_link == tree.topology.up_link
    else:
        assert tree1.topology.up_link is None


def test_fill_label_from_id() -> None:
    m = BiMap()
    tree = from_text("((A (B C) (D E)))")
    tree.fill(FILL_LABEL_ID, m)
    label = tree.label
    tree.label = None
    tree.fill(FILL_LABEL_ID)
    assert tree.label == label


def test_str_from_id() -> None:
    m = BiMap()
    tree = from_text("((A (B C) (D E)))")
    tree.remap_by_label(m)
    tree.label = None
    assert str(tree) == "((A (B C) (D E)))"
    tree.label = None
    tree.interner = None
    with pytest.raises(InvariantError):
        str(tree)


def test_string_under() -> None:
    tree = from_text("((A (B C) (D (E F) (G H))))")
    assert tree.string_under(3) == "(D (E F) (G H))"
    assert tree.string_under(5) == "F"
    assert tree.string_under(NO_NODE) == ""


@pytest.mark.parametrize(
    "txt, expected, remove",
    [
        ("(())", "(())", []),
        (
            "((A (B C) (D (E F) (G H))))",
            "((A (D (G H))))",
            [False, True, False, False, True, False, False, False],
        ),
        (
            "((A (B C) (D (E F) (G H))))",
            "((A (B C) (D (E F) (G H))))",
            [False] * 8,
        ),
        (
            "((A (B C) (D (E F) (G H))))",
            "(())",
            [True] + [False] * 7,
        ),
    ],
)
def test_topsort(finder: TableHeadFinder, txt: str, expected: str, remove: List[bool]) -> None:
    m = BiMap()
    tree = from_text(txt)
    tree.topology.disconnect(remove)
    tree.fill(FILL_LABEL_ID | FILL_SPAN | FILL_HEAD_LEAF, m, finder)
    tree.topsort()

    output = from_text(expected)
    output.fill(FILL_LABEL_ID | FILL_SPAN | FILL_HEAD_LEAF, m, finder)
    assert equiv(tree, output)


def test_topsort_drops_partial_annotations() -> None:
    tree = from_text("((A (B C) (D E)))")
    tree.fill_span()
    tree.fill_yield()
    tree.head = [0, 0]
    tree.topology.disconnect([False, True, False, False, False])
    tree.topsort()
    assert tree.label == ["A", "D", "E"]
    assert tree.span == [Span(0, 2), Span(1, 2), Span(1, 2)]
    assert tree.head is None
    assert tree.id is None
    # The yield referred to the removed leaf C
    assert tree.yield_ is None


def test_topsort_head_leaf_mapping(finder: TableHeadFinder) -> None:
    # Build (A (B C) (D E)) with the nodes out of pre-order
    topology = Topology.empty()
    for _ in range(5):
        topology.add_node()
    topology.append_child(4, 2)
    topology.append_child(4, 0)
    topology.append_child(2, 3)
    topology.append_child(0, 1)
    topology.root = 4
    tree = ParseTree(topology, ["D", "E", "B", "C", "A"])
    tree.fill(FILL_HEAD_LEAF | FILL_YIELD, None, finder)
    assert tree.head_leaf == [1, 1, 3, 3, 1]
    assert tree.yield_ == [3, 1]
    assert tree.topsort() == [3, 4, 1, 2, 0]
    assert str(tree) == "((A (B C) (D E)))"
    assert tree.head_leaf == [4, 2, 2, 4, 4]
    assert tree.yield_ == [2, 4]


@pytest.mark.parametrize(
    "label, expected",
    [
        ("NP", "NP"),
        ("NP-SBJ-1", "NP"),
        ("DT=2", "DT"),
        ("*T*-1", "*T*"),
        ("-NONE-", ""),
    ],
)
def test_strip_label_annotation(label: str, expected: str) -> None:
    assert strip_label_annotation(label) == expected


@pytest.mark.parametrize(
    "txt, expected",
    [
        (
            "((S (NP this) (VP (V is) (NP (DT a) (NN test)))))",
            "((S (NP this) (VP (V is) (NP (DT a) (NN test)))))",
        ),
        (
            "((S (NP-1 this-this) (VP-2 (V-3-4 is) (NP-NONE (DT=2 a) (NN test)))))",
            "((S (NP this-this) (VP (V is) (NP (DT a) (NN test)))))",
        ),
        (
            "((S (NP this) (-NONE- (NP-1 *PRO*-2)) (VP (V is) (NP (DT a) (NN test)))))",
            "((S (NP this) (-NONE- (NP *PRO*)) (VP (V is) (NP (DT a) (NN test)))))",
        ),
        ("((NP-1 this-this))", "((NP this-this))"),
        ("((-NONE- (NP-1 *PRO*-2)))", "((-NONE- (NP *PRO*)))"),
    ],
)
def test_strip_annotation(txt: str, expected: str) -> None:
    tree = from_text(txt)
    tree.remap_by_label(BiMap())
    assert tree.strip_annotation() is tree
    assert tree == from_text(expected)
    assert tree.id is None


@pytest.mark.parametrize(
    "txt, expected",
    [
        (
            "((S (NP this) (VP (V is) (NP (DT a) (NN test)))))",
            "((S (NP this) (VP (V is) (NP (DT a) (NN test)))))",
        ),
        ("((S (NP (-NONE- (NP *PRO*)))))", "(())"),
        (
            "((S (NP (-NONE- (NP *PRO*)) (-NONE- *T*)) (VP (-NONE- *T*) (V v))))",
            "((S (VP (V v))))",
        ),
        ("(())", "(())"),
    ],
)
def test_remove_none(txt: str, expected: str) -> None:
    tree = from_text(txt)
    assert tree.remove_none() is tree
    assert tree == from_text(expected)


def test_remove_none_keeps_annotations(finder: TableHeadFinder) -> None:
    tree = from_text("((S (-NONE- *T*) (VP (V v))))")
    tree.fill(FILL_SPAN | FILL_HEAD, None, finder)
    tree.remove_none()
    assert str(tree) == "((S (VP (V v))))"
    assert tree.span == [Span(0, 2), Span(1, 2), Span(1, 2), Span(1, 2)]
    # Head indices are carried over, not recomputed
    assert tree.head == [1, 0, 0, -1]


@pytest.mark.parametrize(
    "tree, expected",
    [
        (ParseTree(Topology.rooted(), ["A"]), False),
        (from_text("((A B))"), True),
        (from_text("((A (B (C D))))"), False),
        (from_text("((A (B C) (D E)))"), False),
    ],
)
def test_pre_terminal(tree: ParseTree, expected: bool) -> None:
    assert tree.topology.pre_terminal(tree.root) == expected


def test_copy() -> None:
    tree = from_text("((A (B C) (D E)))")
    tree.fill_span()
    other = tree.copy()
    assert other == tree
    assert other.span == tree.span
    assert other.label is not tree.label
    other.strip_annotation()
    other.label[0] = "X"
    assert tree.label[0] == "A"


def test_cycle_is_fatal() -> None:
    # Node 1 is a child of node 0 and a parent of it
    tree = ParseTree(Topology(0, [[1, 2], [0], []]), ["A", "B", "C"])
    with pytest.raises(InvariantError):
        tree.fill_span()
    with pytest.raises(InvariantError):
        tree.fill_yield()
    with pytest.raises(InvariantError):
        tree.fill_pos()
    with pytest.raises(InvariantError):
        str(tree)
