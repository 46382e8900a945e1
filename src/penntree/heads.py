"""
    penntree: Penn Treebank trees for Python

    Head finder module

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

    This module finds the head child of a constituent, given the label
    of the constituent and the labels of its children.

    TableHeadFinder implements the generic table-driven algorithm: the
    HeadRule for the parent label gives a scan direction and a priority
    ranking of child labels, and the best-ranked child found first in
    the scan is the head. EnglishHeadFinder and ChineseHeadFinder add
    language-specific overrides on top of tables that are read from
    the HeadRules.conf configuration file (see settings.py).

"""

from typing import Dict, Mapping, Optional, Sequence

from typing_extensions import Protocol

from .basics import Direction, InvariantError
from .settings import HeadRules


class HeadFinder(Protocol):

    """Finds the head child in a constituent expressed as a parent
    label and the labels of its children"""

    def find_head(self, parent: str, children: Sequence[str]) -> int:
        """Return the index of the head child. Raises InvariantError
        if children is empty or the head cannot be found."""
        ...


class HeadRule:

    """The direction of a constituent and the priority ranking
    of its child labels"""

    __slots__ = ("direction", "priority")

    def __init__(self, direction: Direction, match: Optional[Sequence[str]] = None) -> None:
        """Create a rule scanning in the given direction, where the labels
        in match are given priorities in decreasing order. match may be
        empty, in which case the direction alone decides the head."""
        if direction not in (Direction.INITIAL, Direction.FINAL):
            raise InvariantError(
                "Head direction must be either INITIAL or FINAL, not {0!r}".format(
                    direction
                )
            )
        self.direction = direction
        # Label: priority in the range [0, len(priority)); 0 is the highest
        self.priority: Dict[str, int] = {label: i for i, label in enumerate(match or ())}

    def __repr__(self) -> str:
        return "HeadRule({0}, {1})".format(
            self.direction.name, sorted(self.priority, key=self.priority.__getitem__)
        )

    def label_priority(self, label: str) -> int:
        """Return the priority of label; labels not in the
        rule get the lowest priority, len(priority)"""
        return self.priority.get(label, len(self.priority))


class TableHeadFinder:

    """Finds the head by looking up a table of HeadRules.
    Parent labels that are not in the table use the fallback
    direction, or are an error if the fallback is UNKNOWN."""

    def __init__(
        self,
        table: Optional[Mapping[str, HeadRule]] = None,
        fallback: Direction = Direction.UNKNOWN,
    ) -> None:
        self.table: Dict[str, HeadRule] = dict(table or {})
        self.fallback = fallback

    @classmethod
    def for_language(cls, language: str) -> "TableHeadFinder":
        """Create a head finder from the configured rules of a language"""
        table = {
            parent: HeadRule(direction, match)
            for parent, (direction, match) in HeadRules.table(language).items()
        }
        return cls(table, HeadRules.fallback(language))

    def find_head(self, parent: str, children: Sequence[str]) -> int:
        if not children:
            raise InvariantError("Trying to find the head of a leaf: " + parent)
        rule = self.table.get(parent)
        if rule is None:
            if self.fallback == Direction.INITIAL:
                return 0
            if self.fallback == Direction.FINAL:
                return len(children) - 1
            raise InvariantError("Unknown category: " + parent)
        n = len(children)
        if rule.direction == Direction.INITIAL:
            scan: Sequence[int] = range(n)
        else:
            scan = range(n - 1, -1, -1)
        best = -1
        best_priority = 0
        for i in scan:
            p = rule.label_priority(children[i])
            # Strictly better only: ties go to the child seen first
            if best < 0 or p < best_priority:
                best = i
                best_priority = p
        return best


# Child labels searched for in the special NP rule, in order
_NP_NOMINALS = frozenset(("NN", "NNP", "NNPS", "NNS", "NX", "POS", "JJR"))
_NP_MODIFIERS = frozenset(("$", "ADJP", "PRN"))
_NP_ADJECTIVALS = frozenset(("JJ", "JJS", "RB", "QP"))


def _rightmost(children: Sequence[str], labels: frozenset) -> int:
    for i in range(len(children) - 1, -1, -1):
        if children[i] in labels:
            return i
    return -1


class EnglishHeadFinder(TableHeadFinder):

    """A head finder for English Penn Treebank trees. NPs get special
    treatment, cf. note [2] in http://www.cs.columbia.edu/~mcollins/papers/heads.

    Collins also removes ADJPs, QPs and NPs dominating a possessive
    before finding NP heads; that transformation is up to the caller."""

    def __init__(self) -> None:
        finder = TableHeadFinder.for_language("english")
        super().__init__(finder.table, finder.fallback)

    def find_head(self, parent: str, children: Sequence[str]) -> int:
        if parent != "NP":
            return super().find_head(parent, children)
        if not children:
            raise InvariantError("Trying to find the head of a leaf: " + parent)
        last = len(children) - 1
        if children[last] == "POS":
            return last
        i = _rightmost(children, _NP_NOMINALS)
        if i >= 0:
            return i
        if "NP" in children:
            # Leftmost NP
            return list(children).index("NP")
        for labels in (_NP_MODIFIERS, frozenset(("CD",)), _NP_ADJECTIVALS):
            i = _rightmost(children, labels)
            if i >= 0:
                return i
        return last


class ChineseHeadFinder(TableHeadFinder):

    """A head finder for Chinese Treebank trees, cf. table 8 in
    http://www.aclweb.org/anthology-new/D/D08/D08-1059.pdf.
    A DP is headed by its rightmost measure word (M), if any."""

    def __init__(self) -> None:
        finder = TableHeadFinder.for_language("chinese")
        super().__init__(finder.table, finder.fallback)

    def find_head(self, parent: str, children: Sequence[str]) -> int:
        if parent == "DP":
            i = _rightmost(children, frozenset(("M",)))
            if i >= 0:
                return i
        return super().find_head(parent, children)


def head_finder(language: str) -> HeadFinder:
    """Return a head finder for the given language"""
    finders: Dict[str, type] = {
        "english": EnglishHeadFinder,
        "chinese": ChineseHeadFinder,
    }
    cls = finders.get(language.lower())
    if cls is None:
        return TableHeadFinder.for_language(language.lower())
    return cls()
