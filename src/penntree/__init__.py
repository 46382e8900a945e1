"""
    penntree: Penn Treebank trees for Python

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

    This module exposes the penntree API, i.e. the identifiers that are
    directly accessible via the penntree module object after importing it.

"""

from .basics import NO_NODE, NodeId, Direction, InvariantError, ConfigError
from .topology import Topology, UpLink
from .tokenizer import Tokenizer, Token, TokenKind
from .bimap import BiMap, LabelInterner, NO_INT
from .heads import (
    HeadFinder,
    HeadRule,
    TableHeadFinder,
    EnglishHeadFinder,
    ChineseHeadFinder,
    head_finder,
)
from .tree import (
    ParseTree,
    Span,
    NO_HEAD,
    FILL_LABEL_ID,
    FILL_SPAN,
    FILL_HEAD,
    FILL_HEAD_LEAF,
    FILL_YIELD,
    FILL_POS,
    FILL_UP_LINK,
    FILL_EVERYTHING,
    strip_label_annotation,
)
from .parser import (
    Parser,
    ParseError,
    NoOpenParenError,
    NoCloseParenError,
    NoCategoryError,
    NoWordOrOpenParenError,
    ResidualInputError,
    parse_one,
    parse_all,
    parse_string,
    from_text,
)
from .settings import Settings, HeadRules, DEFAULT_CONFIG
from .version import __version__

__author__ = "Miðeind ehf."
__copyright__ = "(C) 2021 Miðeind ehf."

__all__ = (
    "NO_NODE",
    "NodeId",
    "Direction",
    "InvariantError",
    "ConfigError",
    "Topology",
    "UpLink",
    "Tokenizer",
    "Token",
    "TokenKind",
    "BiMap",
    "LabelInterner",
    "NO_INT",
    "HeadFinder",
    "HeadRule",
    "TableHeadFinder",
    "EnglishHeadFinder",
    "ChineseHeadFinder",
    "head_finder",
    "ParseTree",
    "Span",
    "NO_HEAD",
    "FILL_LABEL_ID",
    "FILL_SPAN",
    "FILL_HEAD",
    "FILL_HEAD_LEAF",
    "FILL_YIELD",
    "FILL_POS",
    "FILL_UP_LINK",
    "FILL_EVERYTHING",
    "strip_label_annotation",
    "Parser",
    "ParseError",
    "NoOpenParenError",
    "NoCloseParenError",
    "NoCategoryError",
    "NoWordOrOpenParenError",
    "ResidualInputError",
    "parse_one",
    "parse_all",
    "parse_string",
    "from_text",
    "Settings",
    "HeadRules",
    "DEFAULT_CONFIG",
    "__version__",
    "__author__",
    "__copyright__",
)

Settings.read(DEFAULT_CONFIG)
