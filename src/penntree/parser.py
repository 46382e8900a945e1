"""
    penntree: Penn Treebank trees for Python

    Parser module

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

    This module parses trees in bracketed Penn Treebank notation, e.g.

        ((S (NP this) (VP (V is) (NP (DT a) (NN test)))))

    into ParseTree objects with a Topology and a Label annotation.
    The grammar is stricter than ordinary s-expressions:

        Tree      -> '(' InnerTree ')'
        InnerTree -> '(' ')'
                   | '(' Node ')'
        Node      -> Category (Word | Children)
        Children  -> '(' Node ')' { '(' Node ')' }

    The form (()) is a valid empty tree, which treebanks use to mark
    sentences that have no parse. Nodes are created in pre-order, so
    the root of a parsed tree is node 0.

    Parsing needs one token of lookahead and never backtracks. Nested
    nodes are handled with an explicit stack rather than recursion, so
    that deep trees cannot exhaust the Python call stack.

    Labels are decoded as UTF-8. Bytes that are not valid UTF-8 (e.g.
    in GB-encoded Chinese treebanks) are kept as surrogate escapes, so
    that encoding a label with errors="surrogateescape" gives back the
    original bytes. Errors carry the byte offset of the offending token,
    or of the end of input if the input ended prematurely.

"""

from typing import BinaryIO, Iterator, List, Optional

import io
import logging

from .basics import NO_NODE, InvariantError, NodeId
from .tokenizer import Token, Tokenizer, TokenKind
from .topology import Topology
from .tree import ParseTree


logger = logging.getLogger(__name__)

# Error handler used to decode labels and to encode text for parsing
ENCODING_ERRORS = "surrogateescape"


class ParseError(Exception):

    """Exception class for malformed treebank input"""

    def __init__(self, txt: str, offset: Optional[int] = None) -> None:
        super().__init__(txt)
        self._offset = offset

    @property
    def offset(self) -> Optional[int]:
        """The byte offset in the input where the error was detected"""
        return self._offset

    def __str__(self) -> str:
        s = Exception.__str__(self)
        if self._offset is None:
            return s
        return "{0} at byte offset {1}".format(s, self._offset)


class NoOpenParenError(ParseError):
    def __init__(self, offset: Optional[int] = None) -> None:
        super().__init__("Expected (", offset)


class NoCloseParenError(ParseError):
    def __init__(self, offset: Optional[int] = None) -> None:
        super().__init__("Expected )", offset)


class NoCategoryError(ParseError):
    def __init__(self, offset: Optional[int] = None) -> None:
        super().__init__("Expected category", offset)


class NoWordOrOpenParenError(ParseError):
    def __init__(self, offset: Optional[int] = None) -> None:
        super().__init__("Expected word or (", offset)


class ResidualInputError(ParseError):
    def __init__(self, offset: Optional[int] = None) -> None:
        super().__init__("Residual input after tree", offset)


class Parser:

    """Parses treebank trees from a binary stream, one at a time.
    A Parser is also an iterator over the remaining trees."""

    def __init__(self, stream: BinaryIO) -> None:
        self._tok = Tokenizer(stream)

    def __iter__(self) -> Iterator[ParseTree]:
        return self

    def __next__(self) -> ParseTree:
        try:
            return self.next()
        except EOFError:
            raise StopIteration

    def _next_token(self) -> Optional[Token]:
        """Return the next token, or None at end of input"""
        try:
            return self._tok.next()
        except EOFError:
            return None

    def _peek_token(self) -> Optional[Token]:
        """Return the next token without consuming it, or None at end of input"""
        try:
            return self._tok.peek()
        except EOFError:
            return None

    def _peek_kind(self) -> Optional[TokenKind]:
        tok = self._peek_token()
        return None if tok is None else tok.kind

    def _error_offset(self, tok: Optional[Token]) -> int:
        """The offset of tok, or of the end of input if tok is None"""
        return self._tok.offset if tok is None else tok.offset

    def _expect(self, kind: TokenKind, error: type) -> Token:
        tok = self._next_token()
        if tok is None or tok.kind != kind:
            raise error(self._error_offset(tok))
        return tok

    @staticmethod
    def _label(tok: Token) -> str:
        return tok.text.decode("utf-8", ENCODING_ERRORS)

    def next(self) -> ParseTree:
        """Parse and return the next tree. Raises EOFError if the input
        ends before the first token, ParseError if the tree is malformed,
        and passes any OSError from the stream through."""
        # (
        tok = self._tok.next()
        if tok.kind != TokenKind.OPEN:
            raise NoOpenParenError(tok.offset)
        tree = ParseTree(Topology.empty(), [])
        root = self._parse_inner(tree)
        # )
        self._expect(TokenKind.CLOSE, NoCloseParenError)
        tree.topology.root = root
        return tree

    def check_end(self) -> None:
        """Raise ResidualInputError unless the input has been consumed"""
        tok = self._peek_token()
        if tok is not None:
            raise ResidualInputError(tok.offset)

    def _parse_inner(self, tree: ParseTree) -> NodeId:
        """Parse '(' ')' or '(' Node ')', returning the node created
        for the tree, or NO_NODE for the empty tree"""
        self._expect(TokenKind.OPEN, NoOpenParenError)
        if self._peek_kind() == TokenKind.CLOSE:
            self._tok.next()
            return NO_NODE
        node = self._parse_node(tree)
        self._expect(TokenKind.CLOSE, NoCloseParenError)
        return node

    def _parse_node(self, tree: ParseTree) -> NodeId:
        """Parse Node -> Category (Word | Children), after its opening
        parenthesis, leaving the closing one to the caller. Returns
        the id of the created node."""
        topology = tree.topology
        assert tree.label is not None
        label = tree.label
        # Nodes whose children are being parsed, innermost last
        stack: List[NodeId] = []
        while True:
            # Category
            tok = self._expect(TokenKind.WORD, NoCategoryError)
            node = topology.add_node()
            label.append(self._label(tok))
            # Word or (
            tok = self._peek_token()
            kind = None if tok is None else tok.kind
            if kind == TokenKind.WORD:
                # Pre-terminal
                leaf = topology.add_node()
                label.append(self._label(self._tok.next()))
                topology.append_child(node, leaf)
            elif kind == TokenKind.OPEN:
                # Non-terminal: parse its first child next
                self._tok.next()
                stack.append(node)
                continue
            else:
                raise NoWordOrOpenParenError(self._error_offset(tok))
            # The node is complete: attach it, and every enclosing
            # node that it completes, to its parent
            while stack:
                parent = stack[-1]
                topology.append_child(parent, node)
                self._expect(TokenKind.CLOSE, NoCloseParenError)
                if self._peek_kind() == TokenKind.OPEN:
                    # Another child follows
                    self._tok.next()
                    break
                node = stack.pop()
            else:
                return node


def parse_one(stream: BinaryIO) -> ParseTree:
    """Parse exactly one tree from the stream. Anything but whitespace
    after the tree raises ResidualInputError."""
    p = Parser(stream)
    tree = p.next()
    p.check_end()
    return tree


def parse_all(stream: BinaryIO) -> Iterator[ParseTree]:
    """Generate the trees in the stream until the end of input.
    An empty tree is generated for each (()) form. The first
    malformed tree raises ParseError."""
    count = 0
    for tree in Parser(stream):
        count += 1
        yield tree
    logger.debug("Parsed %d tree(s)", count)


def parse_string(txt: str) -> ParseTree:
    """Parse the first tree in a string, ignoring the rest of it"""
    return Parser(io.BytesIO(txt.encode("utf-8", ENCODING_ERRORS))).next()


def from_text(txt: str) -> ParseTree:
    """Parse exactly one tree from a string, raising InvariantError if
    the string is malformed or has residual input. Meant for literals
    in code and tests, not for untrusted input."""
    try:
        return parse_one(io.BytesIO(txt.encode("utf-8", ENCODING_ERRORS)))
    except (ParseError, EOFError) as e:
        raise InvariantError("Invalid tree {0!r}: {1}".format(txt, e)) from e
